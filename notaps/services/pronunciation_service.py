import logging
from typing import Optional, Tuple
from sqlalchemy.orm import Session

from notaps.config.settings import settings
from notaps.engine.mastery import WordMasteryRecord
from notaps.engine.scorer import PronunciationResult, score
from notaps.services.mastery_service import MasteryService

logger = logging.getLogger(__name__)


class PronunciationService:
    """发音练习服务：评分，并可将结果计入单词掌握度"""

    def __init__(self, db: Session):
        self.db = db
        self.mastery_service = MasteryService(db)
        logger.debug("发音练习服务初始化完成")

    def evaluate(self, target_text: str, spoken_text: str, confidence: float = 0.0,
                 word_id: Optional[int] = None) -> Tuple[PronunciationResult, Optional[WordMasteryRecord]]:
        """
        对发音进行评分

        Args:
            target_text: 目标文本
            spoken_text: 识别出的文本
            confidence: 识别置信度
            word_id: 单词ID，提供时评分结果计为该单词的一次学习

        Returns:
            Tuple: (评分结果, 更新后的掌握记录或 None)

        Raises:
            InvalidInput: 文本缺失
        """
        result = score(target_text, spoken_text, confidence, locale=settings.FEEDBACK_LOCALE)
        logger.info(f"发音评分完成: {target_text!r} -> {result.accuracy:.1f} ({result.grade.value})")

        mastery = None
        if word_id is not None:
            correct = result.accuracy >= settings.PASSING_ACCURACY
            mastery = self.mastery_service.record_study(word_id, correct, result.accuracy)

        return result, mastery
