import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from notaps.engine.mastery import MasteryLevel, WordMasteryRecord, record_study
from notaps.repositories.mastery_repository import MasteryRepository
from notaps.repositories.vocabulary_repository import VocabularyRepository

logger = logging.getLogger(__name__)


class MasteryService:
    """单词掌握度服务，负责掌握记录的读取和更新"""

    def __init__(self, db: Session):
        self.db = db
        self.mastery_repo = MasteryRepository(db)
        self.vocabulary_repo = VocabularyRepository(db)
        logger.debug("掌握度服务初始化完成")

    def get_word_mastery(self, word_id: int) -> Optional[WordMasteryRecord]:
        """
        获取单词的掌握记录

        Returns:
            WordMasteryRecord: 从未学习过的单词返回 NEW 状态的新记录；单词不存在返回 None
        """
        if not self.vocabulary_repo.get_by_id(word_id):
            return None

        row = self.mastery_repo.get_by_word_id(word_id)
        if row is None:
            return WordMasteryRecord(word_id=word_id)
        return self.mastery_repo.to_record(row)

    def list_mastery(self, level: Optional[MasteryLevel] = None) -> List[WordMasteryRecord]:
        """获取所有已学习单词的掌握记录"""
        return [self.mastery_repo.to_record(row) for row in self.mastery_repo.get_by_level(level)]

    def record_study(self, word_id: int, correct: bool,
                     pronunciation_score: Optional[float] = None) -> Optional[WordMasteryRecord]:
        """
        记录一次单词学习并保存

        Args:
            word_id: 单词ID
            correct: 是否回答正确
            pronunciation_score: 发音分数（0-100），可选

        Returns:
            WordMasteryRecord: 更新后的记录；单词不存在返回 None

        Raises:
            InvalidInput: 发音分数不合法
        """
        current = self.get_word_mastery(word_id)
        if current is None:
            logger.warning(f"记录学习失败，单词不存在: {word_id}")
            return None

        updated = record_study(current, correct, pronunciation_score)
        self.mastery_repo.save_record(updated)
        logger.info(
            f"单词 {word_id} 学习记录已更新: 第 {updated.study_count} 次, "
            f"正确 {updated.correct_count} 次, 等级 {updated.mastery_level.value}"
        )
        return updated

    def count_mastered(self) -> int:
        """已掌握的单词数"""
        return self.mastery_repo.count_by_level(MasteryLevel.MASTERED)
