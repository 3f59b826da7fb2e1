import logging
from typing import Any, Dict, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notaps.config.settings import settings
from notaps.engine.mastery import validate_pronunciation_score
from notaps.models.learning_progress import DEFAULT_PROGRESS
from notaps.repositories.progress_repository import ProgressRepository
from notaps.services.mastery_service import MasteryService

logger = logging.getLogger(__name__)


class ProgressService:
    """整体学习进度服务"""

    def __init__(self, db: Session):
        self.db = db
        self.progress_repo = ProgressRepository(db)
        self.mastery_service = MasteryService(db)
        logger.debug("学习进度服务初始化完成")

    def _to_dict(self, progress) -> Dict[str, Any]:
        data = progress.to_dict()
        data["vocabulary_mastered"] = self.mastery_service.count_mastered()
        return data

    def get_progress(self) -> Dict[str, Any]:
        """获取学习进度；数据库不可用时返回默认进度"""
        try:
            return self._to_dict(self.progress_repo.get_or_create())
        except SQLAlchemyError as e:
            logger.warning(f"获取学习进度失败，返回默认进度: {e}")
            self.db.rollback()
            return dict(DEFAULT_PROGRESS)

    def update_progress(self, lesson: Optional[str], score: Optional[float],
                        time_spent: Optional[int] = None) -> Dict[str, Any]:
        """
        完成一次练习后更新进度

        Args:
            lesson: 练习类型（如 "pronunciation"）
            score: 本次得分，高于历史最佳时更新最佳发音分数
            time_spent: 学习时长（分钟），缺省按 DEFAULT_TIME_SPENT 计算

        Returns:
            Dict: 更新后的进度

        Raises:
            InvalidInput: 得分不是 0-100 之间的有限数值
        """
        if score is not None:
            score = validate_pronunciation_score(score)

        progress = self.progress_repo.get_or_create()

        if score is not None and score > progress.pronunciation_score:
            progress.pronunciation_score = score
        progress.vocabulary_mastered = self.mastery_service.count_mastered()
        progress.completed_lessons += 1
        progress.total_study_time += time_spent or settings.DEFAULT_TIME_SPENT

        progress = self.progress_repo.save(progress)
        logger.info(
            f"学习进度已更新: 练习 {lesson}, 完成 {progress.completed_lessons} 次, "
            f"最佳发音 {progress.pronunciation_score}"
        )
        return self._to_dict(progress)
