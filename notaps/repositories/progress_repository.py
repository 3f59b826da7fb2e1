from sqlalchemy.orm import Session

from notaps.models.learning_progress import LearningProgress, DEFAULT_PROGRESS
from notaps.repositories.base import BaseRepository


class ProgressRepository(BaseRepository[LearningProgress]):
    def __init__(self, db: Session):
        super().__init__(db, LearningProgress)

    def get_or_create(self) -> LearningProgress:
        """获取唯一的进度记录，不存在时按默认值创建"""
        progress = self.db.query(LearningProgress).order_by(LearningProgress.id).first()
        if progress is None:
            progress = self.create(**DEFAULT_PROGRESS)
        return progress
