from sqlalchemy import Column, Integer, Float
from .base import BaseModel


"""
整体学习进度模型
单行记录：当前等级、完成课程数、最佳发音分数、已掌握单词数、累计学习时长（分钟）、连续学习天数。
"""

DEFAULT_PROGRESS = {
    "current_level": 1,
    "completed_lessons": 0,
    "pronunciation_score": 0.0,
    "vocabulary_mastered": 0,
    "total_study_time": 0,
    "streak_days": 0
}


class LearningProgress(BaseModel):
    __tablename__ = "learning_progress"

    current_level = Column(Integer, default=1, nullable=False)
    completed_lessons = Column(Integer, default=0, nullable=False)
    pronunciation_score = Column(Float, default=0.0, nullable=False)
    vocabulary_mastered = Column(Integer, default=0, nullable=False)
    total_study_time = Column(Integer, default=0, nullable=False)  # 分钟
    streak_days = Column(Integer, default=0, nullable=False)

    def to_dict(self):
        return {
            "current_level": self.current_level,
            "completed_lessons": self.completed_lessons,
            "pronunciation_score": self.pronunciation_score,
            "vocabulary_mastered": self.vocabulary_mastered,
            "total_study_time": self.total_study_time,
            "streak_days": self.streak_days
        }
