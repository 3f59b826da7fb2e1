from sqlalchemy import Column, String, Integer, Float, DateTime, JSON
from datetime import datetime
import pytz

from .base import BaseModel


"""
学习会话模型
记录一次学习会话的类型、开始/结束时间、学习过的单词、作答次数、正确次数和平均发音分数。
"""


class StudySessionRecord(BaseModel):
    __tablename__ = "study_sessions"

    session_type = Column(String(20), nullable=False)  # vocabulary, pronunciation, mixed, review
    start_time = Column(DateTime(timezone=True), default=lambda: datetime.now(pytz.utc))
    end_time = Column(DateTime(timezone=True))
    words_studied = Column(JSON, default=list)
    correct_answers = Column(Integer, default=0, nullable=False)
    total_answers = Column(Integer, default=0, nullable=False)
    scored_answers = Column(Integer, default=0, nullable=False)
    average_pronunciation_score = Column(Float, default=0.0, nullable=False)
