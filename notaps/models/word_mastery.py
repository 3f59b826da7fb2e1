from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, JSON
from sqlalchemy.orm import relationship

from notaps.engine.mastery import MasteryLevel
from .base import BaseModel


"""
单词掌握度模型
每个单词一条记录，保存学习次数、正确次数、最后学习时间、最近 10 次发音分数和掌握等级。
掌握等级只由掌握度引擎计算后写回，不直接修改。
"""


class WordMastery(BaseModel):
    __tablename__ = "word_mastery"

    word_id = Column(Integer, ForeignKey("vocabulary_words.id"), unique=True, nullable=False, index=True)
    study_count = Column(Integer, default=0, nullable=False)
    correct_count = Column(Integer, default=0, nullable=False)
    last_studied = Column(DateTime(timezone=True))
    pronunciation_scores = Column(JSON, default=list)
    mastery_level = Column(String(20), default=MasteryLevel.NEW.value, nullable=False)  # new, studying, learning, mastered

    word = relationship("VocabularyWord", backref="mastery")
