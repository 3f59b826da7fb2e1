import logging
from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

import pytz

from notaps.engine.mastery import validate_pronunciation_score
from notaps.engine.scorer import InvalidInput

logger = logging.getLogger(__name__)


class SessionType(Enum):
    """学习会话类型"""
    VOCABULARY = "vocabulary"        # 语汇学习
    PRONUNCIATION = "pronunciation"  # 发音练习
    MIXED = "mixed"                  # 综合学习
    REVIEW = "review"                # 复习


class SessionClosed(InvalidInput):
    """会话已结束，不能继续作答"""


@dataclass
class StudySession:
    """一次学习会话的统计数据"""
    session_type: SessionType
    start_time: datetime = field(default_factory=lambda: datetime.now(pytz.utc))
    end_time: Optional[datetime] = None
    words_studied: List[Any] = field(default_factory=list)
    correct_answers: int = 0
    total_answers: int = 0
    scored_answers: int = 0
    average_pronunciation_score: float = 0.0

    @property
    def is_finished(self) -> bool:
        return self.end_time is not None

    @property
    def accuracy(self) -> float:
        if self.total_answers <= 0:
            return 0.0
        return self.correct_answers / self.total_answers

    def duration(self, now: Optional[datetime] = None) -> float:
        """会话时长（秒），未结束的会话计算到当前时间"""
        end = self.end_time or now or datetime.now(pytz.utc)
        return (end - self.start_time).total_seconds()

    def record_answer(self, correct: bool, pronunciation_score: Optional[float] = None,
                      word_id: Any = None) -> None:
        """
        记录一次作答

        Args:
            correct: 是否回答正确
            pronunciation_score: 发音分数（0-100），可选
            word_id: 作答的单词，可选；同一单词只记录一次
        """
        if self.is_finished:
            raise SessionClosed("学习会话已结束")

        if pronunciation_score is not None:
            value = validate_pronunciation_score(pronunciation_score)
            total = self.average_pronunciation_score * self.scored_answers
            self.scored_answers += 1
            self.average_pronunciation_score = (total + value) / self.scored_answers

        self.total_answers += 1
        if correct:
            self.correct_answers += 1

        if word_id is not None and word_id not in self.words_studied:
            self.words_studied.append(word_id)

    def end_session(self, now: Optional[datetime] = None) -> None:
        """结束会话，重复结束不会改变结束时间"""
        if self.is_finished:
            return
        self.end_time = now or datetime.now(pytz.utc)
        logger.info(
            f"学习会话结束: 类型 {self.session_type.value}, "
            f"作答 {self.total_answers} 次, 正确率 {self.accuracy:.2f}"
        )
