import math
import logging
from enum import Enum
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytz

from notaps.engine.scorer import InvalidInput

logger = logging.getLogger(__name__)


"""
单词掌握度追踪
每个单词一条记录，通过 record_study 接收一次学习结果（是否正确、可选的发音分数），
维护学习次数、正确次数、最近 10 次发音分数窗口，并据此重新计算掌握等级。
"""

# 发音分数滚动窗口容量（先进先出）
PRONUNCIATION_WINDOW_SIZE = 10

MIN_SCORE = 0.0
MAX_SCORE = 100.0

# 已掌握：学习次数、正确率、平均发音分数
MASTERED_MIN_STUDIES = 5
MASTERED_MIN_ACCURACY = 0.9
MASTERED_MIN_PRONUNCIATION = 80.0

# 习得中
LEARNING_MIN_STUDIES = 3
LEARNING_MIN_ACCURACY = 0.7
LEARNING_MIN_PRONUNCIATION = 60.0


class MasteryLevel(Enum):
    """掌握等级"""
    NEW = "new"              # 新词，从未学习
    STUDYING = "studying"    # 学习中
    LEARNING = "learning"    # 习得中
    MASTERED = "mastered"    # 已掌握


@dataclass
class WordMasteryRecord:
    """单词掌握记录"""
    word_id: Any
    study_count: int = 0
    correct_count: int = 0
    last_studied: Optional[datetime] = None
    pronunciation_scores: List[float] = field(default_factory=list)
    mastery_level: MasteryLevel = MasteryLevel.NEW

    @property
    def accuracy(self) -> float:
        if self.study_count <= 0:
            return 0.0
        return self.correct_count / self.study_count

    @property
    def average_pronunciation_score(self) -> float:
        if not self.pronunciation_scores:
            return 0.0
        return sum(self.pronunciation_scores) / len(self.pronunciation_scores)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word_id": self.word_id,
            "study_count": self.study_count,
            "correct_count": self.correct_count,
            "last_studied": self.last_studied.isoformat() if self.last_studied else None,
            "pronunciation_scores": list(self.pronunciation_scores),
            "mastery_level": self.mastery_level.value,
            "accuracy": self.accuracy,
            "average_pronunciation_score": self.average_pronunciation_score
        }


def mastery_level_for(study_count: int, accuracy: float,
                      average_pronunciation_score: float) -> MasteryLevel:
    """
    根据学习统计计算掌握等级，从最严格的等级开始判断

    Args:
        study_count: 学习次数
        accuracy: 正确率（0-1）
        average_pronunciation_score: 窗口内平均发音分数（0-100）

    Returns:
        MasteryLevel: 掌握等级，至少学习过一次的单词最低为 STUDYING
    """
    if (study_count >= MASTERED_MIN_STUDIES
            and accuracy >= MASTERED_MIN_ACCURACY
            and average_pronunciation_score >= MASTERED_MIN_PRONUNCIATION):
        return MasteryLevel.MASTERED
    if (study_count >= LEARNING_MIN_STUDIES
            and accuracy >= LEARNING_MIN_ACCURACY
            and average_pronunciation_score >= LEARNING_MIN_PRONUNCIATION):
        return MasteryLevel.LEARNING
    return MasteryLevel.STUDYING


def validate_pronunciation_score(pronunciation_score) -> float:
    """发音分数必须是 0-100 之间的有限数值"""
    if isinstance(pronunciation_score, bool) or not isinstance(pronunciation_score, (int, float)):
        raise InvalidInput("发音分数必须是数值")
    value = float(pronunciation_score)
    if math.isnan(value) or not MIN_SCORE <= value <= MAX_SCORE:
        raise InvalidInput(f"发音分数超出范围 [{MIN_SCORE:g}, {MAX_SCORE:g}]: {pronunciation_score}")
    return value


def record_study(record: WordMasteryRecord, correct: bool,
                 pronunciation_score: Optional[float] = None,
                 now: Optional[datetime] = None) -> WordMasteryRecord:
    """
    记录一次学习，返回更新后的新记录（不修改传入的记录）

    Args:
        record: 当前掌握记录
        correct: 本次是否回答正确
        pronunciation_score: 本次发音分数（0-100），可选
        now: 学习时间，默认当前 UTC 时间

    Returns:
        WordMasteryRecord: 更新后的记录

    Raises:
        InvalidInput: 记录为空或发音分数不合法
    """
    if record is None:
        raise InvalidInput("掌握记录不能为空")

    scores = list(record.pronunciation_scores)
    if pronunciation_score is not None:
        scores.append(validate_pronunciation_score(pronunciation_score))
        # 超出窗口容量时淘汰最早的分数
        scores = scores[-PRONUNCIATION_WINDOW_SIZE:]

    updated = replace(
        record,
        study_count=record.study_count + 1,
        correct_count=record.correct_count + (1 if correct else 0),
        last_studied=now or datetime.now(pytz.utc),
        pronunciation_scores=scores
    )
    updated.mastery_level = mastery_level_for(
        updated.study_count, updated.accuracy, updated.average_pronunciation_score
    )

    if updated.mastery_level != record.mastery_level:
        logger.info(
            f"单词 {record.word_id} 掌握等级变化: "
            f"{record.mastery_level.value} -> {updated.mastery_level.value}"
        )
    return updated
