import logging
import unicodedata
from enum import Enum
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


"""
发音评分引擎
将语音识别得到的文本与目标单词进行比较，基于编辑距离计算相似度，
得出准确率、等级以及反馈文案。纯函数，不依赖任何外部服务。
"""


class InvalidInput(ValueError):
    """评分或学习记录的输入不合法"""


class Grade(Enum):
    """发音等级"""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


# 等级分段（从高到低依次判断，左闭右开，A 段包含 100）
GRADE_BANDS = (
    (90.0, Grade.A),
    (80.0, Grade.B),
    (70.0, Grade.C),
    (60.0, Grade.D),
)

FEEDBACK_MESSAGES: Dict[str, Dict[Grade, str]] = {
    "ja": {
        Grade.A: "完璧です！素晴らしい発音ですね。",
        Grade.B: "とても良い発音です。少し練習すればさらに良くなります。",
        Grade.C: "良い発音です。もう少し練習してみましょう。",
        Grade.D: "まずまずの発音です。もう一度挑戦してみてください。",
        Grade.F: "もう一度ゆっくり発音してみてください。",
    },
    "en": {
        Grade.A: "Perfect! Excellent pronunciation.",
        Grade.B: "Very good pronunciation. A little more practice and it will be even better.",
        Grade.C: "Good pronunciation. Let's practice a bit more.",
        Grade.D: "Fair pronunciation. Please try once more.",
        Grade.F: "Please try saying it again slowly.",
    },
}

DEFAULT_LOCALE = "ja"


@dataclass(frozen=True)
class PronunciationResult:
    """单次评分结果，生成后不可修改"""
    target_text: str
    spoken_text: str
    accuracy: float
    confidence: float
    grade: Grade
    feedback: str


def _is_trimmable(char: str) -> bool:
    return char.isspace() or unicodedata.category(char).startswith("P")


def normalize_text(text: str) -> str:
    """小写化，并去掉首尾的空白和标点（兼容全角标点）"""
    text = text.lower()
    start, end = 0, len(text)
    while start < end and _is_trimmable(text[start]):
        start += 1
    while end > start and _is_trimmable(text[end - 1]):
        end -= 1
    return text[start:end]


def edit_distance(source: str, target: str) -> int:
    """
    计算两个字符串的编辑距离（Levenshtein）

    Args:
        source: 第一个字符串
        target: 第二个字符串

    Returns:
        int: 插入、删除、替换单个字符的最少次数
    """
    n, m = len(source), len(target)
    matrix: List[List[int]] = [[0] * (m + 1) for _ in range(n + 1)]

    for i in range(n + 1):
        matrix[i][0] = i
    for j in range(m + 1):
        matrix[0][j] = j

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            cost = 0 if source[i - 1] == target[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,         # 删除
                matrix[i][j - 1] + 1,         # 插入
                matrix[i - 1][j - 1] + cost,  # 替换
            )

    return matrix[n][m]


def calculate_similarity(target: str, spoken: str) -> float:
    """基于编辑距离的相似度，取值范围 [0, 1]"""
    target_norm = normalize_text(target)
    spoken_norm = normalize_text(spoken)

    if target_norm == spoken_norm:
        return 1.0

    max_length = max(len(target_norm), len(spoken_norm))
    if max_length == 0:
        return 1.0

    distance = edit_distance(target_norm, spoken_norm)
    return max(0.0, 1.0 - distance / max_length)


def grade_for_accuracy(accuracy: float) -> Grade:
    """根据准确率获取等级"""
    for lower_bound, grade in GRADE_BANDS:
        if accuracy >= lower_bound:
            return grade
    return Grade.F


def feedback_for_accuracy(accuracy: float, locale: str = DEFAULT_LOCALE) -> str:
    """根据准确率获取反馈文案，未知语言回退到默认语言"""
    messages = FEEDBACK_MESSAGES.get(locale, FEEDBACK_MESSAGES[DEFAULT_LOCALE])
    return messages[grade_for_accuracy(accuracy)]


def _require_text(value, field_name: str) -> str:
    if value is None:
        raise InvalidInput(f"{field_name} 不能为空")
    if not isinstance(value, str):
        raise InvalidInput(f"{field_name} 必须是字符串")
    return value


def score(target: str, spoken: str, confidence: float = 0.0,
          locale: Optional[str] = None) -> PronunciationResult:
    """
    对用户的发音文本进行评分

    Args:
        target: 目标单词或短语，不能为空
        spoken: 语音识别得到的文本，空字符串视为错误回答
        confidence: 识别置信度，原样透传
        locale: 反馈文案语言

    Returns:
        PronunciationResult: 评分结果

    Raises:
        InvalidInput: 目标文本或识别文本缺失
    """
    target = _require_text(target, "target")
    spoken = _require_text(spoken, "spoken")
    if target == "":
        raise InvalidInput("target 不能为空字符串")

    # 消除浮点误差，保证 0.7 这类相似度落在正确的等级分段
    accuracy = round(calculate_similarity(target, spoken) * 100, 6)
    grade = grade_for_accuracy(accuracy)
    result = PronunciationResult(
        target_text=target,
        spoken_text=spoken,
        accuracy=accuracy,
        confidence=confidence,
        grade=grade,
        feedback=feedback_for_accuracy(accuracy, locale or DEFAULT_LOCALE)
    )
    logger.debug(f"发音评分: {target!r} vs {spoken!r} -> {accuracy:.1f} ({grade.value})")
    return result
