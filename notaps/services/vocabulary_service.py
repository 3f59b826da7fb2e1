import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notaps.engine.scorer import InvalidInput
from notaps.models.vocabulary import DIFFICULTY_LEVELS, LANGUAGE_CODES, VocabularyWord
from notaps.repositories.vocabulary_repository import VocabularyRepository

logger = logging.getLogger(__name__)

# 数据库不可用时返回的兜底词汇，保证前端始终有内容可展示
FALLBACK_VOCABULARY: List[Dict[str, Any]] = [
    {
        "id": 1,
        "word": "hello",
        "pronunciation": "həˈloʊ",
        "phonetics": None,
        "definition": "a greeting",
        "example": None,
        "language": "en",
        "difficulty": "beginner",
        "category": "greetings",
        "translations": {
            "ja": {"word": "こんにちは", "pronunciation": "konnichiwa"}
        }
    }
]

# 查询参数为 "all" 时表示不过滤
ALL = "all"


class VocabularyService:
    """词汇服务，负责词汇的查询"""

    def __init__(self, db: Session):
        self.db = db
        self.vocabulary_repo = VocabularyRepository(db)
        logger.debug("词汇服务初始化完成")

    def get_vocabulary(self, language: Optional[str] = None, difficulty: Optional[str] = None,
                       limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        获取词汇列表

        Args:
            language: 语言代码，None 或 "all" 不过滤
            difficulty: 难度，None 或 "all" 不过滤
            limit: 最大返回条数

        Returns:
            List[Dict]: 词汇列表；数据库不可用时返回兜底词汇

        Raises:
            InvalidInput: 未知的语言代码或难度
        """
        language = None if language == ALL else language
        difficulty = None if difficulty == ALL else difficulty

        if language is not None and language not in LANGUAGE_CODES:
            raise InvalidInput(f"未知的语言代码: {language}")
        if difficulty is not None and difficulty not in DIFFICULTY_LEVELS:
            raise InvalidInput(f"未知的难度: {difficulty}")

        try:
            words = self.vocabulary_repo.search(language, difficulty, limit)
            return [word.to_dict() for word in words]
        except SQLAlchemyError as e:
            logger.warning(f"获取词汇失败，返回兜底词汇: {e}")
            self.db.rollback()
            fallback = [dict(entry) for entry in FALLBACK_VOCABULARY]
            return fallback[:limit] if limit else fallback

    def get_word(self, word_id: int) -> Optional[VocabularyWord]:
        """根据ID获取词条"""
        return self.vocabulary_repo.get_by_id(word_id)
