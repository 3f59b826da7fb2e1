from typing import Optional, List
from sqlalchemy.orm import Session
from notaps.models.vocabulary import VocabularyWord
from notaps.repositories.base import BaseRepository


class VocabularyRepository(BaseRepository[VocabularyWord]):
    def __init__(self, db: Session):
        super().__init__(db, VocabularyWord)

    def search(self, language: Optional[str] = None, difficulty: Optional[str] = None,
               limit: Optional[int] = None) -> List[VocabularyWord]:
        """按语言、难度过滤词汇"""
        query = self.db.query(VocabularyWord)
        if language:
            query = query.filter(VocabularyWord.language == language)
        if difficulty:
            query = query.filter(VocabularyWord.difficulty == difficulty)
        query = query.order_by(VocabularyWord.id)
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_by_word(self, word: str, language: str) -> Optional[VocabularyWord]:
        """根据单词和语言获取词条"""
        return self.db.query(VocabularyWord).filter(
            VocabularyWord.word == word,
            VocabularyWord.language == language
        ).first()
