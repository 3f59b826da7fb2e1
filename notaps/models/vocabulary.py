from sqlalchemy import Column, String, Text, JSON
from .base import BaseModel


"""
词汇模型
存储单词、读音、音标、释义、例句、所属语言、难度、分类以及各语言的翻译。
translations 格式: {"ja": {"word": ..., "pronunciation": ..., "definition": ...}, ...}
"""

LANGUAGE_CODES = ("en", "ja", "ko", "fr", "zh")
DIFFICULTY_LEVELS = ("beginner", "intermediate", "advanced")


class VocabularyWord(BaseModel):
    __tablename__ = "vocabulary_words"

    word = Column(String(100), nullable=False, index=True)
    pronunciation = Column(String(100), nullable=False)
    phonetics = Column(String(100))
    definition = Column(Text, nullable=False)
    example = Column(Text)
    language = Column(String(10), nullable=False, default="en")          # en, ja, ko, fr, zh
    difficulty = Column(String(20), nullable=False, default="beginner")  # beginner, intermediate, advanced
    category = Column(String(50), nullable=False)
    translations = Column(JSON, default=dict)

    def to_dict(self):
        return {
            "id": self.id,
            "word": self.word,
            "pronunciation": self.pronunciation,
            "phonetics": self.phonetics,
            "definition": self.definition,
            "example": self.example,
            "language": self.language,
            "difficulty": self.difficulty,
            "category": self.category,
            "translations": self.translations or {}
        }
