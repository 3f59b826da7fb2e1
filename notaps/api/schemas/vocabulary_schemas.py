from typing import Dict, Optional

from notaps.api.schemas.base import CamelModel


class TranslationResponse(CamelModel):
    word: str
    pronunciation: str
    phonetics: Optional[str] = None
    definition: Optional[str] = None
    example: Optional[str] = None


class VocabularyResponse(CamelModel):
    id: int
    word: str
    pronunciation: str
    phonetics: Optional[str] = None
    definition: str
    example: Optional[str] = None
    language: str
    difficulty: str
    category: str
    translations: Dict[str, TranslationResponse] = {}
