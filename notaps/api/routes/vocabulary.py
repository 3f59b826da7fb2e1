import logging
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from notaps.utils.database import get_db
from notaps.engine.scorer import InvalidInput
from notaps.services.vocabulary_service import VocabularyService
from notaps.api.schemas.vocabulary_schemas import VocabularyResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[VocabularyResponse])
async def get_vocabulary(
    language: Optional[str] = Query(None, description="语言代码，all 表示全部"),
    difficulty: Optional[str] = Query(None, description="难度，all 表示全部"),
    limit: Optional[int] = Query(None, description="最大返回条数", ge=1, le=100),
    db: Session = Depends(get_db)
):
    """
    获取词汇列表
    """
    try:
        vocabulary_service = VocabularyService(db)
        return vocabulary_service.get_vocabulary(language, difficulty, limit)
    except InvalidInput as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.get("/{word_id}", response_model=VocabularyResponse)
async def get_word(word_id: int, db: Session = Depends(get_db)):
    """
    根据ID获取词条
    """
    vocabulary_service = VocabularyService(db)
    word = vocabulary_service.get_word(word_id)
    if not word:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="单词不存在"
        )
    return word.to_dict()
