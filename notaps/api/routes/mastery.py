import logging
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from notaps.utils.database import get_db
from notaps.engine.mastery import MasteryLevel
from notaps.engine.scorer import InvalidInput
from notaps.services.mastery_service import MasteryService
from notaps.api.schemas.mastery_schemas import MasteryResponse, StudyRequest

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[MasteryResponse])
async def list_mastery(
    level: Optional[MasteryLevel] = Query(None, description="掌握等级"),
    db: Session = Depends(get_db)
):
    """
    获取所有已学习单词的掌握记录
    """
    mastery_service = MasteryService(db)
    return [record.to_dict() for record in mastery_service.list_mastery(level)]


@router.get("/{word_id}", response_model=MasteryResponse)
async def get_word_mastery(word_id: int, db: Session = Depends(get_db)):
    """
    获取单词的掌握记录
    """
    mastery_service = MasteryService(db)
    record = mastery_service.get_word_mastery(word_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="单词不存在"
        )
    return record.to_dict()


@router.post("/{word_id}/study", response_model=MasteryResponse)
async def record_study(word_id: int, study_request: StudyRequest, db: Session = Depends(get_db)):
    """
    记录一次单词学习
    """
    try:
        mastery_service = MasteryService(db)
        record = mastery_service.record_study(
            word_id, study_request.correct, study_request.pronunciation_score
        )
        if record is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="单词不存在"
            )
        return record.to_dict()
    except HTTPException:
        raise
    except InvalidInput as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"记录单词学习失败: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="记录单词学习失败"
        )
