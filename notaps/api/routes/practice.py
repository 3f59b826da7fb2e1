import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from notaps.utils.database import get_db
from notaps.utils.helpers import round_half_up
from notaps.engine.scorer import InvalidInput
from notaps.services.pronunciation_service import PronunciationService
from notaps.api.schemas.practice_schemas import PronunciationRequest, PronunciationResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/pronunciation", response_model=PronunciationResponse)
async def practice_pronunciation(practice_request: PronunciationRequest, db: Session = Depends(get_db)):
    """
    发音练习评分
    - 提供 wordId 时，评分结果同时计入该单词的掌握度
    """
    try:
        pronunciation_service = PronunciationService(db)
        result, mastery = pronunciation_service.evaluate(
            practice_request.target_text,
            practice_request.spoken_text,
            practice_request.confidence,
            practice_request.word_id
        )
        if practice_request.word_id is not None and mastery is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="单词不存在"
            )

        return {
            "target_text": result.target_text,
            "spoken_text": result.spoken_text,
            "accuracy": round_half_up(result.accuracy),
            "grade": result.grade.value,
            "feedback": result.feedback,
            "confidence": result.confidence,
            "mastery": mastery.to_dict() if mastery else None
        }
    except HTTPException:
        raise
    except InvalidInput as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"发音评分失败: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="发音评分失败"
        )
