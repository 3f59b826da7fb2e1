import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from notaps.utils.database import get_db
from notaps.engine.scorer import InvalidInput
from notaps.services.progress_service import ProgressService
from notaps.api.schemas.progress_schemas import ProgressResponse, ProgressUpdateRequest

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=ProgressResponse)
async def get_progress(db: Session = Depends(get_db)):
    """
    获取整体学习进度
    """
    progress_service = ProgressService(db)
    return progress_service.get_progress()


@router.post("/update", response_model=ProgressResponse)
async def update_progress(update_request: ProgressUpdateRequest, db: Session = Depends(get_db)):
    """
    完成练习后更新学习进度
    """
    try:
        progress_service = ProgressService(db)
        return progress_service.update_progress(
            update_request.lesson,
            update_request.score,
            update_request.time_spent
        )
    except InvalidInput as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"更新学习进度失败: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="更新学习进度失败"
        )
