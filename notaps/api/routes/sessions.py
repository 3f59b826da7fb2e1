import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from notaps.utils.database import get_db
from notaps.engine.scorer import InvalidInput
from notaps.engine.study_session import SessionClosed
from notaps.services.study_session_service import StudySessionService, WordNotFound
from notaps.api.schemas.session_schemas import SessionCreateRequest, AnswerRequest, SessionResponse

logger = logging.getLogger(__name__)
router = APIRouter()


def _session_not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="学习会话不存在"
    )


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(create_request: SessionCreateRequest, db: Session = Depends(get_db)):
    """
    开始新的学习会话
    """
    session_service = StudySessionService(db)
    return session_service.create_session(create_request.session_type)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: int, db: Session = Depends(get_db)):
    """
    获取学习会话详情
    """
    session_service = StudySessionService(db)
    session = session_service.get_session(session_id)
    if not session:
        raise _session_not_found()
    return session


@router.post("/{session_id}/answers", response_model=SessionResponse)
async def record_answer(session_id: int, answer_request: AnswerRequest, db: Session = Depends(get_db)):
    """
    在会话中记录一次作答
    """
    try:
        session_service = StudySessionService(db)
        session = session_service.record_answer(
            session_id,
            answer_request.correct,
            answer_request.pronunciation_score,
            answer_request.word_id
        )
        if not session:
            raise _session_not_found()
        return session
    except HTTPException:
        raise
    except SessionClosed as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    except InvalidInput as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except WordNotFound as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"记录作答失败: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="记录作答失败"
        )


@router.post("/{session_id}/end", response_model=SessionResponse)
async def end_session(session_id: int, db: Session = Depends(get_db)):
    """
    结束学习会话
    """
    session_service = StudySessionService(db)
    session = session_service.end_session(session_id)
    if not session:
        raise _session_not_found()
    return session
