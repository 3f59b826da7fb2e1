from datetime import datetime
from typing import List, Optional

from notaps.api.schemas.base import CamelModel
from notaps.engine.study_session import SessionType


class SessionCreateRequest(CamelModel):
    session_type: SessionType = SessionType.MIXED


class AnswerRequest(CamelModel):
    correct: bool
    pronunciation_score: Optional[float] = None
    word_id: Optional[int] = None


class SessionResponse(CamelModel):
    id: int
    session_type: str
    start_time: datetime
    end_time: Optional[datetime] = None
    words_studied: List[int]
    correct_answers: int
    total_answers: int
    average_pronunciation_score: float
    accuracy: float
    duration: float
