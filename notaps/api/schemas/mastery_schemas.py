from datetime import datetime
from typing import List, Optional

from notaps.api.schemas.base import CamelModel


class StudyRequest(CamelModel):
    correct: bool
    pronunciation_score: Optional[float] = None


class MasteryResponse(CamelModel):
    word_id: int
    study_count: int
    correct_count: int
    last_studied: Optional[datetime] = None
    pronunciation_scores: List[float]
    mastery_level: str
    accuracy: float
    average_pronunciation_score: float
