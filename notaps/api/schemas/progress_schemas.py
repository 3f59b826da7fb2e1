from typing import Optional
from pydantic import Field

from notaps.api.schemas.base import CamelModel


class ProgressResponse(CamelModel):
    current_level: int
    completed_lessons: int
    pronunciation_score: float
    vocabulary_mastered: int
    total_study_time: int
    streak_days: int


class ProgressUpdateRequest(CamelModel):
    lesson: Optional[str] = None
    score: Optional[float] = None
    time_spent: Optional[int] = Field(None, ge=0)
