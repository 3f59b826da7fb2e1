from typing import Optional
from pydantic import Field

from notaps.api.schemas.base import CamelModel
from notaps.api.schemas.mastery_schemas import MasteryResponse


class PronunciationRequest(CamelModel):
    # 允许为 null，由评分引擎统一报 InvalidInput
    target_text: Optional[str] = None
    spoken_text: Optional[str] = None
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    word_id: Optional[int] = None


class PronunciationResponse(CamelModel):
    target_text: str
    spoken_text: str
    accuracy: int
    grade: str
    feedback: str
    confidence: float
    mastery: Optional[MasteryResponse] = None
