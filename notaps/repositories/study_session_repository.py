from sqlalchemy.orm import Session

from notaps.engine.study_session import SessionType, StudySession
from notaps.models.study_session import StudySessionRecord
from notaps.repositories.base import BaseRepository
from notaps.utils.helpers import ensure_utc


class StudySessionRepository(BaseRepository[StudySessionRecord]):
    def __init__(self, db: Session):
        super().__init__(db, StudySessionRecord)

    @staticmethod
    def to_session(row: StudySessionRecord) -> StudySession:
        """数据库记录 -> 会话对象"""
        return StudySession(
            session_type=SessionType(row.session_type),
            start_time=ensure_utc(row.start_time),
            end_time=ensure_utc(row.end_time),
            words_studied=list(row.words_studied or []),
            correct_answers=row.correct_answers or 0,
            total_answers=row.total_answers or 0,
            scored_answers=row.scored_answers or 0,
            average_pronunciation_score=row.average_pronunciation_score or 0.0
        )

    def apply_session(self, row: StudySessionRecord, session: StudySession) -> StudySessionRecord:
        """会话对象写回数据库"""
        row.end_time = session.end_time
        row.words_studied = list(session.words_studied)
        row.correct_answers = session.correct_answers
        row.total_answers = session.total_answers
        row.scored_answers = session.scored_answers
        row.average_pronunciation_score = session.average_pronunciation_score
        return self.save(row)
