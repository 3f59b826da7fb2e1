import logging
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session

from notaps.engine.study_session import SessionType, StudySession
from notaps.models.study_session import StudySessionRecord
from notaps.repositories.study_session_repository import StudySessionRepository
from notaps.services.mastery_service import MasteryService

logger = logging.getLogger(__name__)


class WordNotFound(LookupError):
    """作答的单词不存在"""


class StudySessionService:
    """学习会话服务"""

    def __init__(self, db: Session):
        self.db = db
        self.session_repo = StudySessionRepository(db)
        self.mastery_service = MasteryService(db)
        logger.debug("学习会话服务初始化完成")

    def _to_dict(self, row: StudySessionRecord) -> Dict[str, Any]:
        session = self.session_repo.to_session(row)
        return {
            "id": row.id,
            "session_type": session.session_type.value,
            "start_time": session.start_time,
            "end_time": session.end_time,
            "words_studied": session.words_studied,
            "correct_answers": session.correct_answers,
            "total_answers": session.total_answers,
            "average_pronunciation_score": session.average_pronunciation_score,
            "accuracy": session.accuracy,
            "duration": session.duration()
        }

    def create_session(self, session_type: SessionType) -> Dict[str, Any]:
        """开始新的学习会话"""
        session = StudySession(session_type=session_type)
        row = self.session_repo.create(
            session_type=session.session_type.value,
            start_time=session.start_time,
            words_studied=[]
        )
        logger.info(f"创建学习会话: {row.id}, 类型 {session_type.value}")
        return self._to_dict(row)

    def get_session(self, session_id: int) -> Optional[Dict[str, Any]]:
        """获取会话信息"""
        row = self.session_repo.get_by_id(session_id)
        return self._to_dict(row) if row else None

    def record_answer(self, session_id: int, correct: bool,
                      pronunciation_score: Optional[float] = None,
                      word_id: Optional[int] = None) -> Optional[Dict[str, Any]]:
        """
        在会话中记录一次作答，提供 word_id 时同时更新该单词的掌握度

        Returns:
            Dict: 更新后的会话；会话不存在返回 None

        Raises:
            SessionClosed: 会话已结束
            InvalidInput: 发音分数不合法
            WordNotFound: 单词不存在
        """
        row = self.session_repo.get_by_id(session_id)
        if not row:
            return None

        session = self.session_repo.to_session(row)
        session.record_answer(correct, pronunciation_score, word_id)

        if word_id is not None:
            if self.mastery_service.record_study(word_id, correct, pronunciation_score) is None:
                raise WordNotFound(f"单词不存在: {word_id}")

        row = self.session_repo.apply_session(row, session)
        logger.debug(f"会话 {session_id} 记录作答: correct={correct}, score={pronunciation_score}")
        return self._to_dict(row)

    def end_session(self, session_id: int) -> Optional[Dict[str, Any]]:
        """结束会话"""
        row = self.session_repo.get_by_id(session_id)
        if not row:
            return None

        session = self.session_repo.to_session(row)
        session.end_session()
        row = self.session_repo.apply_session(row, session)
        return self._to_dict(row)
