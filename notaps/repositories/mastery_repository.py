from typing import Optional, List
from sqlalchemy.orm import Session

from notaps.engine.mastery import MasteryLevel, WordMasteryRecord
from notaps.models.word_mastery import WordMastery
from notaps.repositories.base import BaseRepository
from notaps.utils.helpers import ensure_utc


class MasteryRepository(BaseRepository[WordMastery]):
    def __init__(self, db: Session):
        super().__init__(db, WordMastery)

    def get_by_word_id(self, word_id: int) -> Optional[WordMastery]:
        """根据单词ID获取掌握记录"""
        return self.db.query(WordMastery).filter(WordMastery.word_id == word_id).first()

    def get_by_level(self, level: Optional[MasteryLevel] = None) -> List[WordMastery]:
        """获取掌握记录，可按等级过滤"""
        query = self.db.query(WordMastery)
        if level is not None:
            query = query.filter(WordMastery.mastery_level == level.value)
        return query.order_by(WordMastery.word_id).all()

    def count_by_level(self, level: MasteryLevel) -> int:
        """统计某一掌握等级的单词数"""
        return self.db.query(WordMastery).filter(WordMastery.mastery_level == level.value).count()

    @staticmethod
    def to_record(row: WordMastery) -> WordMasteryRecord:
        """数据库记录 -> 引擎记录"""
        return WordMasteryRecord(
            word_id=row.word_id,
            study_count=row.study_count or 0,
            correct_count=row.correct_count or 0,
            last_studied=ensure_utc(row.last_studied),
            pronunciation_scores=list(row.pronunciation_scores or []),
            mastery_level=MasteryLevel(row.mastery_level or MasteryLevel.NEW.value)
        )

    def save_record(self, record: WordMasteryRecord) -> WordMastery:
        """引擎记录写回数据库（不存在则创建）"""
        row = self.get_by_word_id(record.word_id)
        if row is None:
            row = WordMastery(word_id=record.word_id)
        row.study_count = record.study_count
        row.correct_count = record.correct_count
        row.last_studied = record.last_studied
        row.pronunciation_scores = list(record.pronunciation_scores)
        row.mastery_level = record.mastery_level.value
        return self.save(row)
