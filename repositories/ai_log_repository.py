"""
AI Log Repository - audit trail of generative-model calls
"""

from typing import List, Optional, Tuple
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository, paginate
from domain.models import AIAnalysisLog
from domain.enums import AnalysisType


class AILogRepository(BaseRepository[AIAnalysisLog]):
    def __init__(self, db: Session):
        super().__init__(db, AIAnalysisLog)

    def search(
        self,
        page: int,
        limit: int,
        analysis_type: Optional[AnalysisType] = None,
        user_id: Optional[int] = None,
    ) -> Tuple[List[AIAnalysisLog], int]:
        query = self.db.query(AIAnalysisLog).options(selectinload(AIAnalysisLog.user))
        if analysis_type is not None:
            query = query.filter(AIAnalysisLog.analysis_type == analysis_type)
        if user_id is not None:
            query = query.filter(AIAnalysisLog.user_id == user_id)
        query = query.order_by(AIAnalysisLog.created_at.desc(), AIAnalysisLog.id.desc())
        return paginate(query, page, limit)
