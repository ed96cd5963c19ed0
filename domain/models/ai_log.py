"""
Audit trail of generative-AI calls.
"""

from sqlalchemy import (
    Column,
    Integer,
    Text,
    Boolean,
    TIMESTAMP,
    ForeignKey,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base, enum_values
from domain.enums import AnalysisType


class AIAnalysisLog(Base):
    __tablename__ = "ai_analysis_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), index=True)
    analysis_type = Column(
        SQLEnum(AnalysisType, name="analysis_type", values_callable=enum_values),
        nullable=False,
    )
    prompt = Column(Text, nullable=False)
    response = Column(Text)
    tokens_used = Column(Integer)
    processing_time_ms = Column(Integer)
    used_fallback = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    user = relationship("User")
