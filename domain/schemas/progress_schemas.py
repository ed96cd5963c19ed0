from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class WeightLogCreate(BaseModel):
    weight: float = Field(..., ge=20, le=300)
    logged_on: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=1000)
