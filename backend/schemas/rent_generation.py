from pydantic import BaseModel
from datetime import date


class GenerationResult(BaseModel):
    period: str  # "YYYY-MM"
    due_date: date
    created: int = 0
    skipped: int = 0
    failed: int = 0
