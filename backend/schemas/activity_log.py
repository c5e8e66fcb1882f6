from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ActivityLogCreate(BaseModel):
    user_id: Optional[int] = None
    action: str
    details: Optional[str] = None


class ActivityLog(ActivityLogCreate):
    id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
