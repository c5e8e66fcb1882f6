from typing import List, Optional
from sqlalchemy.orm import Session
from models.activity_log import ActivityLog
from schemas.activity_log import ActivityLogCreate


def create_activity_log(db: Session, log_entry: ActivityLogCreate, commit: bool = True):
    """Append an activity record.

    With ``commit=False`` the row is only added to the session, so it lands in
    the same transaction as the change it describes.
    """
    db_log_entry = ActivityLog(**log_entry.model_dump())
    db.add(db_log_entry)
    if commit:
        db.commit()
        db.refresh(db_log_entry)
    return db_log_entry


def log_activity(db: Session, user_id: Optional[int], action: str, details: str = None, commit: bool = True):
    return create_activity_log(
        db,
        ActivityLogCreate(user_id=user_id, action=action, details=details),
        commit=commit,
    )


def get_recent_activity(db: Session, user_id: int, limit: int = 10) -> List[ActivityLog]:
    return db.query(ActivityLog).filter(
        ActivityLog.user_id == user_id
    ).order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc()).limit(limit).all()
