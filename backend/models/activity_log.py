from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from database import Base
from models.audit_mixin import now_local


class ActivityLog(Base):
    __tablename__ = "activity_log"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    action = Column(String, nullable=False)  # e.g. 'create_transaction', 'auto_generate_rent'
    details = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_local)
