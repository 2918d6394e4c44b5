from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, func

from cvdesk.database import Base


TENDER_STATUSES = ("open", "closed", "awarded")


class Tender(Base):
    __tablename__ = "tenders"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text)
    client = Column(String(255))
    status = Column(String(20), default="open", nullable=False)
    start_date = Column(Date)
    end_date = Column(Date)
    submission_deadline = Column(Date)
    estimated_value = Column(String(100))
    requirements = Column(Text)
    assigned_to = Column(String(255))
    created_by = Column(Integer, ForeignKey("user_profiles.id", ondelete="SET NULL"))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
