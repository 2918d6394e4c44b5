from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, String, Text
from sqlalchemy.types import JSON

from cvdesk.database import Base


AUDIT_ACTIONS = ("CREATE", "UPDATE", "DELETE")


class VersionHistory(Base):
    __tablename__ = "version_history"
    __table_args__ = (
        Index("idx_version_history_record", "table_name", "record_id"),
        Index("idx_version_history_timestamp", "timestamp"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    table_name = Column(String(64), nullable=False)
    record_id = Column(Integer, nullable=False)
    action = Column(String(10), nullable=False)
    old_values = Column(JSON)
    new_values = Column(JSON)
    changed_fields = Column(JSON, nullable=False, default=list)
    user_id = Column(Integer)
    username = Column(String(120), nullable=False)
    timestamp = Column(DateTime, nullable=False)
    description = Column(Text)
