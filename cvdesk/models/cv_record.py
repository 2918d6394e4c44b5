from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, func
from sqlalchemy.types import JSON

from cvdesk.database import Base


CV_STATUSES = ("active", "pending", "archived")


class CVRecord(Base):
    __tablename__ = "cv_records"
    __table_args__ = (
        Index("idx_cv_records_submitted_at", "submitted_at"),
        Index("idx_cv_records_status", "status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    surname = Column(String(255))
    id_passport = Column(String(64))
    gender = Column(String(40))
    email = Column(String(255), nullable=False)
    phone = Column(String(50))
    position = Column(String(255), nullable=False)
    role_title = Column(String(255))
    department = Column(String(255))
    experience = Column(Integer)
    experience_in_similar_role = Column(Integer)
    experience_with_itsm_tools = Column(Integer)
    sap_k_level = Column(String(20))
    qualifications = Column(Text)
    qualification_type = Column(String(255))
    qualification_name = Column(String(255))
    institute_name = Column(String(255))
    year_completed = Column(String(10))
    other_qualifications = Column(JSON)
    languages = Column(Text)
    work_experiences = Column(JSON)
    certificate_types = Column(JSON)
    skills = Column(Text)
    status = Column(String(20), default="pending", nullable=False)
    cv_file = Column(String(500))
    submitted_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
