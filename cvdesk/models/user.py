from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from cvdesk.database import Base


USER_ROLES = ("admin", "super_user", "manager", "user")


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(120), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(512), nullable=False)
    role = Column(String(20), default="user", nullable=False)
    first_name = Column(String(120))
    last_name = Column(String(120))
    department = Column(String(255))
    position = Column(String(255))
    phone_number = Column(String(50))
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime)
    modified_by = Column(String(120))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
