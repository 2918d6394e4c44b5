from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from cvdesk.database import Base


class PositionRole(Base):
    __tablename__ = "positions_roles"

    id = Column(Integer, primary_key=True, index=True)
    department = Column(String(255), nullable=False)
    discipline = Column(String(255))
    domain = Column(String(255))
    category = Column(String(255))
    role_name = Column(String(255), nullable=False)
    level = Column(String(50))
    sap_k_level = Column(String(20))
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
