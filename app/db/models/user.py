# app/db/models/user.py
from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship
from app.db.base import Base

ROLE_CUSTOMER = "customer"
ROLE_PROVIDER = "provider"
ROLE_ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default=ROLE_CUSTOMER, server_default=ROLE_CUSTOMER)

    phone = Column(String, nullable=True)
    # for providers this is where they operate; drives the location trends
    location = Column(String, nullable=True)

    # soft delete, rows are never removed
    is_deleted = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # One-to-many with Service (providers only)
    services = relationship(
        "Service",
        back_populates="provider",
        lazy="selectin"
    )
