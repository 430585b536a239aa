# app/db/models/booking.py
from sqlalchemy import Column, Integer, String, ForeignKey, Date, Time, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from app.db.base import Base


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)

    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    provider_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    # no price snapshot: the booking is worth whatever its service costs now
    service_id = Column(Integer, ForeignKey("services.id", ondelete="SET NULL"), nullable=True)

    booking_date = Column(Date, nullable=False)
    booking_time = Column(Time, nullable=False)

    address = Column(String, nullable=True)

    status = Column(String, nullable=False, default="pending")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    service = relationship("Service", foreign_keys=[service_id], lazy="joined")
