# app/repositories/analytics.py
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import DataAccessError
from app.db.models.booking import Booking
from app.db.models.review import Review
from app.db.models.service import Service
from app.db.models.user import User

logger = logging.getLogger(__name__)


class AnalyticsRepository:
    """Read-only queries backing the admin analytics dashboard.

    Filters left as ``None`` are not applied. Every list is ordered by
    primary key so repeated reads of unchanged data come back identical.
    """

    def __init__(self, db: Session):
        self.db = db

    def _all(self, query, what: str) -> list:
        try:
            return query.all()
        except SQLAlchemyError as exc:
            logger.error("Could not load %s: %s", what, exc)
            raise DataAccessError(f"could not load {what}") from exc

    def list_all_bookings(self) -> List[Booking]:
        # the whole booking -> service -> provider chain is read here, not lazily later
        q = (
            self.db.query(Booking)
            .options(joinedload(Booking.service).joinedload(Service.provider))
            .order_by(Booking.id)
        )
        return self._all(q, "bookings")

    def list_services(self, active: Optional[bool] = None, deleted: Optional[bool] = None) -> List[Service]:
        q = self.db.query(Service)
        if active is not None:
            q = q.filter(Service.is_active == active)
        if deleted is not None:
            q = q.filter(Service.is_deleted == deleted)
        return self._all(q.order_by(Service.id), "services")

    def list_users(self, role: Optional[str] = None, deleted: Optional[bool] = None) -> List[User]:
        q = self.db.query(User)
        if role:
            q = q.filter(User.role == role)
        if deleted is not None:
            q = q.filter(User.is_deleted == deleted)
        return self._all(q.order_by(User.id), "users")

    def list_all_reviews(self) -> List[Review]:
        q = self.db.query(Review).order_by(Review.id)
        return self._all(q, "reviews")
