# app/services/analytics.py
"""Admin analytics: reduce bookings, services, users and reviews into a dashboard.

Everything here is read-only and tolerant of partial data. A booking whose
service, provider, price or location cannot be resolved is left out of the
aggregate that needs it instead of failing the whole dashboard. The only
error that escapes is ``DataAccessError`` from the repository.
"""
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from app.core.config import DASHBOARD_TOP_LIMIT, DEFAULT_AVG_RATING
from app.db.models.booking import Booking
from app.db.models.review import Review
from app.db.models.service import Service
from app.db.models.user import ROLE_PROVIDER
from app.repositories.analytics import AnalyticsRepository
from app.schemas.analytics import (
    DashboardSnapshot,
    LocationSummary,
    Metrics,
    ProviderSummary,
    ServiceSummary,
)

logger = logging.getLogger(__name__)


def _price(service: Optional[Service]) -> Optional[float]:
    if service is None or service.price is None:
        return None
    return float(service.price)


def _live_service(booking: Booking) -> Optional[Service]:
    # a soft-deleted service no longer counts towards rankings
    service = booking.service
    if service is None or service.is_deleted:
        return None
    return service


def _mean(ratings: List[float], default: float) -> float:
    if not ratings:
        return default
    return sum(ratings) / len(ratings)


def _top(items: Iterable, key, limit: int) -> list:
    # sorted() is stable with reverse=True, ties keep input order
    return sorted(items, key=key, reverse=True)[:limit]


class AnalyticsAggregator:
    def __init__(
        self,
        repository: AnalyticsRepository,
        default_avg_rating: float = DEFAULT_AVG_RATING,
        limit: int = DASHBOARD_TOP_LIMIT,
    ):
        self.repository = repository
        self.default_avg_rating = default_avg_rating
        self.limit = limit

    def compute_dashboard(self) -> DashboardSnapshot:
        bookings = self.repository.list_all_bookings()
        reviews = self.repository.list_all_reviews()

        metrics = self.compute_metrics(bookings, reviews)
        logger.debug(
            "Metrics - bookings: %s, revenue: %s", metrics.total_bookings, metrics.total_revenue
        )

        top_services = self.top_services(bookings)
        top_providers = self.top_providers(bookings, reviews)
        location_trends = self.location_trends(bookings)
        logger.debug(
            "Dashboard lists - services: %d, providers: %d, locations: %d",
            len(top_services), len(top_providers), len(location_trends),
        )

        return DashboardSnapshot(
            metrics=metrics,
            top_services=top_services,
            top_providers=top_providers,
            location_trends=location_trends,
        )

    def compute_metrics(self, bookings: List[Booking], reviews: List[Review]) -> Metrics:
        active_services = self.repository.list_services(active=True, deleted=False)
        users = self.repository.list_users(deleted=False)

        total_revenue = 0.0
        for b in bookings:
            price = _price(b.service)
            if price is not None:
                total_revenue += price

        return Metrics(
            total_bookings=len(bookings),
            total_revenue=total_revenue,
            active_services=len(active_services),
            total_users=len(users),
            avg_rating=_mean([float(r.rating) for r in reviews], self.default_avg_rating),
        )

    def top_services(self, bookings: List[Booking]) -> List[ServiceSummary]:
        """Most booked services, counting only bookings made with the service's own provider."""
        counts: Dict[tuple, int] = defaultdict(int)
        for b in bookings:
            if b.service_id is not None:
                counts[(b.service_id, b.provider_id)] += 1

        summaries = []
        for s in self.repository.list_services(deleted=False):
            if s.provider_id is None:
                continue
            booking_count = counts.get((s.id, s.provider_id), 0)
            if booking_count == 0:
                continue
            summaries.append(ServiceSummary(
                id=s.id,
                title=s.title,
                category=s.category.name if s.category else None,
                booking_count=booking_count,
            ))

        return _top(summaries, lambda item: item.booking_count, self.limit)

    def top_providers(self, bookings: List[Booking], reviews: List[Review]) -> List[ProviderSummary]:
        """Best rated providers that have at least one booking.

        Ranked on average rating, not on earnings or volume.
        """
        booking_counts: Dict[int, int] = defaultdict(int)
        earnings: Dict[int, float] = defaultdict(float)
        for b in bookings:
            service = _live_service(b)
            if service is None or service.provider_id is None:
                continue
            booking_counts[service.provider_id] += 1
            price = _price(service)
            if price is not None:
                earnings[service.provider_id] += price

        ratings: Dict[int, List[float]] = defaultdict(list)
        for r in reviews:
            if r.provider_id is not None:
                ratings[r.provider_id].append(float(r.rating))

        summaries = []
        for provider in self.repository.list_users(role=ROLE_PROVIDER, deleted=False):
            booking_count = booking_counts.get(provider.id, 0)
            if booking_count == 0:
                continue
            summaries.append(ProviderSummary(
                id=provider.id,
                name=provider.name,
                avg_rating=_mean(ratings.get(provider.id, []), 0.0),
                booking_count=booking_count,
                total_earnings=earnings.get(provider.id, 0.0),
            ))

        return _top(summaries, lambda item: item.avg_rating, self.limit)

    def location_trends(self, bookings: List[Booking]) -> List[LocationSummary]:
        """Bookings per provider location, ordered by first appearance on ties."""
        counts: Dict[str, int] = {}
        for b in bookings:
            service = _live_service(b)
            if service is None or service.provider is None:
                continue
            location = service.provider.location
            if location is None:
                continue
            counts[location] = counts.get(location, 0) + 1

        summaries = [
            LocationSummary(location=location, booking_count=count)
            for location, count in counts.items()
        ]
        return _top(summaries, lambda item: item.booking_count, self.limit)
