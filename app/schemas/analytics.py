# app/schemas/analytics.py
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import List, Optional


class _CamelModel(BaseModel):
    # the admin UI reads camelCase keys (totalBookings, avgRating, ...)
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class Metrics(_CamelModel):
    total_bookings: int
    total_revenue: float
    active_services: int
    total_users: int
    avg_rating: float


class ServiceSummary(_CamelModel):
    id: int
    title: str
    category: Optional[str] = None
    booking_count: int


class ProviderSummary(_CamelModel):
    id: int
    name: str
    avg_rating: float
    booking_count: int
    total_earnings: float


class LocationSummary(_CamelModel):
    location: str
    booking_count: int


class DashboardSnapshot(_CamelModel):
    metrics: Metrics
    top_services: List[ServiceSummary]
    top_providers: List[ProviderSummary]
    location_trends: List[LocationSummary]
