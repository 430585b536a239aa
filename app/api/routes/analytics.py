# app/api/routes/analytics.py
import csv
import io
from datetime import datetime

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.security import require_admin
from app.db.base import get_db
from app.db.models.user import User
from app.repositories.analytics import AnalyticsRepository
from app.schemas.analytics import DashboardSnapshot
from app.services.analytics import AnalyticsAggregator

router = APIRouter(prefix="/analytics", tags=["analytics"])


def get_aggregator(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)) -> AnalyticsAggregator:
    return AnalyticsAggregator(
        AnalyticsRepository(db),
        default_avg_rating=settings.default_avg_rating,
        limit=settings.dashboard_top_limit,
    )


def render_dashboard_csv(snapshot: DashboardSnapshot, report_date: str) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    m = snapshot.metrics

    writer.writerow(["Analytics Report", report_date])
    writer.writerow([])
    writer.writerow(["KEY METRICS"])
    writer.writerow(["Metric", "Value"])
    writer.writerow(["Total Bookings", m.total_bookings])
    writer.writerow(["Total Revenue", m.total_revenue])
    writer.writerow(["Active Services", m.active_services])
    writer.writerow(["Average Rating", f"{m.avg_rating:.2f}"])

    writer.writerow([])
    writer.writerow(["TOP SERVICES"])
    writer.writerow(["Service Title", "Booking Count"])
    for s in snapshot.top_services:
        writer.writerow([s.title, s.booking_count])

    writer.writerow([])
    writer.writerow(["TOP PROVIDERS"])
    writer.writerow(["Provider Name", "Rating", "Bookings", "Total Earnings"])
    for p in snapshot.top_providers:
        writer.writerow([p.name, f"{p.avg_rating:.2f}", p.booking_count, p.total_earnings])

    writer.writerow([])
    writer.writerow(["LOCATION TRENDS"])
    writer.writerow(["Location", "Booking Count"])
    for loc in snapshot.location_trends:
        writer.writerow([loc.location, loc.booking_count])

    return buf.getvalue()


# --------------------------
# 1) /analytics/admin/dashboard
# --------------------------
@router.get("/admin/dashboard", response_model=DashboardSnapshot)
def admin_analytics_dashboard(
    aggregator: AnalyticsAggregator = Depends(get_aggregator),
    admin: User = Depends(require_admin),
):
    return aggregator.compute_dashboard()


# --------------------------
# 2) /analytics/admin/dashboard/export
# --------------------------
@router.get("/admin/dashboard/export")
def export_analytics_dashboard(
    aggregator: AnalyticsAggregator = Depends(get_aggregator),
    admin: User = Depends(require_admin),
):
    report_date = datetime.utcnow().date().isoformat()
    body = render_dashboard_csv(aggregator.compute_dashboard(), report_date)
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=Analytics_Report_{report_date}.csv"},
    )
