# app/routers/analytics.py
from datetime import date

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import SellerContext, require_complete_profile
from app.database import get_session
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.analytics import (
    DailyStats,
    DashboardSummary,
    MonthlyStats,
    OrderStats,
    RangePreset,
    WeeklyStats,
)
from app.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics"])

service = AnalyticsService(OrderRepository(), ProductRepository())

# Range query params, shared by the trend and stats endpoints:
#   - start_date / end_date: inclusive store-local days, given together
#   - preset: 7days | 30days | month, used when no explicit dates are given


@router.get("/daily", response_model=list[DailyStats])
def daily_trends(
    start_date: date | None = None,
    end_date: date | None = None,
    preset: RangePreset = "7days",
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
):
    """
    One bucket per day of the range, empty days included.
    """
    start, end = service.resolve_range(start_date, end_date, preset)
    return service.daily_trends(session, context.seller_id, start, end)


@router.get("/weekly", response_model=list[WeeklyStats])
def weekly_trends(
    start_date: date | None = None,
    end_date: date | None = None,
    preset: RangePreset = "7days",
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
):
    """
    Daily buckets summed over 7-day windows starting at the range start.
    """
    start, end = service.resolve_range(start_date, end_date, preset)
    return service.weekly_trends(session, context.seller_id, start, end)


@router.get("/monthly", response_model=list[MonthlyStats])
def monthly_trends(
    start_date: date | None = None,
    end_date: date | None = None,
    preset: RangePreset = "month",
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
):
    """
    Daily buckets summed per calendar month (YYYY-MM).
    """
    start, end = service.resolve_range(start_date, end_date, preset)
    return service.monthly_trends(session, context.seller_id, start, end)


@router.get("/stats", response_model=OrderStats)
def order_stats(
    start_date: date | None = None,
    end_date: date | None = None,
    preset: RangePreset = "7days",
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
):
    """
    Totals, per-status counts and average order value for the range.
    """
    start, end = service.resolve_range(start_date, end_date, preset)
    return service.order_stats(session, context.seller_id, start, end)


@router.get("/dashboard", response_model=DashboardSummary)
async def dashboard_summary(
    session: Session = Depends(get_session),
    context: SellerContext = Depends(require_complete_profile),
):
    """
    Product count, inventory and the last 30 days of orders.
    """
    return await service.dashboard_summary(session, context.seller_id)
