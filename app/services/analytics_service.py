# app/services/analytics_service.py
import asyncio
import logging
import uuid
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable, TypeVar
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.config import get_settings
from app.core.exceptions import InvalidRangeError, RepositoryUnavailableError
from app.models.order import Order
from app.models.product import Product
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
from app.services import trends

settings = get_settings()
logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnalyticsService:
    """
    Per-seller analytics over orders.

    Responsibilities:
      - resolve the requested date range
      - fetch orders/products through the repositories
      - hand the fetched rows to the pure functions in `trends`

    Fetch failures surface as RepositoryUnavailableError; there is no
    retry and no fallback to an empty result.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        tz: tzinfo | None = None,
        dashboard_window_days: int | None = None,
    ):
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.tz = tz if tz is not None else ZoneInfo(settings.ANALYTICS_TIMEZONE)
        if dashboard_window_days is None:
            dashboard_window_days = settings.DASHBOARD_WINDOW_DAYS
        self.dashboard_window = timedelta(days=dashboard_window_days)

    # ----- Range handling -----

    def today(self) -> date:
        return datetime.now(self.tz).date()

    def resolve_range(
        self,
        start_date: date | None,
        end_date: date | None,
        preset: RangePreset = "7days",
        today: date | None = None,
    ) -> tuple[date, date]:
        """
        Explicit dates win over the preset.

        Presets (relative to today in the store timezone):
          - 7days  : today - 7 .. today
          - 30days : today - 30 .. today
          - month  : first .. last day of the current month
        """
        if start_date is not None or end_date is not None:
            if start_date is None or end_date is None:
                raise InvalidRangeError("start_date and end_date must be given together")
            trends.ensure_valid_range(start_date, end_date)
            return start_date, end_date

        today = today or self.today()
        if preset == "30days":
            return today - timedelta(days=30), today
        if preset == "month":
            first = today.replace(day=1)
            next_month = (first + timedelta(days=32)).replace(day=1)
            return first, next_month - timedelta(days=1)
        return today - timedelta(days=7), today

    # ----- Fetching -----

    def _load(self, what: str, fetch: Callable[..., T], *args) -> T:
        try:
            return fetch(*args)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load %s", what)
            raise RepositoryUnavailableError(f"Could not load {what}") from exc

    def fetch_orders(
        self,
        session: Session,
        seller_id: uuid.UUID,
        start_date: date,
        end_date: date,
        status: str | None = None,
    ) -> list[Order]:
        """Orders created on the local days start_date..end_date."""
        lower, upper = trends.range_bounds(start_date, end_date, self.tz)
        return self._load(
            "orders",
            self.order_repo.list_in_range,
            session,
            seller_id,
            lower,
            upper,
            status,
        )

    # ----- Trends -----

    def daily_trends(
        self,
        session: Session,
        seller_id: uuid.UUID,
        start_date: date,
        end_date: date,
    ) -> list[DailyStats]:
        trends.ensure_valid_range(start_date, end_date)
        orders = self.fetch_orders(session, seller_id, start_date, end_date)
        daily = trends.bucket_daily(orders, start_date, end_date, self.tz)
        logger.debug(
            "Daily trends for seller %s: %d orders in %d days",
            seller_id,
            len(orders),
            len(daily),
        )
        return daily

    def weekly_trends(
        self,
        session: Session,
        seller_id: uuid.UUID,
        start_date: date,
        end_date: date,
    ) -> list[WeeklyStats]:
        daily = self.daily_trends(session, seller_id, start_date, end_date)
        return trends.rollup_weekly(daily, start_date)

    def monthly_trends(
        self,
        session: Session,
        seller_id: uuid.UUID,
        start_date: date,
        end_date: date,
    ) -> list[MonthlyStats]:
        daily = self.daily_trends(session, seller_id, start_date, end_date)
        return trends.rollup_monthly(daily)

    def order_stats(
        self,
        session: Session,
        seller_id: uuid.UUID,
        start_date: date,
        end_date: date,
    ) -> OrderStats:
        # Own fetch: does not go through the daily buckets
        orders = self.fetch_orders(session, seller_id, start_date, end_date)
        return trends.compute_order_stats(orders)

    # ----- Dashboard -----

    async def dashboard_summary(
        self,
        session: Session,
        seller_id: uuid.UUID,
        now: datetime | None = None,
    ) -> DashboardSummary:
        """
        Catalog totals plus trailing-window order counts.

        The product and order fetches are independent, so both run at the
        same time in worker threads, each on its own session bound to the
        request's engine. If either fails, the whole call fails.
        """
        window_end = now or datetime.now(timezone.utc)
        window_start = window_end - self.dashboard_window
        bind = session.get_bind()

        products, orders = await asyncio.gather(
            asyncio.to_thread(self._fetch_products, bind, seller_id),
            asyncio.to_thread(
                self._fetch_window_orders, bind, seller_id, window_start, window_end
            ),
        )
        return trends.summarize_dashboard(products, orders, window_start, window_end)

    def _fetch_products(self, bind, seller_id: uuid.UUID) -> list[Product]:
        with Session(bind) as session:
            return self._load(
                "products",
                self.product_repo.list_for_seller,
                session,
                seller_id,
            )

    def _fetch_window_orders(
        self,
        bind,
        seller_id: uuid.UUID,
        start: datetime,
        end: datetime,
    ) -> list[Order]:
        with Session(bind) as session:
            return self._load(
                "orders",
                self.order_repo.list_in_range,
                session,
                seller_id,
                start,
                end,
            )
