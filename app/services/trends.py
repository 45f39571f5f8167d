# app/services/trends.py
"""
Calendar bucketing and rollups over a seller's orders.

Every function here is a pure, synchronous transformation of data that has
already been fetched. Nothing is cached or shared between calls.

Day buckets are the primitive:

  - bucket_daily() partitions orders into one bucket per local calendar day.
    Buckets are dense (empty days are emitted with zeros) and each order
    lands in exactly one bucket, using half-open [day_start, next_day_start)
    windows so an order stamped exactly at midnight belongs to the new day.
  - rollup_weekly() / rollup_monthly() fold the daily output into coarser
    buckets through an ordered key -> accumulator mapping.
  - compute_order_stats() works on the raw order set, independent of any
    bucketing.
"""
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Iterable, Sequence

from app.core.exceptions import InvalidRangeError
from app.models.order import Order
from app.models.product import Product
from app.schemas.analytics import (
    DailyStats,
    DashboardSummary,
    MonthlyStats,
    OrderStats,
    WeeklyStats,
)

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


@dataclass
class _Accumulator:
    orders: int = 0
    revenue: float = 0.0
    completed_orders: int = 0

    def add_order(self, order: Order) -> None:
        self.orders += 1
        self.revenue += order.total_amount
        if order.status == "completed":
            self.completed_orders += 1

    def add_bucket(self, bucket: DailyStats) -> None:
        self.orders += bucket.orders
        self.revenue += bucket.revenue
        self.completed_orders += bucket.completed_orders


# ----- Date helpers -----


def ensure_valid_range(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise InvalidRangeError(
            f"end_date {end_date.isoformat()} is before start_date {start_date.isoformat()}"
        )


def days_in_range(start_date: date, end_date: date) -> list[date]:
    """Closed sequence start_date..end_date; at least one day."""
    ensure_valid_range(start_date, end_date)
    span = (end_date - start_date).days
    return [start_date + timedelta(days=offset) for offset in range(span + 1)]


def day_start(day: date, tz: tzinfo) -> datetime:
    """Local midnight of `day`, as an aware UTC datetime."""
    return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)


def range_bounds(start_date: date, end_date: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """
    Inclusive UTC bounds covering every instant of the local days
    start_date..end_date.

    The upper bound is the last microsecond before the following local
    midnight.
    """
    ensure_valid_range(start_date, end_date)
    lower = day_start(start_date, tz)
    upper = day_start(end_date + timedelta(days=1), tz) - timedelta(microseconds=1)
    return lower, upper


def to_utc(value: datetime | str) -> datetime:
    """
    Normalize a created_at value to an aware UTC datetime.

    Accepts ISO-8601 strings. Naive values are taken as UTC, which is how
    timestamps come back from databases without timezone support.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def local_date(value: datetime | str, tz: tzinfo) -> date:
    """The local calendar day whose [start, next start) window holds `value`."""
    return to_utc(value).astimezone(tz).date()


# ----- Daily bucketing -----


def bucket_daily(
    orders: Iterable[Order],
    start_date: date,
    end_date: date,
    tz: tzinfo,
) -> list[DailyStats]:
    """
    Partition orders into one DailyStats per day of start_date..end_date.

    Orders whose created_at falls outside the range are ignored.
    """
    buckets: dict[date, _Accumulator] = {
        day: _Accumulator() for day in days_in_range(start_date, end_date)
    }

    skipped = 0
    for order in orders:
        bucket = buckets.get(local_date(order.created_at, tz))
        if bucket is None:
            skipped += 1
            continue
        bucket.add_order(order)

    if skipped:
        logger.debug("Ignored %d orders outside %s..%s", skipped, start_date, end_date)

    return [
        DailyStats(
            date=day,
            orders=acc.orders,
            revenue=round(acc.revenue, 2),
            completed_orders=acc.completed_orders,
        )
        for day, acc in buckets.items()
    ]


# ----- Rollups -----


def rollup_weekly(daily: Sequence[DailyStats], start_date: date) -> list[WeeklyStats]:
    """
    Group daily buckets into 7-day windows anchored at start_date.

    A trailing partial week is kept as-is.
    """
    weeks: dict[int, tuple[date, _Accumulator]] = {}
    for bucket in daily:
        index = (bucket.date - start_date).days // DAYS_PER_WEEK
        if index not in weeks:
            weeks[index] = (bucket.date, _Accumulator())
        weeks[index][1].add_bucket(bucket)

    return [
        WeeklyStats(
            start_date=first_day,
            orders=acc.orders,
            revenue=round(acc.revenue, 2),
            completed_orders=acc.completed_orders,
        )
        for _, (first_day, acc) in sorted(weeks.items())
    ]


def rollup_monthly(daily: Sequence[DailyStats]) -> list[MonthlyStats]:
    """
    Group daily buckets by YYYY-MM, in first-seen order.
    """
    months: dict[str, _Accumulator] = {}
    for bucket in daily:
        key = bucket.date.strftime("%Y-%m")
        months.setdefault(key, _Accumulator()).add_bucket(bucket)

    return [
        MonthlyStats(
            month=key,
            orders=acc.orders,
            revenue=round(acc.revenue, 2),
            completed_orders=acc.completed_orders,
        )
        for key, acc in months.items()
    ]


# ----- Scalar aggregates -----


def compute_order_stats(orders: Sequence[Order]) -> OrderStats:
    total_orders = len(orders)
    total_revenue = sum(order.total_amount for order in orders)
    by_status = Counter(order.status for order in orders)

    # No orders is a valid, empty result
    average = total_revenue / total_orders if total_orders else 0.0

    return OrderStats(
        total_orders=total_orders,
        total_revenue=round(total_revenue, 2),
        completed_orders=by_status["completed"],
        active_orders=by_status["active"],
        cancelled_orders=by_status["cancelled"],
        average_order_value=round(average, 2),
    )


def summarize_dashboard(
    products: Sequence[Product],
    orders: Sequence[Order],
    window_start: datetime,
    window_end: datetime,
) -> DashboardSummary:
    by_status = Counter(order.status for order in orders)
    return DashboardSummary(
        total_products=len(products),
        total_inventory=sum(product.quantity for product in products),
        active_orders=by_status["active"],
        completed_orders=by_status["completed"],
        cancelled_orders=by_status["cancelled"],
        total_revenue=round(sum(order.total_amount for order in orders), 2),
        window_start=window_start,
        window_end=window_end,
    )
