"""
AnalyticsService behaviour with in-memory repositories.
"""
import asyncio
import threading
import uuid
from datetime import date, datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, create_engine

from app.core.exceptions import InvalidRangeError, RepositoryUnavailableError
from app.models.order import Order
from app.models.product import Product
from app.services.analytics_service import AnalyticsService
from app.services.trends import to_utc

UTC = timezone.utc
SELLER = uuid.uuid4()


class FakeOrderRepository:
    def __init__(self, orders, fail=False, barrier=None):
        self.orders = orders
        self.fail = fail
        self.barrier = barrier
        self.calls = []

    def list_in_range(self, session, seller_id, start, end, status=None):
        self.calls.append((seller_id, start, end, status))
        if self.barrier is not None:
            self.barrier.wait()
        if self.fail:
            raise OperationalError("SELECT", {}, Exception("connection refused"))
        rows = [
            o for o in self.orders
            if o.seller_id == seller_id and start <= to_utc(o.created_at) <= end
        ]
        if status is not None:
            rows = [o for o in rows if o.status == status]
        return sorted(rows, key=lambda o: to_utc(o.created_at), reverse=True)


class FakeProductRepository:
    def __init__(self, products, fail=False, barrier=None):
        self.products = products
        self.fail = fail
        self.barrier = barrier

    def list_for_seller(self, session, seller_id, skip=0, limit=None):
        if self.barrier is not None:
            self.barrier.wait()
        if self.fail:
            raise OperationalError("SELECT", {}, Exception("connection refused"))
        return [p for p in self.products if p.seller_id == seller_id]


def order(created_at, total_amount, status="active", seller_id=SELLER):
    return Order(
        seller_id=seller_id,
        customer_name="c",
        customer_email="c@example.com",
        total_amount=total_amount,
        status=status,
        created_at=created_at,
    )


ORDERS = [
    order(datetime(2024, 3, 10, 9, tzinfo=UTC), 100, "completed"),
    order(datetime(2024, 3, 10, 15, tzinfo=UTC), 50, "active"),
    order(datetime(2024, 3, 11, 11, tzinfo=UTC), 200, "cancelled"),
    # Outside the range and for another seller
    order(datetime(2024, 3, 12, 0, tzinfo=UTC), 999, "completed"),
    order(datetime(2024, 3, 10, 9, tzinfo=UTC), 999, "completed", seller_id=uuid.uuid4()),
]

PRODUCTS = [
    Product(seller_id=SELLER, name="Cake", price=10, quantity=3),
    Product(seller_id=SELLER, name="Tart", price=5, quantity=0),
]


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    with Session(engine) as s:
        yield s


def make_service(orders=ORDERS, products=PRODUCTS, **kwargs):
    return AnalyticsService(
        FakeOrderRepository(orders, **kwargs.pop("order_kwargs", {})),
        FakeProductRepository(products, **kwargs.pop("product_kwargs", {})),
        tz=UTC,
        **kwargs,
    )


class TestTrends:
    def test_daily_trends_for_the_seller_only(self, session):
        service = make_service()
        daily = service.daily_trends(session, SELLER, date(2024, 3, 10), date(2024, 3, 11))

        assert [(d.orders, d.revenue, d.completed_orders) for d in daily] == [
            (2, 150, 1),
            (1, 200, 0),
        ]

    def test_fetch_uses_inclusive_day_bounds(self, session):
        service = make_service()
        service.daily_trends(session, SELLER, date(2024, 3, 10), date(2024, 3, 11))

        _, start, end, status = service.order_repo.calls[0]
        assert start == datetime(2024, 3, 10, tzinfo=UTC)
        assert end == datetime(2024, 3, 11, 23, 59, 59, 999999, tzinfo=UTC)
        assert status is None

    def test_weekly_and_monthly_are_built_from_daily(self, session):
        service = make_service()
        weekly = service.weekly_trends(session, SELLER, date(2024, 3, 1), date(2024, 3, 31))
        monthly = service.monthly_trends(session, SELLER, date(2024, 3, 1), date(2024, 3, 31))

        assert len(weekly) == 5
        assert sum(w.orders for w in weekly) == 4
        assert [m.month for m in monthly] == ["2024-03"]
        assert monthly[0].orders == 4

    def test_order_stats_fetches_independently(self, session):
        service = make_service()
        stats = service.order_stats(session, SELLER, date(2024, 3, 10), date(2024, 3, 11))

        assert stats.total_orders == 3
        assert stats.average_order_value == 116.67
        assert len(service.order_repo.calls) == 1

    def test_empty_range_is_not_an_error(self, session):
        service = make_service(orders=[])
        stats = service.order_stats(session, SELLER, date(2024, 1, 1), date(2024, 1, 31))
        daily = service.daily_trends(session, SELLER, date(2024, 1, 1), date(2024, 1, 31))

        assert stats.average_order_value == 0
        assert len(daily) == 31
        assert all(d.orders == 0 for d in daily)

    def test_reversed_range_fails_before_fetching(self, session):
        service = make_service()
        with pytest.raises(InvalidRangeError):
            service.daily_trends(session, SELLER, date(2024, 3, 11), date(2024, 3, 10))
        assert service.order_repo.calls == []

    def test_fetch_failure_is_not_replaced_by_zeros(self, session):
        service = make_service(order_kwargs={"fail": True})

        with pytest.raises(RepositoryUnavailableError) as exc_info:
            service.daily_trends(session, SELLER, date(2024, 3, 10), date(2024, 3, 11))

        assert isinstance(exc_info.value.__cause__, OperationalError)


class TestResolveRange:
    TODAY = date(2024, 2, 14)

    def test_explicit_dates_win(self):
        service = make_service()
        assert service.resolve_range(
            date(2024, 1, 1), date(2024, 1, 5), "month", today=self.TODAY
        ) == (date(2024, 1, 1), date(2024, 1, 5))

    def test_presets(self):
        service = make_service()
        assert service.resolve_range(None, None, "7days", today=self.TODAY) == (
            date(2024, 2, 7),
            self.TODAY,
        )
        assert service.resolve_range(None, None, "30days", today=self.TODAY) == (
            date(2024, 1, 15),
            self.TODAY,
        )
        assert service.resolve_range(None, None, "month", today=self.TODAY) == (
            date(2024, 2, 1),
            date(2024, 2, 29),
        )

    def test_month_preset_in_december(self):
        service = make_service()
        assert service.resolve_range(None, None, "month", today=date(2023, 12, 5)) == (
            date(2023, 12, 1),
            date(2023, 12, 31),
        )

    def test_half_specified_range_is_rejected(self):
        service = make_service()
        with pytest.raises(InvalidRangeError):
            service.resolve_range(date(2024, 1, 1), None)

    def test_reversed_explicit_range_is_rejected(self):
        service = make_service()
        with pytest.raises(InvalidRangeError):
            service.resolve_range(date(2024, 1, 5), date(2024, 1, 1))


class TestDashboardSummary:
    NOW = datetime(2024, 3, 12, 12, tzinfo=UTC)

    def test_summary_over_trailing_window(self, session):
        service = make_service()
        summary = asyncio.run(service.dashboard_summary(session, SELLER, now=self.NOW))

        assert summary.total_products == 2
        assert summary.total_inventory == 3
        assert summary.active_orders == 1
        assert summary.completed_orders == 2
        assert summary.cancelled_orders == 1
        assert summary.total_revenue == 1349
        assert summary.window_end == self.NOW
        assert (summary.window_end - summary.window_start).days == 30

    def test_fetches_are_in_flight_together(self, session):
        # Each fetch blocks until the other one has started
        barrier = threading.Barrier(2, timeout=5)
        service = make_service(
            order_kwargs={"barrier": barrier},
            product_kwargs={"barrier": barrier},
        )

        summary = asyncio.run(service.dashboard_summary(session, SELLER, now=self.NOW))

        assert summary.total_products == 2
        assert not barrier.broken

    def test_either_failure_fails_the_whole_summary(self, session):
        service = make_service(product_kwargs={"fail": True})
        with pytest.raises(RepositoryUnavailableError):
            asyncio.run(service.dashboard_summary(session, SELLER, now=self.NOW))

        service = make_service(order_kwargs={"fail": True})
        with pytest.raises(RepositoryUnavailableError):
            asyncio.run(service.dashboard_summary(session, SELLER, now=self.NOW))

    def test_window_length_is_configurable(self, session):
        service = make_service(dashboard_window_days=1)
        summary = asyncio.run(service.dashboard_summary(session, SELLER, now=self.NOW))

        # Only the 2024-03-12 00:00 order is inside the last 24 hours
        assert summary.completed_orders == 1
        assert summary.total_revenue == 999
