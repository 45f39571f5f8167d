# app/schemas/analytics.py
"""
Derived analytics value objects.

None of these are persisted; they are recomputed from the order set on
every request.
"""
from datetime import date, datetime
from typing import Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel

RangePreset = Literal["7days", "30days", "month"]


class DailyStats(SQLModel):
    """
    Order metrics for one calendar day.
    """
    model_config = ConfigDict(extra="forbid")

    date: date
    orders: int
    revenue: float
    completed_orders: int


class WeeklyStats(SQLModel):
    """
    Daily metrics summed over a 7-day window anchored at the range start.
    """
    model_config = ConfigDict(extra="forbid")

    start_date: date
    orders: int
    revenue: float
    completed_orders: int


class MonthlyStats(SQLModel):
    """
    Daily metrics summed over a calendar month, keyed YYYY-MM.
    """
    model_config = ConfigDict(extra="forbid")

    month: str
    orders: int
    revenue: float
    completed_orders: int


class OrderStats(SQLModel):
    """
    Range-wide scalar aggregates.
    """
    model_config = ConfigDict(extra="forbid")

    total_orders: int
    total_revenue: float
    completed_orders: int
    active_orders: int
    cancelled_orders: int
    average_order_value: float


class DashboardSummary(SQLModel):
    """
    Snapshot for the dashboard stat cards.
    """
    model_config = ConfigDict(extra="forbid")

    total_products: int
    total_inventory: int
    active_orders: int
    completed_orders: int
    cancelled_orders: int
    total_revenue: float
    window_start: datetime
    window_end: datetime
