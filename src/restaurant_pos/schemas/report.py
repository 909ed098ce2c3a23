from datetime import date
from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel


class ReportRange(BaseModel):
    start_date: date
    end_date: date
    no_data: bool


class RevenueReport(ReportRange):
    payment_count: int
    total_revenue: Decimal
    total_tips: Decimal
    revenue_by_method: Dict[str, Decimal]
    daily_revenue: Dict[str, Decimal]


class ItemFrequencyRow(BaseModel):
    menu_item_id: int
    name: str
    count: int
    quantity: int


class ItemFrequencyReport(ReportRange):
    item_frequency: List[ItemFrequencyRow]


class OrderStatisticsReport(ReportRange):
    total_orders: int
    orders_by_status: Dict[str, int]
    orders_by_day_of_week: Dict[str, int]
    average_order_amount: Decimal
