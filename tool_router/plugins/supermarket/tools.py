"""
Supermarket tool handlers.

Each handler takes the plugin's SupermarketDataService first. Date arguments
are optional; a missing range covers the last 30 days.
"""
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Tuple

from tool_router.plugins.supermarket.data_service import SupermarketDataService

DEFAULT_RANGE_DAYS = 30
DEFAULT_LOW_STOCK_THRESHOLD = 10


def day_start(day: date) -> datetime:
    return datetime.combine(day, time.min)


def date_range(
    start_date: Optional[date], end_date: Optional[date]
) -> Tuple[datetime, datetime]:
    """Half-open datetime range covering both dates inclusively."""
    end_date = end_date or date.today()
    start_date = start_date or end_date - timedelta(days=DEFAULT_RANGE_DAYS)
    if start_date > end_date:
        start_date, end_date = end_date, start_date
    return day_start(start_date), day_start(end_date + timedelta(days=1))


def get_products(data: SupermarketDataService) -> List[Dict[str, Any]]:
    """Get all products in the supermarket inventory"""
    return data.get_products()


def get_sales_data(
    data: SupermarketDataService,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """Get sales data for a specific date range"""
    return data.get_sales_data(*date_range(start_date, end_date))


def get_total_revenue(
    data: SupermarketDataService,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Dict[str, Any]:
    """Get total revenue for a specific date range"""
    start, end = date_range(start_date, end_date)
    return {
        "startDate": start.date().isoformat(),
        "endDate": (end - timedelta(days=1)).date().isoformat(),
        "totalRevenue": data.get_total_revenue(start, end),
    }


def get_low_stock_products(
    data: SupermarketDataService, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
) -> List[Dict[str, Any]]:
    """Get products with low stock levels"""
    return data.get_low_stock_products(threshold)


def get_sales_by_category(
    data: SupermarketDataService,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """Get sales performance by product category for a date range"""
    return data.get_sales_by_category(*date_range(start_date, end_date))


def get_inventory_status(data: SupermarketDataService) -> List[Dict[str, Any]]:
    """Get real-time inventory status with stock levels and recent sales data"""
    return data.get_inventory_status()


def get_daily_summary(
    data: SupermarketDataService, date: Optional[date] = None
) -> Dict[str, Any]:
    """Get daily sales summary with transactions and revenue data (today by default)"""
    return data.get_daily_summary(day_start(date or datetime.now().date()))


def get_detailed_inventory(data: SupermarketDataService) -> List[Dict[str, Any]]:
    """Get detailed inventory information for all products"""
    return data.get_detailed_inventory()


DATE_DESCRIPTIONS = {
    "start_date": "Start date in YYYY-MM-DD format",
    "end_date": "End date in YYYY-MM-DD format",
}
