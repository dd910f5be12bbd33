"""
Tests for the built-in supermarket plugin, its handlers and data service.
"""

from datetime import date, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from tool_router.plugins.supermarket import SupermarketPlugin
from tool_router.plugins.supermarket import tools
from tool_router.plugins.supermarket.data_service import (
    MongoSupermarketDataService,
    stock_status,
)


@pytest.fixture
def products():
    return [
        {"productId": 1, "productName": "Milk", "category": "Dairy", "price": 1.2,
         "stockQuantity": 4, "reorderLevel": 10, "supplier": "Farm Co"},
        {"productId": 2, "productName": "Bread", "category": "Bakery", "price": 2.5,
         "stockQuantity": 30, "reorderLevel": 10, "supplier": "Bakers"},
        {"productId": 3, "productName": "Cheese", "category": "Dairy", "price": 5.0,
         "stockQuantity": 0, "reorderLevel": 5, "supplier": "Farm Co"},
    ]


@pytest.fixture
def sales():
    return [
        {"saleId": 1, "productId": 1, "productName": "Milk", "category": "Dairy",
         "quantity": 2, "unitPrice": 1.2, "totalAmount": 2.4,
         "saleDate": datetime(2025, 1, 10, 9, 30)},
        {"saleId": 2, "productId": 2, "productName": "Bread", "category": "Bakery",
         "quantity": 1, "unitPrice": 2.5, "totalAmount": 2.5,
         "saleDate": datetime(2025, 1, 10, 17, 0)},
        {"saleId": 3, "productId": 3, "productName": "Cheese", "category": "Dairy",
         "quantity": 1, "unitPrice": 5.0, "totalAmount": 5.0,
         "saleDate": datetime(2025, 1, 11, 8, 0)},
        {"saleId": 4, "productId": 1, "productName": "Milk", "category": "Dairy",
         "quantity": 1, "unitPrice": 1.2, "totalAmount": 1.2,
         "saleDate": datetime(2025, 2, 1, 0, 0)},
    ]


@pytest.fixture
def data_service(mongo_adapter, products, sales):
    mongo_adapter.insert_many("products", products)
    mongo_adapter.insert_many("sales", sales)
    return MongoSupermarketDataService(mongo_adapter)


class TestDateRange:
    def test_explicit_range_is_inclusive(self):
        start, end = tools.date_range(date(2025, 1, 1), date(2025, 1, 31))
        assert start == datetime(2025, 1, 1)
        assert end == datetime(2025, 2, 1)

    def test_reversed_range_swapped(self):
        start, end = tools.date_range(date(2025, 1, 31), date(2025, 1, 1))
        assert (start, end) == (datetime(2025, 1, 1), datetime(2025, 2, 1))

    def test_default_range(self):
        start, end = tools.date_range(None, None)
        assert end == datetime.combine(date.today() + timedelta(days=1), datetime.min.time())
        assert end - start == timedelta(days=tools.DEFAULT_RANGE_DAYS + 1)


class TestHandlers:
    def test_total_revenue(self):
        data = MagicMock()
        data.get_total_revenue.return_value = 10.1

        result = tools.get_total_revenue(data, date(2025, 1, 1), date(2025, 1, 31))

        assert result == {
            "startDate": "2025-01-01",
            "endDate": "2025-01-31",
            "totalRevenue": 10.1,
        }
        data.get_total_revenue.assert_called_once_with(
            datetime(2025, 1, 1), datetime(2025, 2, 1)
        )

    def test_daily_summary_uses_day_start(self):
        data = MagicMock()
        tools.get_daily_summary(data, date(2025, 1, 10))
        data.get_daily_summary.assert_called_once_with(datetime(2025, 1, 10))

    def test_low_stock_default_threshold(self):
        data = MagicMock()
        tools.get_low_stock_products(data)
        data.get_low_stock_products.assert_called_once_with(10)


class TestMongoSupermarketDataService:
    """Test suite for MongoSupermarketDataService."""

    @pytest.mark.parametrize(
        "quantity,reorder,expected",
        [(0, 5, "Out of Stock"), (5, 5, "Low Stock"), (6, 5, "In Stock")],
    )
    def test_stock_status(self, quantity, reorder, expected):
        assert stock_status(quantity, reorder) == expected

    def test_get_products(self, data_service):
        rows = data_service.get_products()
        assert [row["productName"] for row in rows] == ["Bread", "Cheese", "Milk"]
        assert all("_id" not in row for row in rows)

    def test_get_sales_data_half_open(self, data_service):
        rows = data_service.get_sales_data(datetime(2025, 1, 10), datetime(2025, 1, 11))
        assert [row["saleId"] for row in rows] == [2, 1]

    def test_get_total_revenue(self, data_service):
        assert data_service.get_total_revenue(
            datetime(2025, 1, 1), datetime(2025, 2, 1)
        ) == 9.9

    def test_get_low_stock_products(self, data_service):
        rows = data_service.get_low_stock_products(4)
        assert [row["productName"] for row in rows] == ["Cheese", "Milk"]

    def test_get_sales_by_category(self, data_service):
        rows = data_service.get_sales_by_category(datetime(2025, 1, 1), datetime(2025, 2, 1))
        assert rows == [
            {"category": "Dairy", "totalRevenue": 7.4, "totalQuantity": 3,
             "transactionCount": 2},
            {"category": "Bakery", "totalRevenue": 2.5, "totalQuantity": 1,
             "transactionCount": 1},
        ]

    def test_get_sales_by_category_uncategorized(self, data_service, mongo_adapter):
        mongo_adapter.insert_many(
            "sales",
            [
                {"saleId": 5, "productId": 9, "quantity": 2, "totalAmount": 3.0,
                 "saleDate": datetime(2025, 3, 1, 12, 0)},
                {"saleId": 6, "productId": 9, "category": "", "quantity": 1,
                 "totalAmount": 1.5, "saleDate": datetime(2025, 3, 2, 12, 0)},
            ],
        )
        rows = data_service.get_sales_by_category(datetime(2025, 3, 1), datetime(2025, 4, 1))
        assert rows == [
            {"category": "Uncategorized", "totalRevenue": 4.5, "totalQuantity": 3,
             "transactionCount": 2},
        ]

    def test_get_daily_summary(self, data_service):
        summary = data_service.get_daily_summary(datetime(2025, 1, 10))
        assert summary == {
            "date": "2025-01-10",
            "totalTransactions": 2,
            "totalRevenue": 4.9,
            "uniqueProducts": 2,
            "totalItemsSold": 3,
            "averageTransactionValue": 2.45,
            "topCategory": "Bakery",
            "topCategoryRevenue": 2.5,
        }

    def test_get_daily_summary_empty_day(self, data_service):
        summary = data_service.get_daily_summary(datetime(2024, 12, 25))
        assert summary["totalTransactions"] == 0
        assert summary["averageTransactionValue"] == 0.0
        assert summary["topCategory"] == ""

    def test_get_inventory_status(self, mongo_adapter, data_service):
        mongo_adapter.insert_many(
            "sales",
            [{"saleId": 5, "productId": 2, "quantity": 3, "totalAmount": 7.5,
              "saleDate": datetime.now() - timedelta(days=1)}],
        )
        status = {row["productName"]: row for row in data_service.get_inventory_status()}

        assert status["Milk"]["stockStatus"] == "Low Stock"
        assert status["Cheese"]["stockStatus"] == "Out of Stock"
        assert status["Bread"]["stockStatus"] == "In Stock"
        assert status["Bread"]["recentSales"] == 3
        assert status["Milk"]["recentSales"] == 0
        assert status["Bread"]["unitPrice"] == 2.5

    def test_get_detailed_inventory(self, data_service):
        rows = data_service.get_detailed_inventory()
        assert [row["productName"] for row in rows] == ["Bread", "Cheese", "Milk"]


class TestSupermarketPlugin:
    def test_manifest(self):
        plugin = SupermarketPlugin()
        assert plugin.name == "supermarket"
        assert plugin.display_name == "Supermarket Plugin"
        assert [tool.name for tool in plugin.get_tools()] == [
            "GetProducts",
            "GetSalesData",
            "GetTotalRevenue",
            "GetLowStockProducts",
            "GetSalesByCategory",
            "GetInventoryStatus",
            "GetDailySummary",
            "GetDetailedInventory",
        ]

    @pytest.mark.asyncio
    async def test_tool_runs_against_data_service(self, mongo_adapter, data_service):
        plugin = SupermarketPlugin()
        plugin.initialize({}, mongo_adapter)
        tool = next(t for t in plugin.get_tools() if t.name == "GetLowStockProducts")

        rows = await tool.execute(plugin.data_service, {"threshold": "4"})

        assert [row["productName"] for row in rows] == ["Cheese", "Milk"]
