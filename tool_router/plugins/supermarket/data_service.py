"""
Data access for the supermarket plugin.

Products and sales live in two MongoDB collections:

    products: productId, productName, category, price, stockQuantity,
              reorderLevel, supplier
    sales:    saleId, productId, productName, category, quantity,
              unitPrice, totalAmount, saleDate
"""
import logging
from abc import ABC, abstractmethod
from collections import Counter, defaultdict
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from tool_router.interfaces.providers.data_storage import DataStorageProvider

logger = logging.getLogger(__name__)

NO_ID = {"_id": 0}


class SupermarketDataService(ABC):
    """Interface for supermarket data operations."""

    @abstractmethod
    def get_products(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def get_sales_data(self, start: datetime, end: datetime) -> List[Dict[str, Any]]:
        """Sales with ``start <= saleDate < end``, newest first."""
        pass

    @abstractmethod
    def get_total_revenue(self, start: datetime, end: datetime) -> float:
        pass

    @abstractmethod
    def get_low_stock_products(self, threshold: int) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def get_sales_by_category(
        self, start: datetime, end: datetime
    ) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def get_inventory_status(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def get_daily_summary(self, day: datetime) -> Dict[str, Any]:
        pass

    @abstractmethod
    def get_detailed_inventory(self) -> List[Dict[str, Any]]:
        pass


def stock_status(quantity: int, reorder_level: int) -> str:
    if quantity <= 0:
        return "Out of Stock"
    if quantity <= reorder_level:
        return "Low Stock"
    return "In Stock"


class MongoSupermarketDataService(SupermarketDataService):
    """SupermarketDataService over the shared MongoDB adapter."""

    def __init__(
        self,
        db_adapter: DataStorageProvider,
        products_collection: str = "products",
        sales_collection: str = "sales",
        recent_sales_days: int = 7,
    ):
        self.db = db_adapter
        self.products_collection = products_collection
        self.sales_collection = sales_collection
        self.recent_sales_days = recent_sales_days

    def _sales_between(self, start: datetime, end: datetime) -> List[Dict[str, Any]]:
        return self.db.find(
            self.sales_collection,
            {"saleDate": {"$gte": start, "$lt": end}},
            sort=[("saleDate", -1)],
            projection=NO_ID,
        )

    def get_products(self) -> List[Dict[str, Any]]:
        return self.db.find(
            self.products_collection,
            {},
            sort=[("productName", 1)],
            projection=NO_ID,
        )

    def get_sales_data(self, start: datetime, end: datetime) -> List[Dict[str, Any]]:
        sales = self._sales_between(start, end)
        logger.info(f"Found {len(sales)} sales between {start} and {end}")
        return sales

    def get_total_revenue(self, start: datetime, end: datetime) -> float:
        return round(
            sum(float(sale.get("totalAmount", 0)) for sale in self._sales_between(start, end)),
            2,
        )

    def get_low_stock_products(self, threshold: int) -> List[Dict[str, Any]]:
        return self.db.find(
            self.products_collection,
            {"stockQuantity": {"$lte": threshold}},
            sort=[("stockQuantity", 1)],
            projection=NO_ID,
        )

    def get_sales_by_category(
        self, start: datetime, end: datetime
    ) -> List[Dict[str, Any]]:
        groups = self.db.aggregate(
            self.sales_collection,
            [
                {"$match": {"saleDate": {"$gte": start, "$lt": end}}},
                {
                    "$group": {
                        "_id": "$category",
                        "totalRevenue": {"$sum": "$totalAmount"},
                        "totalQuantity": {"$sum": "$quantity"},
                        "transactionCount": {"$sum": 1},
                    }
                },
            ],
        )
        totals: Dict[str, Dict[str, Any]] = defaultdict(
            lambda: {"totalRevenue": 0.0, "totalQuantity": 0, "transactionCount": 0}
        )
        # missing and empty categories share one bucket
        for group in groups:
            entry = totals[group["_id"] or "Uncategorized"]
            entry["totalRevenue"] += float(group.get("totalRevenue") or 0)
            entry["totalQuantity"] += int(group.get("totalQuantity") or 0)
            entry["transactionCount"] += int(group["transactionCount"])
        rows = [
            {"category": category, **entry, "totalRevenue": round(entry["totalRevenue"], 2)}
            for category, entry in totals.items()
        ]
        rows.sort(key=lambda row: (-row["totalRevenue"], row["category"]))
        return rows

    def get_inventory_status(self) -> List[Dict[str, Any]]:
        since = datetime.now() - timedelta(days=self.recent_sales_days)
        recent = Counter()
        for sale in self.db.find(
            self.sales_collection, {"saleDate": {"$gte": since}}, projection=NO_ID
        ):
            recent[sale.get("productId")] += int(sale.get("quantity", 0))

        status = []
        for product in self.get_products():
            quantity = int(product.get("stockQuantity", 0))
            reorder_level = int(product.get("reorderLevel", 0))
            status.append(
                {
                    "productId": product.get("productId"),
                    "productName": product.get("productName"),
                    "category": product.get("category"),
                    "unitPrice": product.get("price"),
                    "stockQuantity": quantity,
                    "reorderLevel": reorder_level,
                    "stockStatus": stock_status(quantity, reorder_level),
                    "recentSales": recent.get(product.get("productId"), 0),
                }
            )
        return status

    def get_daily_summary(self, day: datetime) -> Dict[str, Any]:
        sales = self._sales_between(day, day + timedelta(days=1))
        revenue = sum(float(sale.get("totalAmount", 0)) for sale in sales)
        by_category: Dict[str, float] = defaultdict(float)
        for sale in sales:
            by_category[sale.get("category") or "Uncategorized"] += float(
                sale.get("totalAmount", 0)
            )
        top_category: Optional[str] = None
        if by_category:
            top_category = sorted(by_category.items(), key=lambda item: (-item[1], item[0]))[0][0]
        return {
            "date": day.date().isoformat(),
            "totalTransactions": len(sales),
            "totalRevenue": round(revenue, 2),
            "uniqueProducts": len({sale.get("productId") for sale in sales}),
            "totalItemsSold": sum(int(sale.get("quantity", 0)) for sale in sales),
            "averageTransactionValue": round(revenue / len(sales), 2) if sales else 0.0,
            "topCategory": top_category or "",
            "topCategoryRevenue": round(by_category.get(top_category, 0.0), 2)
            if top_category
            else 0.0,
        }

    def get_detailed_inventory(self) -> List[Dict[str, Any]]:
        return self.db.find(
            self.products_collection,
            {},
            sort=[("category", 1), ("productName", 1)],
            projection=NO_ID,
        )
