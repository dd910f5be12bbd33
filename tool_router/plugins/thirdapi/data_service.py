"""
Data access for the thirdapi plugin.

The Pump collection holds transport envelopes exported from the merchandise
system; the Summary collection holds one document per import run.

    Pump:    {transportElement: {contentType, contentKey, content: {<contentType>: {...}}}}
    Summary: {processedAt, inputFile, documentsInserted, statistics: {...}}
"""
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING

from tool_router.interfaces.providers.data_storage import DataStorageProvider

logger = logging.getLogger(__name__)

BASE_ITEM = "com.gk_software.gkr.api.server.md.item.dto.dom.BaseItemDO"
ITEM_PRICES = "com.gk_software.gkr.api.server.md.item_prices.dto.dom.ItemPricesDO"
TABLEAU_ITEM_LIST = (
    "com.gk_software.gkr.api.server.md.dynamic_tableau.dto.dom.DynamicTableauItemListDO"
)
TABLEAU_ITEM = (
    "com.gk_software.gkr.api.server.md.dynamic_tableau.dto.dom.DynamicTableauItemListItemDO"
)
INGREDIENT_TEXT_CLASSES = ("INGR", "IN")
CONTENT_KEY_LENGTH = 18

NO_ID = {"_id": 0}


def pad_content_key(content_key: str) -> str:
    """``1615`` -> ``000000000000001615``"""
    return str(content_key).strip().zfill(CONTENT_KEY_LENGTH)


def first_value(wrapper: Any) -> Dict[str, Any]:
    """Unwrap a single-key ``{typeName: payload}`` object."""
    if isinstance(wrapper, dict) and wrapper:
        value = next(iter(wrapper.values()))
        if isinstance(value, dict):
            return value
    return {}


class ThirdApiDataService(ABC):
    """Interface for thirdapi data operations."""

    @abstractmethod
    def get_prices_without_base_item(self) -> List[Dict[str, Any]]:
        """Price rows whose content key has prices but no base item."""
        pass

    @abstractmethod
    def get_latest_statistics(self) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def find_articles_by_name(self, name: str) -> List[Dict[str, Any]]:
        """Case-insensitive partial match on the base item name."""
        pass

    @abstractmethod
    def find_article_by_content_key(self, content_key: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def get_plu_data(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def get_articles_with_ingredients(self) -> List[Dict[str, Any]]:
        pass


class MongoThirdApiDataService(ThirdApiDataService):
    """ThirdApiDataService over the shared MongoDB adapter."""

    def __init__(
        self,
        db_adapter: DataStorageProvider,
        pump_collection: str = "Pump",
        summary_collection: str = "Summary",
    ):
        self.db = db_adapter
        self.pump_collection = pump_collection
        self.summary_collection = summary_collection

    def _envelopes(self, content_type: str, extra: Optional[Dict] = None) -> List[Dict]:
        query = {"transportElement.contentType": content_type}
        if extra:
            query.update(extra)
        return self.db.find(self.pump_collection, query, projection=NO_ID)

    def get_prices_without_base_item(self) -> List[Dict[str, Any]]:
        base_keys = {
            doc["transportElement"].get("contentKey")
            for doc in self._envelopes(BASE_ITEM)
        }
        rows = []
        for doc in self._envelopes(ITEM_PRICES):
            element = doc["transportElement"]
            if element.get("contentKey") in base_keys:
                continue
            prices = element.get("content", {}).get(ITEM_PRICES, {})
            for uom_wrapper in prices.get("uomItemPriceList", []):
                uom = first_value(uom_wrapper)
                for price_wrapper in uom.get("priceList", []):
                    price = first_value(price_wrapper)
                    rows.append(
                        {
                            "contentKey": element.get("contentKey"),
                            "uomCode": uom.get("key", {}).get("uomCode"),
                            "priceOrigin": prices.get("priceOrigin"),
                            "priceTypeCode": price.get("key", {}).get("priceTypeCode"),
                            "priceEffectiveDate": price.get("key", {}).get(
                                "priceEffectiveDate"
                            ),
                            "priceExpirationDate": price.get("priceExpirationDate"),
                            "priceAmount": price.get("priceAmount"),
                            "packagePriceQuantity": price.get("packagePriceQuantity"),
                        }
                    )
        logger.info(f"Found {len(rows)} prices without base items")
        return rows

    def get_latest_statistics(self) -> Optional[Dict[str, Any]]:
        summary = self.db.find_one(
            self.summary_collection, {}, sort=[("processedAt", DESCENDING)]
        )
        if summary is None:
            logger.warning("No processing summary found in Summary collection")
            return None
        return summary.get("statistics")

    def find_articles_by_name(self, name: str) -> List[Dict[str, Any]]:
        needle = name.lower()
        articles = [
            doc
            for doc in self._envelopes(BASE_ITEM)
            if needle in str(
                doc["transportElement"].get("content", {}).get(BASE_ITEM, {}).get("name", "")
            ).lower()
        ]
        logger.info(f"Found {len(articles)} articles matching name: {name}")
        return articles

    def find_article_by_content_key(self, content_key: str) -> Optional[Dict[str, Any]]:
        padded = pad_content_key(content_key)
        documents = self._envelopes(BASE_ITEM, {"transportElement.contentKey": padded})
        if not documents:
            logger.warning(f"No article found with content key: {padded}")
            return None
        return documents[0]

    def get_plu_data(self) -> List[Dict[str, Any]]:
        rows = []
        for doc in self._envelopes(TABLEAU_ITEM_LIST):
            element = doc["transportElement"]
            item_list = element.get("content", {}).get(TABLEAU_ITEM_LIST, {})
            for wrapper in item_list.get("dynamicTableauItemListItemList", []):
                item = wrapper.get(TABLEAU_ITEM, {}) if isinstance(wrapper, dict) else {}
                rows.append(
                    {
                        "contentKey": element.get("contentKey"),
                        "businessUnitGroupId": item_list.get("key", {}).get(
                            "businessUnitGroupId"
                        ),
                        "groupId": item_list.get("key", {}).get("itemListId"),
                        "groupDescription": item_list.get("description"),
                        "posItemId": item.get("posItemId"),
                        "sequenceNumber": item.get("sequenceNumber"),
                        "lastUpdateTimestamp": item_list.get("lastUpdateTimestamp"),
                    }
                )
        rows.sort(key=lambda row: (str(row["contentKey"]), row["sequenceNumber"] or 0))
        return rows

    def get_articles_with_ingredients(self) -> List[Dict[str, Any]]:
        grouped: Dict[tuple, Dict[str, Any]] = {}
        texts = defaultdict(list)
        for doc in self._envelopes(BASE_ITEM):
            element = doc["transportElement"]
            item = element.get("content", {}).get(BASE_ITEM, {})
            for text in item.get("itemTextList", []):
                if text.get("textClass") not in INGREDIENT_TEXT_CLASSES:
                    continue
                key = (element.get("contentKey"), text.get("textClass"), text.get("language"))
                grouped.setdefault(
                    key,
                    {
                        "contentKey": key[0],
                        "name": item.get("name"),
                        "textClass": key[1],
                        "language": key[2],
                    },
                )
                texts[key].append(text.get("text", ""))
        return [
            {**row, "ingredients": " ".join(part for part in texts[key] if part)}
            for key, row in grouped.items()
        ]
