"""
Tests for the built-in thirdapi plugin, its handlers and data service.
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from tool_router.plugins.thirdapi import ThirdApiPlugin
from tool_router.plugins.thirdapi import tools
from tool_router.plugins.thirdapi.data_service import (
    BASE_ITEM,
    ITEM_PRICES,
    TABLEAU_ITEM,
    TABLEAU_ITEM_LIST,
    MongoThirdApiDataService,
    first_value,
    pad_content_key,
)


def envelope(content_type, content_key, payload):
    return {
        "transportElement": {
            "contentType": content_type,
            "contentKey": content_key,
            "content": {content_type: payload},
        }
    }


@pytest.fixture
def pump():
    return [
        envelope(
            BASE_ITEM,
            "000000000000001615",
            {
                "name": "Coca Cola 0.5L",
                "itemTextList": [
                    {"textClass": "INGR", "language": "en", "text": "Water,"},
                    {"textClass": "INGR", "language": "en", "text": "sugar"},
                    {"textClass": "DESC", "language": "en", "text": "Soft drink"},
                ],
            },
        ),
        envelope(BASE_ITEM, "000000000000007388", {"name": "Still Water"}),
        envelope(
            ITEM_PRICES,
            "000000000000001615",
            {"priceOrigin": "HQ", "uomItemPriceList": []},
        ),
        envelope(
            ITEM_PRICES,
            "000000000000009999",
            {
                "priceOrigin": "HQ",
                "uomItemPriceList": [
                    {
                        "UomItemPriceDO": {
                            "key": {"uomCode": "PCE"},
                            "priceList": [
                                {
                                    "PriceDO": {
                                        "key": {
                                            "priceTypeCode": "RS",
                                            "priceEffectiveDate": "2025-01-01",
                                        },
                                        "priceAmount": 1.99,
                                        "packagePriceQuantity": 1,
                                        "priceExpirationDate": "2025-12-31",
                                    }
                                }
                            ],
                        }
                    }
                ],
            },
        ),
        envelope(
            TABLEAU_ITEM_LIST,
            "000000000000000042",
            {
                "key": {"businessUnitGroupId": "1000", "itemListId": "DRINKS"},
                "description": "Drinks",
                "lastUpdateTimestamp": "2025-01-01T00:00:00",
                "dynamicTableauItemListItemList": [
                    {TABLEAU_ITEM: {"posItemId": "7388", "sequenceNumber": 2}},
                    {TABLEAU_ITEM: {"posItemId": "1615", "sequenceNumber": 1}},
                ],
            },
        ),
    ]


@pytest.fixture
def summaries():
    return [
        {"processedAt": datetime(2025, 1, 1), "statistics": {"totalDocuments": 10}},
        {
            "processedAt": datetime(2025, 2, 1),
            "statistics": {
                "totalDocuments": 12,
                "contentTypes": [{"contentType": BASE_ITEM, "count": 2}],
            },
        },
    ]


@pytest.fixture
def data_service(mongo_adapter, pump, summaries):
    mongo_adapter.insert_many("Pump", pump)
    mongo_adapter.insert_many("Summary", summaries)
    return MongoThirdApiDataService(mongo_adapter)


class TestHelpers:
    @pytest.mark.parametrize(
        "key,expected",
        [
            ("1615", "000000000000001615"),
            (" 7388 ", "000000000000007388"),
            ("000000000000001615", "000000000000001615"),
        ],
    )
    def test_pad_content_key(self, key, expected):
        assert pad_content_key(key) == expected

    def test_first_value(self):
        assert first_value({"PriceDO": {"a": 1}}) == {"a": 1}
        assert first_value({}) == {}
        assert first_value("text") == {}


class TestMongoThirdApiDataService:
    """Test suite for MongoThirdApiDataService."""

    def test_find_article_by_content_key_pads(self, data_service):
        article = data_service.find_article_by_content_key("1615")
        assert article["transportElement"]["contentKey"] == "000000000000001615"
        assert "_id" not in article

    def test_find_article_missing(self, data_service):
        assert data_service.find_article_by_content_key("1") is None

    def test_find_articles_by_name_case_insensitive(self, data_service):
        articles = data_service.find_articles_by_name("WATER")
        keys = [a["transportElement"]["contentKey"] for a in articles]
        assert keys == ["000000000000007388"]

    def test_prices_without_base_item(self, data_service):
        rows = data_service.get_prices_without_base_item()
        assert rows == [
            {
                "contentKey": "000000000000009999",
                "uomCode": "PCE",
                "priceOrigin": "HQ",
                "priceTypeCode": "RS",
                "priceEffectiveDate": "2025-01-01",
                "priceExpirationDate": "2025-12-31",
                "priceAmount": 1.99,
                "packagePriceQuantity": 1,
            }
        ]

    def test_latest_statistics(self, data_service):
        assert data_service.get_latest_statistics()["totalDocuments"] == 12

    def test_latest_statistics_empty(self, mongo_adapter):
        assert MongoThirdApiDataService(mongo_adapter).get_latest_statistics() is None

    def test_plu_data_sorted_by_sequence(self, data_service):
        rows = data_service.get_plu_data()
        assert [row["posItemId"] for row in rows] == ["1615", "7388"]
        assert rows[0]["groupId"] == "DRINKS"
        assert rows[0]["groupDescription"] == "Drinks"
        assert rows[0]["businessUnitGroupId"] == "1000"

    def test_articles_with_ingredients(self, data_service):
        assert data_service.get_articles_with_ingredients() == [
            {
                "contentKey": "000000000000001615",
                "name": "Coca Cola 0.5L",
                "textClass": "INGR",
                "language": "en",
                "ingredients": "Water, sugar",
            }
        ]


class TestHandlers:
    def test_content_types_summary(self, data_service):
        assert tools.get_content_types_summary(data_service) == [
            {"contentType": BASE_ITEM, "count": 2}
        ]

    def test_content_types_summary_without_statistics(self):
        data = MagicMock()
        data.get_latest_statistics.return_value = None
        assert tools.get_content_types_summary(data) == []

    def test_find_article_by_content_key(self, data_service):
        result = tools.find_article_by_content_key(data_service, "1615")
        assert result["contentKey"] == "000000000000001615"
        assert result["found"] is True

    def test_find_article_by_content_key_missing(self, data_service):
        result = tools.find_article_by_content_key(data_service, "42")
        assert result == {
            "contentKey": "000000000000000042",
            "found": False,
            "article": None,
        }


class TestThirdApiPlugin:
    def test_manifest(self):
        plugin = ThirdApiPlugin()
        assert plugin.name == "thirdapi"
        assert plugin.route_prefix == "thirdapi"
        names = [tool.name for tool in plugin.get_tools()]
        assert names == [
            "GetContentTypesSummary",
            "GetPricesWithoutBaseItem",
            "GetLatestStatistics",
            "GetPluData",
            "GetArticlesWithIngredients",
            "FindArticlesByName",
            "FindArticleByContentKey",
        ]

    def test_content_key_parameter(self):
        tool = next(
            t for t in ThirdApiPlugin().get_tools() if t.name == "FindArticleByContentKey"
        )
        assert [spec.name for spec in tool.parameters] == ["contentKey"]
        assert tool.parameters[0].required is True
