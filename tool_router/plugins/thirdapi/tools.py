"""
Thirdapi tool handlers.
"""
from typing import Any, Dict, List, Optional

from tool_router.plugins.thirdapi.data_service import ThirdApiDataService, pad_content_key


def get_content_types_summary(data: ThirdApiDataService) -> List[Dict[str, Any]]:
    """Get content types summary from latest processing statistics"""
    statistics = data.get_latest_statistics() or {}
    return statistics.get("contentTypes", [])


def get_prices_without_base_item(data: ThirdApiDataService) -> List[Dict[str, Any]]:
    """Get prices without base items from ThirdApi Pump collection"""
    return data.get_prices_without_base_item()


def get_latest_statistics(data: ThirdApiDataService) -> Optional[Dict[str, Any]]:
    """Get latest processing statistics from ThirdApi Summary collection"""
    return data.get_latest_statistics()


def get_plu_data(data: ThirdApiDataService) -> List[Dict[str, Any]]:
    """Get PLU data from SAP Fiori (DynamicTableauItemListDO).

    Returns PLU codes, group information, and sequence numbers sorted by
    content key and sequence.
    """
    return data.get_plu_data()


def get_articles_with_ingredients(data: ThirdApiDataService) -> List[Dict[str, Any]]:
    """Show articles with ingredients (INGR or IN text classes), with the
    concatenated ingredient text per content key, text class and language."""
    return data.get_articles_with_ingredients()


def find_articles_by_name(data: ThirdApiDataService, name: str) -> List[Dict[str, Any]]:
    """Search, find, show, list or display articles whose name contains a
    text such as 'cola', 'water' or 'coca cola' (case-insensitive partial match)."""
    return data.find_articles_by_name(name)


def find_article_by_content_key(
    data: ThirdApiDataService, content_key: str
) -> Dict[str, Any]:
    """Find article by content key (automatically zero-padded to 18 digits)"""
    padded = pad_content_key(content_key)
    article = data.find_article_by_content_key(content_key)
    return {"contentKey": padded, "found": article is not None, "article": article}
