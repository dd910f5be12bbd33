"""
Parameter extraction from free text.

The extractor is a pure function over an ordered list of pattern rules. Each
parameter category is independent; within a category the first rule that
produces an acceptable value wins.

    1. contentKey  - "article 7388", "#7388", then any bare 4+ digit number
    2. name        - only when no contentKey was found; stop words rejected
    3. startDate / endDate - first and second ISO date in the text
    4. threshold   - "below 15", "under 15", "less than 15", "threshold 15"
    5. category    - "category: Dairy", "category=Dairy", "category Dairy"
"""
import logging
import re
from typing import Dict, List, Optional, Pattern

from tool_router.interfaces.services.parameters import (
    ParameterExtractor as ParameterExtractorInterface,
)

logger = logging.getLogger(__name__)

CONTENT_KEY_PATTERNS: List[Pattern] = [
    re.compile(r"\b(?:article|item|product|key|id|number|code)\s+(\d+)", re.IGNORECASE),
    re.compile(r"#(\d+)"),
    # digits glued to letters or part of an ISO date are not content keys
    re.compile(r"(?<![\w-])(\d{4,})(?![\w-])"),
]

NAME_PATTERNS: List[Pattern] = [
    re.compile(r"\b(?:named?|called?)\s+['\"]?([a-z0-9\s]+)['\"]?", re.IGNORECASE),
    re.compile(
        r"\b(?:with|containing?).*?['\"]?([a-z0-9\s]+)['\"]?.*?(?:in|name)",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(?:search|find|show|get).*?\b(?:for|with)\s+['\"]?([a-z0-9\s]+)['\"]?",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:have|has|contains?)\s+['\"]?([a-z0-9\s]+)['\"]?\s+in", re.IGNORECASE),
    re.compile(r"['\"]([a-z0-9\s]+)['\"]", re.IGNORECASE),
    re.compile(
        r"\b(?:search|find|show|get|list|display)\s+(?:articles?|items?|products?)\s+([a-z0-9\s]+)",
        re.IGNORECASE,
    ),
    re.compile(r"\barticles?\s+([a-z0-9]+)$", re.IGNORECASE),
]

NAME_STOP_WORDS = frozenset(
    ["with", "containing", "named", "called", "by", "that", "contain", "in", "their", "the"]
)

DATE_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2})")
THRESHOLD_PATTERN = re.compile(r"\b(?:below|under|less than|threshold)\s*(\d+)", re.IGNORECASE)
CATEGORY_PATTERN = re.compile(r"\bcategory\s*[:=]?\s*([a-zA-Z]+)", re.IGNORECASE)


def first_group(patterns: List[Pattern], text: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def extract_content_key(text: str) -> Optional[str]:
    return first_group(CONTENT_KEY_PATTERNS, text)


def extract_name(text: str) -> Optional[str]:
    """First name candidate that is not a stop word, trying patterns in order."""
    for pattern in NAME_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        candidate = match.group(1).strip()
        if candidate and candidate.lower() not in NAME_STOP_WORDS:
            return candidate
    return None


def extract_dates(text: str) -> Dict[str, str]:
    dates = DATE_PATTERN.findall(text)
    params = {}
    if dates:
        params["startDate"] = dates[0]
    if len(dates) > 1:
        params["endDate"] = dates[1]
    return params


def extract_threshold(text: str) -> Optional[str]:
    match = THRESHOLD_PATTERN.search(text)
    return str(int(match.group(1))) if match else None


def extract_category(text: str) -> Optional[str]:
    match = CATEGORY_PATTERN.search(text)
    return match.group(1) if match else None


def extract_parameters(text: Optional[str]) -> Dict[str, str]:
    """Map free text to a parameter map.

    Args:
        text: Raw user input

    Returns:
        Extracted parameters; keys appear in rule order
    """
    params: Dict[str, str] = {}
    if not text or not text.strip():
        return params

    content_key = extract_content_key(text)
    if content_key is not None:
        params["contentKey"] = content_key
    else:
        name = extract_name(text)
        if name is not None:
            params["name"] = name

    params.update(extract_dates(text))

    threshold = extract_threshold(text)
    if threshold is not None:
        params["threshold"] = threshold

    category = extract_category(text)
    if category is not None:
        params["category"] = category

    logger.debug(f"Extracted parameters from '{text}': {params}")
    return params


class ParameterExtractor(ParameterExtractorInterface):
    """Service wrapper around extract_parameters."""

    def extract(self, text: str) -> Dict[str, str]:
        return extract_parameters(text)
