"""
In-process tool catalog.

A small inverted index used when no external search service is configured.
It keeps the same delete-all / upload discipline as a remote catalog, so the
empty window during a rebuild behaves the same way.
"""
import logging
import re
from collections import defaultdict
from typing import Dict, Iterable, List

from tool_router.domains.errors import CatalogUnavailableError
from tool_router.domains.tools import ToolDescriptor
from tool_router.interfaces.providers.catalog import ToolCatalogProvider

logger = logging.getLogger(__name__)

DEFAULT_TOP = 50

# field -> weight
FIELD_WEIGHTS = {
    "name": 3,
    "description": 2,
    "parameters": 1,
    "plugin": 1,
    "path": 1,
    "response": 1,
}

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD = re.compile(r"[a-z0-9]+")


def normalize_token(token: str) -> str:
    if len(token) > 3 and token.endswith("s") and not token.endswith("ss"):
        return token[:-1]
    return token


def tokenize(text: str) -> List[str]:
    """Split text into normalized search tokens.

    ``GetLowStockProducts`` yields ``get``, ``low``, ``stock``, ``product``.
    """
    if not text:
        return []
    text = _ACRONYM_BOUNDARY.sub(r"\1 \2", text)
    text = _CAMEL_BOUNDARY.sub(r"\1 \2", text)
    return [normalize_token(word) for word in _WORD.findall(text.lower())]


def descriptor_fields(descriptor: ToolDescriptor) -> Dict[str, str]:
    return {
        "name": descriptor.name,
        "description": descriptor.description,
        "parameters": descriptor.parameters_text,
        "plugin": descriptor.plugin_id,
        "path": descriptor.invocation_path,
        "response": descriptor.response_type_hint,
    }


def weighted_tokens(descriptor: ToolDescriptor) -> Dict[str, int]:
    """Token -> summed field weight for one descriptor."""
    weights: Dict[str, int] = defaultdict(int)
    for field, text in descriptor_fields(descriptor).items():
        for token in set(tokenize(text)):
            weights[token] += FIELD_WEIGHTS[field]
    return weights


def is_match_all(text: str) -> bool:
    return not text or not text.strip() or text.strip() == "*"


def rank(
    candidates: Iterable[ToolDescriptor], text: str, top: int = DEFAULT_TOP
) -> List[ToolDescriptor]:
    """Order candidates by score, keeping input order for ties.

    Candidates that match no query token are dropped.
    """
    query_tokens = set(tokenize(text))
    scored = []
    for position, descriptor in enumerate(candidates):
        weights = weighted_tokens(descriptor)
        score = sum(weights.get(token, 0) for token in query_tokens)
        if score > 0:
            scored.append((-score, position, descriptor))
    scored.sort(key=lambda item: (item[0], item[1]))
    return [descriptor for _, _, descriptor in scored[:top]]


class InMemoryToolCatalog(ToolCatalogProvider):
    """Inverted-index catalog held in process memory."""

    def __init__(self, top: int = DEFAULT_TOP):
        self.top = top
        self._exists = False
        self._documents: List[ToolDescriptor] = []
        self._index: Dict[str, Dict[int, int]] = defaultdict(dict)

    async def ensure_index(self) -> None:
        if not self._exists:
            logger.info("Creating in-memory tool catalog")
            self._exists = True

    async def index_exists(self) -> bool:
        return self._exists

    async def delete_all(self) -> int:
        self._require_index()
        removed = len(self._documents)
        self._documents = []
        self._index = defaultdict(dict)
        return removed

    async def upload(self, descriptors: List[ToolDescriptor]) -> int:
        self._require_index()
        for descriptor in descriptors:
            position = len(self._documents)
            self._documents.append(descriptor)
            for token, weight in weighted_tokens(descriptor).items():
                self._index[token][position] = weight
        logger.debug(f"Uploaded {len(descriptors)} descriptors to in-memory catalog")
        return len(descriptors)

    async def search(self, text: str) -> List[ToolDescriptor]:
        self._require_index()
        if is_match_all(text):
            return list(self._documents[: self.top])

        scores: Dict[int, int] = defaultdict(int)
        for token in set(tokenize(text)):
            for position, weight in self._index.get(token, {}).items():
                scores[position] += weight
        ordered = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
        return [self._documents[position] for position, _ in ordered[: self.top]]

    async def get_all(self) -> List[ToolDescriptor]:
        self._require_index()
        return list(self._documents)

    def _require_index(self) -> None:
        if not self._exists:
            raise CatalogUnavailableError("Tool catalog index does not exist")
