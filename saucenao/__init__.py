"""Client for the SauceNAO reverse image search API."""

from saucenao.domain.models import (
    CommonData,
    DanbooruData,
    Index,
    SearchHeader,
    SearchResponse,
    SearchResult,
    SearchResultHeader,
    db_mask,
)
from saucenao.exceptions import (
    ConstructionError,
    DecodeError,
    QuotaError,
    SauceNAOError,
    TransportError,
    UnexpectedStatusError,
)
from saucenao.services.search import SearchClient
from saucenao.services.search_request import (
    ImageUpload,
    ImageURL,
    SearchRequest,
)

__all__ = [
    "SearchClient",
    "SearchRequest",
    "ImageURL",
    "ImageUpload",
    "SearchResponse",
    "SearchHeader",
    "SearchResult",
    "SearchResultHeader",
    "CommonData",
    "DanbooruData",
    "Index",
    "db_mask",
    "SauceNAOError",
    "ConstructionError",
    "TransportError",
    "QuotaError",
    "UnexpectedStatusError",
    "DecodeError",
]
