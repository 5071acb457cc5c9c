"""Rendering of search requests into HTTP requests."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from typing import Any, BinaryIO
from urllib.parse import quote_plus

import httpx

from saucenao.domain.models import MAX_DB_MASK
from saucenao.exceptions import ConstructionError

SEARCH_PATH = "/search.php"
# output_type=2 selects the JSON API.
OUTPUT_TYPE_JSON = 2


@dataclass(frozen=True, slots=True)
class ImageURL:
    """Image the service downloads itself."""

    url: str


@dataclass(frozen=True, slots=True)
class ImageUpload:
    """Image uploaded from a binary stream, read once when the request is built."""

    stream: BinaryIO


ImageSource = ImageURL | ImageUpload


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """Describes a search request.

    ``db_mask`` selects the indexes to search and ``db_mask_exclude`` the
    indexes to skip; both are bit-per-index-id masks (see ``db_mask()``).
    ``test_mode`` limits matches to one per index.
    """

    source: ImageSource | None = None
    test_mode: bool = False
    db_mask: int = 0
    db_mask_exclude: int = 0
    num_results: int = 16

    def __post_init__(self) -> None:
        for mask in (self.db_mask, self.db_mask_exclude):
            if not 0 <= mask <= MAX_DB_MASK:
                raise ValueError(f"database mask out of 64-bit range: {mask}")
        if self.num_results < 0:
            raise ValueError("num_results must be non-negative")

    @classmethod
    def for_url(cls, url: str, **options: Any) -> SearchRequest:
        return cls(source=ImageURL(url), **options)

    @classmethod
    def for_image(cls, image: BinaryIO | bytes, **options: Any) -> SearchRequest:
        if isinstance(image, (bytes, bytearray)):
            image = BytesIO(image)
        return cls(source=ImageUpload(image), **options)


def build_search_url(service: str, api_key: str, request: SearchRequest) -> str:
    """Return the search URL; parameter order is fixed."""

    params = [
        f"output_type={OUTPUT_TYPE_JSON}",
        f"api_key={api_key}",
        f"numres={request.num_results}",
    ]
    if request.test_mode:
        params.append("testmode=1")
    if request.db_mask:
        params.append(f"dbmask={request.db_mask}")
    if request.db_mask_exclude:
        params.append(f"dbmaski={request.db_mask_exclude}")
    source = request.source
    if isinstance(source, ImageURL) and source.url:
        params.append(f"url={quote_plus(source.url)}")
    return f"{service}{SEARCH_PATH}?{'&'.join(params)}"


def build_http_request(
    http_client: httpx.AsyncClient,
    service: str,
    api_key: str,
    request: SearchRequest,
    *,
    timeout: Any = httpx.USE_CLIENT_DEFAULT,
) -> httpx.Request:
    """Render ``request`` as a GET, or a multipart POST when uploading bytes."""

    url = build_search_url(service, api_key, request)
    source = request.source
    if not isinstance(source, ImageUpload):
        return http_client.build_request("GET", url, timeout=timeout)

    content = _read_image(source.stream)
    return http_client.build_request(
        "POST",
        url,
        files={"file": ("image", content)},
        timeout=timeout,
    )


def _read_image(stream: BinaryIO) -> bytes:
    try:
        content = stream.read()
    except (OSError, ValueError) as exc:
        raise ConstructionError(f"failed to read image: {exc}") from exc
    if not isinstance(content, (bytes, bytearray)):
        raise ConstructionError("image stream must be opened in binary mode")
    return bytes(content)


__all__ = [
    "ImageSource",
    "ImageURL",
    "ImageUpload",
    "SearchRequest",
    "build_search_url",
    "build_http_request",
]
