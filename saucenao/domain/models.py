"""Pydantic models for SauceNAO search responses."""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Annotated, Any, Callable, ClassVar, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    Strict,
    ValidationError,
    model_validator,
)

from saucenao.exceptions import DecodeError

MAX_INDEX_ID = 63
MAX_DB_MASK = (1 << (MAX_INDEX_ID + 1)) - 1


class Index(IntEnum):
    """Well-known index ids. Any id in 0..63 may be used in a mask."""

    PIXIV = 5
    DANBOORU = 9
    YANDERE = 12
    GELBOORU = 25
    KONACHAN = 26

    @property
    def bit(self) -> int:
        return 1 << self.value


def db_mask(*indexes: int) -> int:
    """Combine index ids into a ``dbmask``/``dbmaski`` bitmask."""

    mask = 0
    for index in indexes:
        if not 0 <= index <= MAX_INDEX_ID:
            raise ValueError(f"index id out of range: {index}")
        mask |= 1 << index
    return mask


INT_PATTERN = re.compile(r"[-+]?\d+")
FLOAT_PATTERN = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")


def _from_numeric_string(
    pattern: re.Pattern[str], parse: Callable[[str], Any]
) -> BeforeValidator:
    def _validate(value: Any) -> Any:
        if not isinstance(value, str):
            raise ValueError("expected a number encoded as a JSON string")
        if not pattern.fullmatch(value):
            raise ValueError(f"malformed numeric string: {value!r}")
        return parse(value)

    return BeforeValidator(_validate)


def _reject_strings(value: Any) -> Any:
    if isinstance(value, (str, bool)):
        raise ValueError("expected a JSON number")
    return value


# The service sends these as strings, e.g. "similarity": "18.71".
StringInt = Annotated[int, _from_numeric_string(INT_PATTERN, int)]
StringFloat = Annotated[float, _from_numeric_string(FLOAT_PATTERN, float)]
# Everything else must arrive as a plain JSON number.
NativeInt = Annotated[int, Strict()]
NativeFloat = Annotated[float, BeforeValidator(_reject_strings)]


class WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    # Fields whose explicit null is kept instead of falling back to the default.
    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, value: Any) -> Any:
        # null behaves like an absent field and falls back to the default.
        if isinstance(value, dict):
            return {
                key: item
                for key, item in value.items()
                if item is not None or key in cls.nullable_fields
            }
        return value


class SearchHeader(WireModel):
    status: NativeInt = 0
    results_requested: NativeInt = 0
    results_returned: NativeInt = 0

    short_remaining: NativeInt = 0
    long_remaining: NativeInt = 0
    short_limit: StringInt = 0
    long_limit: StringInt = Field(
        default=0,
        validation_alias=AliasChoices("Long_limit", "long_limit"),
    )

    minimum_similarity: NativeFloat = 0.0


class SearchResultHeader(WireModel):
    index_name: str = ""
    index_id: NativeInt = 0
    thumbnail: str = ""
    similarity: StringFloat = Field(default=0.0, ge=0, le=100)


class CommonData(WireModel):
    """Result data shared by every index."""

    ext_urls: list[str] = Field(default_factory=list)


class DanbooruData(CommonData):
    danbooru_id: NativeInt = 0
    source: str = ""
    characters: str = ""
    material: str = ""
    creator: str = ""


IndexData = TypeVar("IndexData", bound=CommonData)


class SearchResult(WireModel):
    """One match. ``data`` stays raw until the caller picks a schema for it."""

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"data"})

    header: SearchResultHeader = Field(default_factory=SearchResultHeader)
    data: Any = None

    def as_index(self, schema: type[IndexData]) -> IndexData:
        """Decode ``data`` as ``schema`` without checking ``header.index_id``.

        An explicit ``"data": null`` yields the schema's zero value; a result
        without any ``data`` key raises :class:`DecodeError`.
        """

        if "data" not in self.model_fields_set:
            raise DecodeError(f"search result as {schema.__name__}: no data")
        if self.data is None:
            return schema()
        try:
            return schema.model_validate(self.data)
        except ValidationError as exc:
            raise DecodeError(f"search result as {schema.__name__}: {exc}") from exc

    def as_danbooru(self) -> DanbooruData:
        return self.as_index(DanbooruData)


class SearchResponse(WireModel):
    header: SearchHeader = Field(default_factory=SearchHeader)
    results: list[SearchResult] = Field(default_factory=list)


__all__ = [
    "Index",
    "db_mask",
    "SearchHeader",
    "SearchResultHeader",
    "CommonData",
    "DanbooruData",
    "SearchResult",
    "SearchResponse",
]
