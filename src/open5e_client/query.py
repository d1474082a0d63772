"""
Query options and query-string builders for list endpoints.

Parameter names are fixed by the Open5e API: `limit`, `page`, `search`,
`cr`, `level_int` and `document__slug__in`.
"""

import math
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Callable, TypeVar
from urllib.parse import urlencode

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from .exceptions import InvalidInputError
from .validation import challenge_rating_to_float


DEFAULT_LIMIT = 50
MAX_LIMIT = 5000


# =============================================================================
# Options
# =============================================================================

class GameObjectOptions(BaseModel):
    """Filters shared by every list endpoint."""
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    document_slug: StrictStr | tuple[StrictStr, ...] | None = Field(
        default=None,
        validation_alias=AliasChoices("document_slug", "document__slug"),
        description="Limit results to one or more source documents",
    )
    limit: StrictInt = Field(
        default=DEFAULT_LIMIT,
        ge=1,
        le=MAX_LIMIT,
        description="Maximum number of records to return",
    )
    page: StrictInt | None = Field(
        default=None,
        gt=0,
        description="Page number, used together with limit. First page is 1",
    )
    search: StrictStr | None = Field(
        default=None,
        description="Only records whose name or description contain this text",
    )
    api_url: StrictStr | None = Field(
        default=None,
        description="Override the base URL for this call",
    )

    @field_validator("document_slug", mode="before")
    @classmethod
    def sequence_to_tuple(cls, v: Any) -> Any:
        if isinstance(v, Enum):
            return v.value
        if isinstance(v, str):
            return v or None
        if isinstance(v, Sequence):
            return tuple(s.value if isinstance(s, Enum) else s for s in v) or None
        return v


class MonsterQueryOptions(GameObjectOptions):
    """Filters for endpoints that support challenge rating (monsters and friends)."""
    challenge_rating: StrictInt | StrictFloat | None = Field(
        default=None,
        description="Exact challenge rating. Fractions such as '1/8' are accepted",
    )

    @field_validator("challenge_rating", mode="before")
    @classmethod
    def parse_challenge_rating(cls, v: Any) -> Any:
        if isinstance(v, str):
            return challenge_rating_to_float(v)
        return v

    @field_validator("challenge_rating")
    @classmethod
    def non_negative(cls, v: int | float | None) -> int | float | None:
        if v is None:
            return v
        if not math.isfinite(v):
            raise ValueError("challenge_rating must be a finite number")
        if v < 0:
            raise ValueError("challenge_rating must not be negative")
        return v


class SpellQueryOptions(GameObjectOptions):
    """Filters for the spell endpoint."""
    spell_level: StrictInt | None = Field(
        default=None,
        ge=0,
        le=9,
        description="Spell level; 0 means cantrips",
    )


OptionsT = TypeVar("OptionsT", bound=GameObjectOptions)

QueryBuilder = Callable[[Any], str]


def coerce_options(
    model: type[OptionsT],
    options: OptionsT | Mapping[str, Any] | None,
) -> OptionsT:
    """
    Validate caller options into `model`.

    Raises:
        InvalidInputError: If an option is unknown, out of range or mistyped.
    """
    if isinstance(options, model):
        return options
    try:
        if isinstance(options, BaseModel):
            return model.model_validate(options.model_dump(exclude_unset=True))
        return model.model_validate(dict(options or {}))
    except ValidationError as e:
        raise InvalidInputError(
            f"Invalid query options: {e.error_count()} error(s): "
            + "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ),
            details={"errors": e.errors(include_url=False)},
        ) from e


# =============================================================================
# Encoding
# =============================================================================

def _format_number(value: int | float) -> str:
    """Render 2.0 as '2' and 0.125 as '0.125'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_query_params(params: Mapping[str, Any]) -> str:
    """
    Encode parameters into a query string, keeping insertion order.

    None values are dropped, sequences are joined with ',' into a single
    parameter and numbers are written in their shortest decimal form.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.append((key, ",".join(str(v) for v in value)))
        elif isinstance(value, bool):
            pairs.append((key, str(value).lower()))
        elif isinstance(value, (int, float)):
            pairs.append((key, _format_number(value)))
        else:
            pairs.append((key, str(value)))
    return urlencode(pairs)


def monster_query(options: MonsterQueryOptions | Mapping[str, Any] | None = None) -> str:
    """Query string for classes, magic items, monsters and races."""
    opts = coerce_options(MonsterQueryOptions, options)
    return build_query_params({
        "limit": opts.limit,
        "page": opts.page,
        "search": opts.search,
        "cr": opts.challenge_rating,
        "document__slug__in": opts.document_slug,
    })


def spell_query(options: SpellQueryOptions | Mapping[str, Any] | None = None) -> str:
    """Query string for spells."""
    opts = coerce_options(SpellQueryOptions, options)
    return build_query_params({
        "limit": opts.limit,
        "page": opts.page,
        "search": opts.search,
        "level_int": opts.spell_level,
        "document__slug__in": opts.document_slug,
    })


__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "GameObjectOptions",
    "MonsterQueryOptions",
    "SpellQueryOptions",
    "QueryBuilder",
    "coerce_options",
    "build_query_params",
    "monster_query",
    "spell_query",
]
