"""
Typed async client for the Open5e content API.

Fetches monsters, classes, races, spells and magic items and validates every
record into an immutable pydantic model.
"""

from .client import Open5eClient
from .config import DEFAULT_OPEN5E_API_URL, Open5eSettings, load_settings
from .endpoint import Endpoint
from .exceptions import (
    InvalidInputError,
    Open5eError,
    SchemaValidationError,
    TransportError,
)
from .models import (
    DOCUMENTS,
    AbilityScoreIncrease,
    Archetype,
    CharacterClass,
    Document,
    DocumentSlug,
    GameObject,
    MagicItem,
    Monster,
    MonsterAction,
    Race,
    Speed,
    Spell,
    Subrace,
)
from .query import (
    GameObjectOptions,
    MonsterQueryOptions,
    SpellQueryOptions,
    monster_query,
    spell_query,
)
from .validation import challenge_rating_to_float, parse_envelope, parse_record

__all__ = [
    "Open5eClient",
    "DEFAULT_OPEN5E_API_URL",
    "Open5eSettings",
    "load_settings",
    "Endpoint",
    "Open5eError",
    "InvalidInputError",
    "TransportError",
    "SchemaValidationError",
    "DOCUMENTS",
    "DocumentSlug",
    "Document",
    "GameObject",
    "Monster",
    "MonsterAction",
    "Speed",
    "CharacterClass",
    "Archetype",
    "Race",
    "Subrace",
    "AbilityScoreIncrease",
    "Spell",
    "MagicItem",
    "GameObjectOptions",
    "MonsterQueryOptions",
    "SpellQueryOptions",
    "monster_query",
    "spell_query",
    "parse_record",
    "parse_envelope",
    "challenge_rating_to_float",
]
