"""
Open5e API client.

Bundles one Endpoint per supported resource collection behind a single
object:

    async with Open5eClient() as api:
        aboleth = await api.monsters.get("aboleth")
        cantrips = await api.spells.find_many(spell_level=0)
"""

import logging

import httpx

from .config import Open5eSettings, load_settings
from .endpoint import Endpoint
from .models import CharacterClass, MagicItem, Monster, Race, Spell
from .query import MonsterQueryOptions, SpellQueryOptions, monster_query, spell_query

logger = logging.getLogger("open5e-client")


class Open5eClient:
    """
    Client for the Open5e content API.

    Attributes:
        classes: Character classes (`/classes/`)
        magic_items: Magic items (`/magic-items/`)
        monsters: Monsters (`/monsters/`)
        races: Races (`/races/`)
        spells: Spells (`/spells/`)
    """

    classes: Endpoint[CharacterClass, MonsterQueryOptions]
    magic_items: Endpoint[MagicItem, MonsterQueryOptions]
    monsters: Endpoint[Monster, MonsterQueryOptions]
    races: Endpoint[Race, MonsterQueryOptions]
    spells: Endpoint[Spell, SpellQueryOptions]

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        settings: Open5eSettings | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root. Defaults to OPEN5E_API_URL or https://api.open5e.com
            http_client: Client shared by all endpoints. If None, each call
                opens its own unless the client is used with `async with`
            settings: Explicit settings; loaded from the environment if None
        """
        self.settings = settings or load_settings()
        self.base_url = (base_url or self.settings.api_url).rstrip("/")
        self._http_client = http_client
        self._owns_http_client = False
        self._build_endpoints()

    def _build_endpoints(self) -> None:
        def endpoint(path, schema, build_query, options_model):
            return Endpoint(
                self.base_url,
                path,
                schema,
                build_query,
                options_model,
                http_client=self._http_client,
                timeout=self.settings.timeout,
            )

        self.classes = endpoint("classes", CharacterClass, monster_query, MonsterQueryOptions)
        self.magic_items = endpoint("magic-items", MagicItem, monster_query, MonsterQueryOptions)
        self.monsters = endpoint("monsters", Monster, monster_query, MonsterQueryOptions)
        self.races = endpoint("races", Race, monster_query, MonsterQueryOptions)
        self.spells = endpoint("spells", Spell, spell_query, SpellQueryOptions)

    @property
    def endpoints(self) -> tuple[Endpoint, ...]:
        return (self.classes, self.magic_items, self.monsters, self.races, self.spells)

    def _bind_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        # Endpoint objects stay the same for the lifetime of the client
        self._http_client = http_client
        for endpoint in self.endpoints:
            endpoint._http_client = http_client

    async def __aenter__(self) -> "Open5eClient":
        if self._http_client is None:
            self._bind_http_client(httpx.AsyncClient(
                timeout=self.settings.timeout,
                follow_redirects=True,
            ))
            self._owns_http_client = True
            logger.debug(f"Opened HTTP client for {self.base_url}")
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this object opened it."""
        if self._owns_http_client and self._http_client is not None:
            http_client = self._http_client
            self._bind_http_client(None)
            self._owns_http_client = False
            await http_client.aclose()


__all__ = [
    "Open5eClient",
]
