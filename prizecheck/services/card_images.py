"""
Card image lookup.

Looks cards up by name in the Pokémon TCG API (https://pokemontcg.io) to
show card art. Purely cosmetic: failures are logged and reported as "no
image", never raised.
"""

import logging
from collections import OrderedDict
from functools import lru_cache

import httpx

from prizecheck.config import settings
from prizecheck.models.card import CardImage
from prizecheck.services.scoring import normalize_card_name

logger = logging.getLogger(__name__)


class CardImageLookup:
    """
    Async client for card image metadata.

    Answers from the API, including "no such card", are kept in a
    least-recently-used cache of cache_size normalized names. Failed
    requests are not cached, so the next lookup asks the API again.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        cache_size: int | None = None,
    ) -> None:
        self.base_url = (base_url or settings.pokemon_tcg_api_url).rstrip("/")
        self.api_key = settings.pokemon_tcg_api_key if api_key is None else api_key
        self.timeout = timeout or settings.card_image_timeout
        self.cache_size = settings.card_image_cache_size if cache_size is None else cache_size
        self._cache: OrderedDict[str, CardImage | None] = OrderedDict()

    async def lookup(self, card_name: str) -> CardImage | None:
        """
        Find image metadata for a card.

        Args:
            card_name: Card identifier, with or without set code and number

        Returns:
            CardImage for the first match, or None
        """
        name = normalize_card_name(card_name) or card_name.strip()
        if not name:
            return None
        if name in self._cache:
            self._cache.move_to_end(name)
            return self._cache[name]

        try:
            image = await self._fetch(name)
        except httpx.HTTPStatusError as e:
            logger.error("Card image API returned %d for %s", e.response.status_code, name)
            return None
        except httpx.RequestError as e:
            logger.error("Card image request failed for %s: %s", name, e)
            return None

        self._remember(name, image)
        return image

    def _remember(self, name: str, image: CardImage | None) -> None:
        if self.cache_size <= 0:
            return
        self._cache[name] = image
        while len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)

    async def _fetch(self, name: str) -> CardImage | None:
        url = f"{self.base_url}/cards"
        params = {"q": f'name:"{name}"', "pageSize": "1"}
        headers = {"X-Api-Key": self.api_key} if self.api_key else {}

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(url, params=params, headers=headers)
            response.raise_for_status()
            data = response.json()

        cards = data.get("data") or []
        if not cards:
            logger.info("No card image found for %s", name)
            return None

        card = cards[0]
        images = card.get("images") or {}
        return CardImage(
            id=str(card.get("id", "")),
            name=str(card.get("name", name)),
            small=str(images.get("small", "")),
            large=str(images.get("large", "")),
        )


@lru_cache(maxsize=1)
def get_card_image_lookup() -> CardImageLookup:
    """Shared lookup instance (FastAPI dependency)."""
    return CardImageLookup()
