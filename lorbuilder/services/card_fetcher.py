"""
Card catalog download.

Fetches card data from Riot's Data Dragon set bundles and stores it as
the live catalog.
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from lorbuilder.config import settings
from lorbuilder.db.operations import replace_catalog_cards
from lorbuilder.models.card import CardAttributes, CardCategory
from lorbuilder.models.failure import CatalogUnavailable

logger = logging.getLogger(__name__)

# Card types that never go into a deck built here
_SKIPPED_TYPES = frozenset({"Landmark"})


def bundle_url(bundle: str, base_url: str | None = None) -> str:
    """Data Dragon URL of a set bundle's English card file."""
    base = (base_url or settings.data_dragon_base_url).rstrip("/")
    return f"{base}/{bundle}/en_us/data/{bundle}-en_us.json"


def normalize_card(raw: dict[str, Any]) -> CardAttributes | None:
    """
    Convert a Data Dragon card to catalog attributes.

    Returns None for non-collectible cards, skipped types and rows
    without a code or name.
    """
    if not raw.get("collectible"):
        return None

    card_type = raw.get("type") or ""
    if card_type in _SKIPPED_TYPES:
        return None

    code = raw.get("cardCode")
    name = raw.get("name")
    if not isinstance(code, str) or not isinstance(name, str) or not code or not name:
        return None

    if raw.get("supertype") == "Champion":
        category = CardCategory.CHAMPION
    else:
        category = CardCategory.from_type(card_type)

    region_refs = raw.get("regionRefs") or []
    region = (
        raw.get("regionRef")
        or raw.get("region")
        or (region_refs[0] if region_refs else None)
        or "Unknown"
    )

    cost = raw.get("cost")
    return CardAttributes(
        code=code,
        name=name,
        cost=cost if isinstance(cost, int) and cost >= 0 else 0,
        category=category,
        region=region,
        rarity=raw.get("rarity") or "",
    )


async def fetch_data_dragon_cards(
    bundles: Sequence[str] | None = None,
    base_url: str | None = None,
) -> list[CardAttributes]:
    """
    Download and normalize every configured set bundle.

    A bundle that fails to download is logged and skipped.

    Raises:
        CatalogUnavailable: If no cards could be fetched at all
    """
    cards: list[CardAttributes] = []

    async with httpx.AsyncClient(timeout=30.0) as client:
        for bundle in bundles or settings.data_dragon_set_bundles:
            url = bundle_url(bundle, base_url)
            try:
                response = await client.get(url)
                response.raise_for_status()
                raw_cards = response.json()
            except httpx.HTTPError as e:
                logger.warning("Failed to fetch %s: %s", bundle, e)
                continue
            except ValueError as e:
                logger.warning("Bundle %s is not valid JSON: %s", bundle, e)
                continue

            if not isinstance(raw_cards, list):
                logger.warning("Bundle %s did not contain a card list", bundle)
                continue

            normalized = [
                card
                for card in (normalize_card(raw) for raw in raw_cards if isinstance(raw, dict))
                if card is not None
            ]
            cards.extend(normalized)
            logger.info("Fetched %d cards from %s", len(normalized), bundle)

    if not cards:
        raise CatalogUnavailable(
            "Failed to fetch any cards from Data Dragon. The service may be down."
        )
    return cards


async def refresh_catalog(session: AsyncSession) -> int:
    """
    Replace the live catalog with fresh Data Dragon data.

    Returns the number of cards stored.
    """
    cards = await fetch_data_dragon_cards()
    stored = await replace_catalog_cards(session, cards)
    logger.info("catalog_refreshed", extra={"fetched": len(cards), "stored": stored})
    return stored
