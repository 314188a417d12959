"""
Oracle client.

Asks Claude for a deck suggestion. The reply is free text and is
treated as untrusted; parsing and sanitization happen downstream.
"""

import logging
from enum import Enum

import anthropic
from anthropic.types import TextBlock

from lorbuilder.config import DECK_SIZE, MAX_CHAMPIONS, MAX_COPIES_PER_CARD, settings
from lorbuilder.models.failure import OracleResponseUnparseable, OracleUnavailable
from lorbuilder.services.catalog import Catalog

logger = logging.getLogger(__name__)


class GenerationMode(str, Enum):
    """What the oracle is asked to return."""

    CONCEPT = "concept"
    FULL_LIST = "full_list"


_RULES = f"""CRITICAL RULES (MUST FOLLOW):
1. EXACTLY {DECK_SIZE} cards total (sum all card counts)
2. Maximum {MAX_COPIES_PER_CARD} copies of ANY single card
3. Maximum {MAX_CHAMPIONS} champion cards total across entire deck
4. Use 1-2 regions only
5. All cards MUST be from the selected regions
6. NEVER include 0-cost cards
7. ONLY use cards from the card pools listed below"""

_FULL_LIST_FORMAT = """Return ONLY a valid JSON object with this exact structure:
{
  "name": "Deck Name",
  "description": "Brief description of deck strategy and win condition",
  "cards": [
    {"cardCode": "01DE012", "count": 3},
    {"cardCode": "01DE002", "count": 3}
  ],
  "regions": ["Demacia", "Freljord"],
  "champions": ["Garen", "Braum"]
}

Before responding, check that the counts sum to exactly 40, that no card
has more than 3 copies and that champion copies total 6 or fewer."""

_CONCEPT_FORMAT = """Do NOT list a full deck. Describe the concept only.
Return ONLY a valid JSON object with this exact structure:
{
  "name": "Deck Name",
  "description": "Brief description of deck strategy and win condition",
  "champions": ["Garen", "Lux"],
  "coreCards": ["Single Combat", "Vanguard Sergeant"],
  "regions": ["Demacia"],
  "playstyle": "aggro"
}

Name 2-3 champions and 8-12 core cards, using card names exactly as listed."""


def build_full_deck_prompt(catalog: Catalog) -> str:
    """System prompt asking for a complete card list."""
    return (
        "You are a Legends of Runeterra deck building expert. "
        f"Generate a VALID {DECK_SIZE}-card deck.\n\n"
        f"{_RULES}\n\n"
        "DECK COMPOSITION:\n"
        "- Champions: 4-6 total champion cards (2-3 different champions)\n"
        "- Units: 20-28 follower units\n"
        "- Spells: 8-16 spells\n"
        "- Mana curve: 8-12 cards at 1-2 mana, 10-14 at 3-4, 6-10 at 5-6, 2-4 at 7+\n\n"
        f"{catalog.render_card_pool()}\n"
        f"{_FULL_LIST_FORMAT}"
    )


def build_concept_prompt(catalog: Catalog) -> str:
    """System prompt asking for champions and core cards by name."""
    return (
        "You are a Legends of Runeterra deck building expert. "
        "Propose the concept of a deck; it will be completed automatically.\n\n"
        f"{_RULES}\n\n"
        f"{catalog.render_card_pool()}\n"
        f"{_CONCEPT_FORMAT}"
    )


def build_user_message(prompt: str, catalog: Catalog) -> str:
    """The user's request plus the champions the catalog can actually offer."""
    champion_names = ", ".join(
        card.name for card in catalog.champions if catalog.is_encodable(card.code)
    )
    return (
        f"{prompt}\n\n"
        f"AVAILABLE CHAMPIONS: {champion_names}\n\n"
        "If the user asks for a champion NOT in this list, pick similar champions "
        "that ARE available."
    )


def request_deck_suggestion(
    prompt: str,
    catalog: Catalog,
    mode: GenerationMode = GenerationMode.CONCEPT,
    client: anthropic.Anthropic | None = None,
) -> str:
    """
    Ask the oracle for a deck suggestion.

    Args:
        prompt: The user's natural-language deck request
        catalog: Catalog whose cards are offered to the model
        mode: Concept or full card list
        client: Anthropic client (built from settings if omitted)

    Returns:
        The model's raw reply text

    Raises:
        OracleUnavailable: If no API key is configured or the API call fails
        OracleResponseUnparseable: If the reply carries no text
    """
    if client is None:
        if not settings.anthropic_api_key:
            raise OracleUnavailable("Anthropic API key not configured")
        client = anthropic.Anthropic(api_key=settings.anthropic_api_key)

    if mode is GenerationMode.FULL_LIST:
        system_prompt = build_full_deck_prompt(catalog)
    else:
        system_prompt = build_concept_prompt(catalog)

    try:
        response = client.messages.create(
            model=settings.oracle_model,
            max_tokens=settings.oracle_max_tokens,
            temperature=settings.oracle_temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": build_user_message(prompt, catalog)}],
        )
    except anthropic.APIError as e:
        raise OracleUnavailable(f"{type(e).__name__}: {e}") from e

    if response.usage:
        logger.info(
            "token_usage",
            extra={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
                "mode": mode.value,
            },
        )

    text = "".join(block.text for block in response.content if isinstance(block, TextBlock))
    if not text.strip():
        raise OracleResponseUnparseable("No content in response")
    return text
