"""
Oracle response parsing.

Extracts the single JSON object from a free-text model reply and
validates it into one of the two accepted suggestion shapes:

- FullDeckSuggestion: {"cards": [{"cardCode": ..., "count": ...}], ...}
- DeckConceptSuggestion: {"champions": [...], "coreCards": [...], ...}

Models wrap JSON in markdown fences, add comments and leave trailing
commas. Those are tolerated; anything else fails closed with
OracleResponseUnparseable.
"""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from lorbuilder.models.failure import OracleResponseUnparseable
from lorbuilder.models.suggestion import (
    DeckConceptSuggestion,
    FullDeckSuggestion,
    OracleSuggestion,
)

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.DOTALL)

_TRAILING_COMMA_PATTERN = re.compile(r",(\s*[}\]])")

_CONCEPT_KEYS = ("champions", "coreCards", "core_cards", "keyCards")


def extract_json_object(text: str) -> str:
    """
    Cut the JSON object out of a model reply and clean it for json.loads.

    Raises:
        OracleResponseUnparseable: If the reply holds no braces
    """
    if not text or not text.strip():
        raise OracleResponseUnparseable("empty response")

    candidate = text
    fenced = _FENCE_PATTERN.search(text)
    if fenced and "{" in fenced.group(1):
        candidate = fenced.group(1)

    first = candidate.find("{")
    last = candidate.rfind("}")
    if first == -1 or last <= first:
        raise OracleResponseUnparseable("no JSON object found in response")
    candidate = candidate[first : last + 1]

    return _TRAILING_COMMA_PATTERN.sub(r"\1", strip_comments(candidate))


def strip_comments(text: str) -> str:
    """Remove // and /* */ comments that sit outside JSON string literals."""
    out: list[str] = []
    i = 0
    in_string = False
    while i < len(text):
        char = text[i]
        if in_string:
            out.append(char)
            if char == "\\":
                out.append(text[i + 1 : i + 2])
                i += 1
            elif char == '"':
                in_string = False
            i += 1
        elif char == '"':
            in_string = True
            out.append(char)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = len(text) if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = len(text) if end == -1 else end + 2
        else:
            out.append(char)
            i += 1
    return "".join(out)


def parse_oracle_response(text: str) -> OracleSuggestion:
    """
    Parse a model reply into a deck suggestion.

    Args:
        text: Raw model reply

    Returns:
        FullDeckSuggestion when the object lists cards, otherwise
        DeckConceptSuggestion

    Raises:
        OracleResponseUnparseable: If no suggestion can be read
    """
    raw = extract_json_object(text)

    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as e:
        raise OracleResponseUnparseable(f"invalid JSON: {e.msg} at position {e.pos}") from e

    if not isinstance(data, dict):
        raise OracleResponseUnparseable("response JSON is not an object")

    try:
        if isinstance(data.get("cards"), list):
            suggestion: OracleSuggestion = FullDeckSuggestion.model_validate(data)
        elif any(key in data for key in _CONCEPT_KEYS):
            suggestion = DeckConceptSuggestion.model_validate(data)
        else:
            raise OracleResponseUnparseable(
                "response has neither a card list nor champion/core card names"
            )
    except ValidationError as e:
        raise OracleResponseUnparseable(f"response does not match a deck shape: {e}") from e

    logger.debug(
        "oracle_response_parsed",
        extra={"shape": type(suggestion).__name__, "name": suggestion.name},
    )
    return suggestion
