"""
Oracle suggestion shapes.

The oracle is untrusted, so both shapes accept loosely-typed input:
unknown keys are ignored and malformed list items are dropped rather
than failing the whole suggestion.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _name_list(value: Any) -> list[str]:
    """Keep string items (or {"name": ...} objects) from an untrusted list."""
    if not isinstance(value, list):
        return []
    names: list[str] = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("name")
        if isinstance(item, str) and item.strip():
            names.append(item.strip())
    return names


class _Suggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    description: str = ""
    regions: list[str] = Field(default_factory=list)

    @field_validator("name", "description", mode="before")
    @classmethod
    def _text_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("regions", mode="before")
    @classmethod
    def _regions(cls, value: Any) -> list[str]:
        return _name_list(value)


def _is_card_entry(item: Any) -> bool:
    """A dict with a string code and, if present, an integer count."""
    if not isinstance(item, dict):
        return False
    if not any(isinstance(item.get(key), str) for key in ("cardCode", "card_code", "code")):
        return False
    count = item.get("count", 1)
    return isinstance(count, int) and not isinstance(count, bool)


class SuggestedCard(BaseModel):
    """One card entry of a full-list suggestion."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    card_code: str = Field(validation_alias=AliasChoices("cardCode", "card_code", "code"))
    count: int = 1


class FullDeckSuggestion(_Suggestion):
    """A suggestion that already lists card codes and counts."""

    cards: list[SuggestedCard] = Field(default_factory=list)

    @field_validator("cards", mode="before")
    @classmethod
    def _card_entries(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, SuggestedCard) or _is_card_entry(item)]


class DeckConceptSuggestion(_Suggestion):
    """A suggestion naming champions and core cards by name."""

    champions: list[str] = Field(default_factory=list)
    core_cards: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("coreCards", "core_cards", "keyCards"),
    )
    playstyle: str = ""

    @field_validator("champions", "core_cards", mode="before")
    @classmethod
    def _names(cls, value: Any) -> list[str]:
        return _name_list(value)

    @field_validator("playstyle", mode="before")
    @classmethod
    def _playstyle(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""


OracleSuggestion = FullDeckSuggestion | DeckConceptSuggestion
