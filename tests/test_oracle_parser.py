"""Tests for oracle reply parsing."""

import json

import pytest

from lorbuilder.models.failure import OracleResponseUnparseable
from lorbuilder.models.suggestion import DeckConceptSuggestion, FullDeckSuggestion
from lorbuilder.services.oracle_parser import extract_json_object, parse_oracle_response


class TestExtractJsonObject:
    def test_plain_object(self) -> None:
        assert extract_json_object('{"name": "Deck"}') == '{"name": "Deck"}'

    def test_surrounding_prose(self) -> None:
        """Text before and after the object is cut away."""
        text = 'Here is your deck:\n{"name": "Deck"}\nGood luck!'

        assert extract_json_object(text) == '{"name": "Deck"}'

    def test_fenced_block(self) -> None:
        """A fenced json block wins over braces in the prose."""
        text = 'Use {braces} wisely.\n```json\n{"name": "Deck"}\n```'

        assert extract_json_object(text) == '{"name": "Deck"}'

    def test_strips_comments_and_trailing_commas(self) -> None:
        text = '{\n  "a": 1, // one\n  /* block */ "b": [1, 2,],\n}'

        assert extract_json_object(text).replace(" ", "").replace("\n", "") == '{"a":1,"b":[1,2]}'

    def test_keeps_urls_in_strings(self) -> None:
        """Double slashes inside values are not comments."""
        text = '{"source": "https://dd.b.pvp.net/latest"}'

        assert extract_json_object(text) == text

    def test_keeps_comment_markers_in_strings(self) -> None:
        """Spaced // and /* inside a value survive, escaped quotes included."""
        text = '{"name": "Burn // Aggro", // tag\n"note": "say \\"hi\\" /* loud */"}'

        assert json.loads(extract_json_object(text)) == {
            "name": "Burn // Aggro",
            "note": 'say "hi" /* loud */',
        }

    def test_no_object(self) -> None:
        with pytest.raises(OracleResponseUnparseable):
            extract_json_object("I could not build a deck.")

    def test_empty_reply(self) -> None:
        with pytest.raises(OracleResponseUnparseable):
            extract_json_object("   ")


class TestParseOracleResponse:
    def test_fenced_reply_with_comment_and_dangling_comma(self) -> None:
        """The usual model quirks still parse."""
        text = """Sure! Here's a concept:
```json
{
  "name": "Demacian Might",
  "champions": ["Garen", "Lux"], // the stars
  "coreCards": ["Single Combat", "Vanguard Sergeant",],
  "regions": ["Demacia"],
}
```"""

        suggestion = parse_oracle_response(text)

        assert isinstance(suggestion, DeckConceptSuggestion)
        assert suggestion.name == "Demacian Might"
        assert suggestion.champions == ["Garen", "Lux"]
        assert suggestion.core_cards == ["Single Combat", "Vanguard Sergeant"]
        assert suggestion.regions == ["Demacia"]

    def test_double_slash_in_deck_name(self) -> None:
        """A deck name containing // parses from a fenced reply."""
        text = '```json\n{"name": "Burn // Aggro", "champions": ["Garen"], "coreCards": [],}\n```'

        suggestion = parse_oracle_response(text)

        assert isinstance(suggestion, DeckConceptSuggestion)
        assert suggestion.name == "Burn // Aggro"
        assert suggestion.champions == ["Garen"]

    def test_full_card_list(self) -> None:
        """An object with a cards list is a full-list suggestion."""
        text = """{
          "name": "Ramp",
          "cards": [
            {"cardCode": "01FR009", "count": 3},
            {"cardCode": "01FR024", "count": 2},
            "not a card",
            {"count": 3}
          ],
          "regions": ["Freljord"]
        }"""

        suggestion = parse_oracle_response(text)

        assert isinstance(suggestion, FullDeckSuggestion)
        assert [(card.card_code, card.count) for card in suggestion.cards] == [
            ("01FR009", 3),
            ("01FR024", 2),
        ]

    def test_key_cards_alias(self) -> None:
        """keyCards is read as the core card list."""
        suggestion = parse_oracle_response('{"champions": [], "keyCards": ["Riposte"]}')

        assert isinstance(suggestion, DeckConceptSuggestion)
        assert suggestion.core_cards == ["Riposte"]

    def test_loose_values_are_tolerated(self) -> None:
        """Wrongly typed fields become empty instead of failing."""
        suggestion = parse_oracle_response(
            '{"name": 42, "champions": "Garen", "coreCards": [1, {"name": "Detain"}, " "]}'
        )

        assert isinstance(suggestion, DeckConceptSuggestion)
        assert suggestion.name == ""
        assert suggestion.champions == []
        assert suggestion.core_cards == ["Detain"]

    def test_neither_shape(self) -> None:
        with pytest.raises(OracleResponseUnparseable, match="neither"):
            parse_oracle_response('{"name": "Deck", "description": "No cards"}')

    def test_invalid_json(self) -> None:
        with pytest.raises(OracleResponseUnparseable, match="invalid JSON"):
            parse_oracle_response('{"champions": ["Garen" "Lux"]}')

    def test_non_integer_count_drops_entry(self) -> None:
        """Entries with unusable counts are dropped, the rest of the list is kept."""
        suggestion = parse_oracle_response(
            '{"cards": [{"cardCode": "01DE012", "count": "three"}, '
            '{"cardCode": "01DE013", "count": null}, {"cardCode": "01DE014", "count": true}, '
            '{"cardCode": "01DE015", "count": 2}, {"cardCode": "01DE016"}]}'
        )

        assert isinstance(suggestion, FullDeckSuggestion)
        assert [(card.card_code, card.count) for card in suggestion.cards] == [
            ("01DE015", 2),
            ("01DE016", 1),
        ]
