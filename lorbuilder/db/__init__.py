from lorbuilder.db.database import get_session, init_db
from lorbuilder.db.operations import (
    catalog_card_to_model,
    count_catalog_cards,
    count_catalog_cards_by_type,
    create_deck,
    deck_to_record,
    delete_deck,
    get_deck,
    list_catalog_cards,
    list_user_decks,
    replace_catalog_cards,
    update_deck_code,
)

__all__ = [
    "catalog_card_to_model",
    "count_catalog_cards",
    "count_catalog_cards_by_type",
    "create_deck",
    "deck_to_record",
    "delete_deck",
    "get_deck",
    "get_session",
    "init_db",
    "list_catalog_cards",
    "list_user_decks",
    "replace_catalog_cards",
    "update_deck_code",
]
