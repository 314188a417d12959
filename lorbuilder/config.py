from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "LoR Deck Builder"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/lorbuilder"

    anthropic_api_key: str = ""
    oracle_model: str = "claude-sonnet-4-20250514"
    oracle_max_tokens: int = 4096
    oracle_temperature: float = 0.7

    # Riot Data Dragon card bundles
    data_dragon_base_url: str = "https://dd.b.pvp.net/latest"
    data_dragon_set_bundles: list[str] = [
        "set1",
        "set2",
        "set3",
        "set4",
        "set5",
        "set6",
        "set6cde",
        "set7",
        "set7b",
        "set8",
        "set9",
        "set10",
        "set11",
        "set12",
    ]

    # A catalog below this size is treated as not loaded
    min_catalog_size: int = 100


settings = Settings()


# =============================================================================
# DECK LEGALITY RULES
# =============================================================================

DECK_SIZE = 40
MAX_COPIES_PER_CARD = 3
MAX_CHAMPIONS = 6

# Regions a deck may draw from (advisory, enforced by the sanitizer)
MAX_DECK_REGIONS = 2

# Regions whose cards are legal alongside any pair of regions
WILDCARD_REGIONS: frozenset[str] = frozenset({"Runeterra"})

# =============================================================================
# REPAIR ENGINE
# =============================================================================

CHAMPION_SEED_COPIES = 3
CORE_CARD_COPIES = 2

# Each scan adds at most one copy per candidate, so three scans can max out a card
FILL_SCAN_PASSES = 3
