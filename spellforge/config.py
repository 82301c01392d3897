from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "SpellForge"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/spellforge"

    # Short links expire after this many days
    share_ttl_days: int = 30
    share_id_length: int = 7

    # Builder page short links redirect to when no path was stored
    default_share_path: str = "/deck-builder"


settings = Settings()


# =============================================================================
# SHARE LINK LIMITS
# =============================================================================

# Longest token accepted by the share endpoint. A full v2 team token is
# well under 1 KB; anything far larger is not one of ours.
MAX_SHARE_HASH_LENGTH = 4096

# Longest redirect path stored with a short link
MAX_SHARE_PATH_LENGTH = 255
