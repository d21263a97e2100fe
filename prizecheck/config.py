from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "PrizeCheck"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "postgresql+asyncpg://localhost:5432/prizecheck"

    pokemon_tcg_api_url: str = "https://api.pokemontcg.io/v2"
    pokemon_tcg_api_key: str = ""
    card_image_timeout: float = 10.0
    card_image_cache_size: int = 1024

    # Players need this many recorded games before they are ranked
    leaderboard_min_games: int = 3

    allowed_origins: list[str] = ["*"]


settings = Settings()
