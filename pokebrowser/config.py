from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "PokeBrowser"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/pokebrowser"

    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    http_timeout: float = 30.0

    # Artificial delay before each upstream call, used to demo loading states
    simulated_latency: float = 0.0

    # Items per list page, shared by the page loaders and the browse sessions
    page_size: int = 20

    # How many names are pulled when searching Pokémon by name
    search_limit: int = 2000

    pending_message: str = "Submitting..."
    error_message: str = "An error occurred"


settings = Settings()


# =============================================================================
# COMPARISON LIMITS
# =============================================================================

# Maximum number of records held side by side for comparison
MAX_COMPARE = 4
