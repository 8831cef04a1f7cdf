from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_PATH = Path(__file__).parent.parent / "database"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TCGKIOSK_")

    app_name: str = "TCG Kiosk"
    debug: bool = False
    log_level: str = "INFO"

    # Root of the card tree: <root>/<game>/cards/**/*.json
    database_path: Path = DEFAULT_DATABASE_PATH

    default_page_size: int = 24
    max_page_size: int = 200

    # When False, an empty game selection browses every game at once
    require_game_selection: bool = True

    asset_base_url: str = "/assets/"

    image_proxy_base_url: str = "https://images.weserv.nl/?url="
    image_proxy_hosts: list[str] = ["images.pokemontcg.io"]
    proxy_timeout: float = 10.0
    # Largest upstream image body the proxy will relay
    proxy_max_bytes: int = 5_000_000
    proxy_max_redirects: int = 3


settings = Settings()


# =============================================================================
# BROWSER UI LIMITS
# =============================================================================

# Page sizes offered by the page-size selector
PAGE_SIZE_CHOICES = (12, 24, 48, 96)

# Responsive sizes hint attached to every non-empty srcset
IMAGE_SIZES_HINT = "(max-width: 600px) 80vw, (max-width: 900px) 40vw, 220px"
