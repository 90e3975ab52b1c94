"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration — reads from environment / .env file."""

    # External dataset
    dataset_url: str = "https://data.nasa.gov/resource/y77d-th95.json"
    fetch_timeout_seconds: float | None = None  # None = wait as long as it takes

    # Response cache
    cache_ttl_seconds: float = 300  # 5 minutes

    # Pagination defaults
    default_page: int = 1
    default_limit: int = 10

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    port_probe_attempts: int = 20
    allowed_origins: str = "*"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def cors_origins(self) -> list[str]:
        if self.allowed_origins == "*":
            return ["*"]
        return [o.strip() for o in self.allowed_origins.split(",")]


settings = Settings()
