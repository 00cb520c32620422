from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str
    port: int
    debug: bool
    cors_origins: list[str] = []
    records_api_url: str  # Base URL of the record CRUD API, e.g. http://localhost:8080
    records_api_timeout: float | None = None  # Seconds; None leaves record API calls unbounded
    import_error_limit: int = 20  # Per-row error strings kept in an import summary
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "STAFFDESK_",
        "extra": "ignore",
    }
