from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Where goals live: "http" (remote goals API) or "sql" (direct DB access)
    gateway_backend: str = "http"

    goals_api_url: str = "http://localhost:4567"
    goals_api_timeout: float = 10.0  # seconds per request

    database_url: str = "postgresql+asyncpg://localhost:5432/goaltracker"

    # Identity source: the active user's id. Unset means no goals can be loaded.
    user_id: str | None = None

    api_key: str | None = None
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
