"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Database ─────────────────────────────────────────────────────────
    database_url: str                    # e.g. postgresql+asyncpg://user:pw@host:5432/todos
    db_pool_size: int = 10
    db_max_overflow: int = 20
    create_tables: bool = True           # run metadata.create_all on startup

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str                      # HMAC secret for bearer tokens, no default
    jwt_expiry_seconds: int = 3600       # 1 hour

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 3000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    # Wipes every user and todo. Keep off outside local development.
    enable_reset_endpoint: bool = False

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }


config = Settings()
