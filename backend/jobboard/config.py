from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / "JobBoard"
    admin_username: str = "admin"
    # argon2 hash, generate with `python -m jobboard hash-password`.
    # Admin login is disabled while unset.
    admin_password_hash: str | None = None
    admin_token_ttl_seconds: int = 3600
    cors_origins: list[str] = [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ]
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "info"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "jobboard.sqlite"

    model_config = {"env_prefix": "JOBBOARD_"}


settings = Settings()
