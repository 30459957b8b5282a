from pydantic import BaseModel
import os
from pathlib import Path
from dotenv import load_dotenv
load_dotenv()  # carga el archivo .env de la raíz


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "Pets")
    env: str = os.getenv("APP_ENV", "dev")
    database_path: str = os.getenv("DATABASE_PATH", str(Path(__file__).resolve().parents[1] / "shelter.db"))
    frontend_base_url: str = os.getenv("FRONTEND_BASE_URL", "http://localhost:5173")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    rate_limit_enabled: bool = _env_flag("RATE_LIMIT_ENABLED", "true")
    write_rate_limit: str = os.getenv("WRITE_RATE_LIMIT", "30/minute")


_settings: Settings | None = None
def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
        Path(_settings.database_path).parent.mkdir(parents=True, exist_ok=True)
    return _settings
