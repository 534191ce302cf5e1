"""Configuración de la aplicación leída del entorno y de ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Parámetros del cliente de escritorio."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Backend REST
    API_URL: str = "http://localhost:3000/api"
    REQUEST_TIMEOUT: float = 15.0

    # Contraseña de la vista pública; no es un mecanismo de seguridad
    LOCK_PASSWORD: str = "123"

    # Carpeta donde se guardan token y usuario entre ejecuciones
    STORAGE_DIR: Path = Path.home() / ".calendario_app"

    LOG_LEVEL: str = "INFO"

    @property
    def api_base(self) -> str:
        return self.API_URL.rstrip("/")

    @property
    def storage_file(self) -> Path:
        return self.STORAGE_DIR / "session.json"


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
