"""Almacenamiento de estado del cliente.

:class:`JsonFileStorage` persiste entre ejecuciones (token y usuario);
:class:`MemoryStorage` vive sólo mientras dura el proceso (desbloqueo de la
vista pública).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)

CLAVE_TOKEN = "access_token"
CLAVE_USUARIO = "user"
CLAVE_DESBLOQUEO = "calendar_unlocked"


class KeyValueStorage(Protocol):
    def get(self, clave: str) -> Optional[str]: ...

    def set(self, clave: str, valor: str) -> None: ...

    def remove(self, clave: str) -> None: ...


class MemoryStorage:
    """Almacén en memoria, se pierde al cerrar la aplicación."""

    def __init__(self) -> None:
        self._datos: Dict[str, str] = {}

    def get(self, clave: str) -> Optional[str]:
        return self._datos.get(clave)

    def set(self, clave: str, valor: str) -> None:
        self._datos[clave] = valor

    def remove(self, clave: str) -> None:
        self._datos.pop(clave, None)


class JsonFileStorage:
    """Almacén clave/valor respaldado por un archivo JSON."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _leer(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            datos = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("No se pudo leer %s: %s", self.path, exc)
            return {}
        if not isinstance(datos, dict):
            return {}
        return {str(clave): str(valor) for clave, valor in datos.items()}

    def _escribir(self, datos: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(datos, ensure_ascii=False, indent=2), encoding="utf-8")

    def get(self, clave: str) -> Optional[str]:
        return self._leer().get(clave)

    def set(self, clave: str, valor: str) -> None:
        datos = self._leer()
        datos[clave] = valor
        self._escribir(datos)

    def remove(self, clave: str) -> None:
        datos = self._leer()
        if clave in datos:
            del datos[clave]
            self._escribir(datos)


__all__ = [
    "CLAVE_DESBLOQUEO",
    "CLAVE_TOKEN",
    "CLAVE_USUARIO",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
]
