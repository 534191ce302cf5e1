"""Acceso a la vista pública del calendario.

La contraseña se compara en el cliente contra el valor configurado. Sólo
desalienta el acceso casual: no es una barrera de seguridad.
"""

from __future__ import annotations

import logging
from typing import Optional

from calendario_app.config import get_settings
from calendario_app.core.navigation import Navigator, Route
from calendario_app.infrastructure.storage import CLAVE_DESBLOQUEO, KeyValueStorage

logger = logging.getLogger(__name__)

MENSAJE_VACIA = "Por favor ingresa la contraseña"
MENSAJE_INCORRECTA = "Contraseña incorrecta"


class PublicGate:
    def __init__(
        self,
        session_storage: KeyValueStorage,
        navigator: Optional[Navigator] = None,
        password: Optional[str] = None,
    ) -> None:
        self._storage = session_storage
        self._navigator = navigator
        self._password = password if password is not None else get_settings().LOCK_PASSWORD
        self.error = ""

    def set_navigator(self, navigator: Navigator) -> None:
        self._navigator = navigator

    @property
    def desbloqueado(self) -> bool:
        return self._storage.get(CLAVE_DESBLOQUEO) == "true"

    def desbloquear(self, password: str) -> bool:
        self.error = ""
        if not password.strip():
            self.error = MENSAJE_VACIA
            return False
        if password != self._password:
            logger.info("Intento fallido de acceso al calendario público")
            self.error = MENSAJE_INCORRECTA
            return False

        self._storage.set(CLAVE_DESBLOQUEO, "true")
        if self._navigator is not None:
            self._navigator.navigate(Route.PUBLIC_CALENDAR)
        return True

    def bloquear(self) -> None:
        self._storage.remove(CLAVE_DESBLOQUEO)


__all__ = ["MENSAJE_INCORRECTA", "MENSAJE_VACIA", "PublicGate"]
