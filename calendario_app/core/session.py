"""Estado de sesión compartido de la aplicación.

:class:`SessionStore` es el único estado mutable de alcance global. Se crea
una vez en ``main`` y se inyecta en las vistas; sólo cambia a través de
``inicializar``, ``login``, ``register`` y ``logout``.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Optional

from calendario_app.core.navigation import Navigator, Route
from calendario_app.infrastructure.repositories import AuthRepository
from calendario_app.infrastructure.storage import CLAVE_TOKEN, CLAVE_USUARIO, KeyValueStorage
from calendario_app.models.dto import AuthResponse
from calendario_app.models.user import User, UserRole

logger = logging.getLogger(__name__)


def decode_token_payload(token: str) -> Optional[dict[str, Any]]:
    """Decodifica el segmento central de un JWT sin verificar firma ni expiración.

    Sólo confirma que el token tiene forma válida; devuelve ``None`` si no
    se puede decodificar.
    """

    partes = (token or "").split(".")
    if len(partes) < 2 or not partes[1]:
        return None
    segmento = partes[1]
    segmento += "=" * (-len(segmento) % 4)
    try:
        crudo = base64.urlsafe_b64decode(segmento.replace("+", "-").replace("/", "_"))
        payload = json.loads(crudo.decode("utf-8"))
    except (binascii.Error, ValueError):
        return None
    return payload if isinstance(payload, dict) else None


class SessionStore:
    """Usuario autenticado y token vigente."""

    def __init__(
        self,
        auth_repository: AuthRepository,
        storage: KeyValueStorage,
        navigator: Optional[Navigator] = None,
    ) -> None:
        self._auth_repository = auth_repository
        self._storage = storage
        self._navigator = navigator
        self._user: Optional[User] = None
        self._token: Optional[str] = None
        self._is_loading = True

    def set_navigator(self, navigator: Navigator) -> None:
        self._navigator = navigator

    # ------------------------------------------------------------------
    # Estado derivado
    # ------------------------------------------------------------------
    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def is_admin(self) -> bool:
        return self._user is not None and self._user.rol is UserRole.ADMIN

    def token_actual(self) -> Optional[str]:
        """Proveedor de token para :class:`APIClient`."""

        return self._token or self._storage.get(CLAVE_TOKEN)

    # ------------------------------------------------------------------
    # Ciclo de vida
    # ------------------------------------------------------------------
    def inicializar(self) -> None:
        """Restaura la sesión persistida, si existe y tiene forma válida."""

        token = self._storage.get(CLAVE_TOKEN)
        usuario_guardado = self._storage.get(CLAVE_USUARIO)

        try:
            if not (token and usuario_guardado):
                return
            if decode_token_payload(token) is None:
                logger.warning("Token almacenado ilegible; se cierra la sesión")
                self.logout()
                return
            try:
                usuario = User.from_dict(json.loads(usuario_guardado))
            except (ValueError, KeyError, TypeError):
                logger.warning("Usuario almacenado ilegible; se cierra la sesión")
                self.logout()
                return
            self._token = token
            self._user = usuario
            logger.info("Sesión restaurada para %s", usuario.email)
        finally:
            self._is_loading = False

    def login(self, email: str, password: str) -> User:
        respuesta = self._auth_repository.login(email, password)
        return self._establecer(respuesta)

    def register(self, nombre: str, email: str, password: str) -> User:
        respuesta = self._auth_repository.register(nombre, email, password)
        return self._establecer(respuesta)

    def logout(self) -> None:
        self._storage.remove(CLAVE_TOKEN)
        self._storage.remove(CLAVE_USUARIO)
        self._token = None
        self._user = None
        logger.info("Sesión cerrada")
        self._navegar(Route.LOGIN)

    def _establecer(self, respuesta: AuthResponse) -> User:
        self._storage.set(CLAVE_TOKEN, respuesta.access_token)
        self._storage.set(CLAVE_USUARIO, json.dumps(respuesta.user.to_dict()))
        self._token = respuesta.access_token
        self._user = respuesta.user
        self._is_loading = False
        logger.info("Sesión iniciada para %s", respuesta.user.email)
        self._navegar(Route.DASHBOARD)
        return respuesta.user

    def _navegar(self, route: Route) -> None:
        if self._navigator is not None:
            self._navigator.navigate(route)


__all__ = ["SessionStore", "decode_token_payload"]
