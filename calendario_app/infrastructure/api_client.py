"""Cliente HTTP del backend REST de eventos.

Todas las llamadas pasan por :meth:`APIClient._request`, que agrega el token
``Bearer`` cuando existe, serializa el cuerpo en JSON y convierte cualquier
respuesta fuera del rango 2xx en :class:`ApiError`. No hay reintentos ni
caché: cada método hace exactamente una petición.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional
from urllib.error import HTTPError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from calendario_app.config import get_settings
from calendario_app.core.errors import MENSAJE_CONEXION, MENSAJE_GENERICO, ApiError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class APIClient:
    """Fachada sobre los endpoints ``/auth``, ``/users``, ``/events`` y ``/calendar``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        timeout: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.api_base).rstrip("/")
        self._token_provider = token_provider
        self._timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_token_provider(self, token_provider: Optional[TokenProvider]) -> None:
        self._token_provider = token_provider

    # ------------------------------------------------------------------
    # Transporte
    # ------------------------------------------------------------------
    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(self, method: str, endpoint: str, body: Any = None) -> Any:
        url = f"{self._base_url}{endpoint}"
        data = json.dumps(body).encode("utf-8") if body is not None else None
        request = Request(url, data=data, method=method, headers=self._headers())
        logger.debug("%s %s", method, url)

        try:
            with urlopen(request, timeout=self._timeout) as response:
                raw = response.read()
        except HTTPError as exc:
            error = self._error_desde_respuesta(exc)
            logger.warning("%s %s -> %s: %s", method, url, error.status_code, error.message)
            raise error from exc
        except OSError as exc:
            # URLError, timeouts y conexiones cortadas
            logger.warning("%s %s sin respuesta: %s", method, url, exc)
            raise ApiError(MENSAJE_CONEXION) from exc

        text = raw.decode("utf-8") if raw else ""
        if not text.strip():
            return {}
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("%s %s devolvió JSON inválido", method, url)
            raise ApiError("Respuesta inválida del servidor") from exc

    @staticmethod
    def _error_desde_respuesta(exc: HTTPError) -> ApiError:
        try:
            payload = json.loads(exc.read() or b"")
        except (OSError, ValueError):
            return ApiError(MENSAJE_CONEXION, exc.code)

        mensaje = payload.get("message") if isinstance(payload, dict) else None
        if isinstance(mensaje, list):
            mensaje = ", ".join(str(item) for item in mensaje)
        return ApiError(mensaje or MENSAJE_GENERICO, exc.code)

    # ------------------------------------------------------------------
    # Autenticación
    # ------------------------------------------------------------------
    def login(self, email: str, password: str) -> dict:
        return self._request("POST", "/auth/login", {"email": email, "password": password})

    def register(self, nombre: str, email: str, password: str) -> dict:
        return self._request(
            "POST",
            "/auth/register",
            {"nombre": nombre, "email": email, "password": password},
        )

    # ------------------------------------------------------------------
    # Usuarios
    # ------------------------------------------------------------------
    def get_users(self) -> list[dict]:
        return self._request("GET", "/users")

    def get_user(self, user_id: str) -> dict:
        return self._request("GET", f"/users/{user_id}")

    def create_user(self, data: dict) -> dict:
        return self._request("POST", "/users", data)

    def update_user(self, user_id: str, data: dict) -> dict:
        return self._request("PATCH", f"/users/{user_id}", data)

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", f"/users/{user_id}")

    # ------------------------------------------------------------------
    # Eventos
    # ------------------------------------------------------------------
    def get_events(
        self,
        fecha_desde: Optional[str] = None,
        fecha_hasta: Optional[str] = None,
        tipo_evento: Optional[str] = None,
    ) -> list[dict]:
        params = {
            clave: valor
            for clave, valor in (
                ("fechaDesde", fecha_desde),
                ("fechaHasta", fecha_hasta),
                ("tipoEvento", tipo_evento),
            )
            if valor
        }
        query = f"?{urlencode(params)}" if params else ""
        return self._request("GET", f"/events{query}")

    def get_event(self, event_id: str) -> dict:
        return self._request("GET", f"/events/{event_id}")

    def create_event(self, data: dict) -> dict:
        return self._request("POST", "/events", data)

    def update_event(self, event_id: str, data: dict) -> dict:
        return self._request("PATCH", f"/events/{event_id}", data)

    def delete_event(self, event_id: str) -> None:
        self._request("DELETE", f"/events/{event_id}")

    # ------------------------------------------------------------------
    # Calendario
    # ------------------------------------------------------------------
    def get_calendar(self, year: int, month: int) -> dict:
        return self._request("GET", f"/calendar?{urlencode({'year': year, 'month': month})}")

    def get_upcoming_events(self, days: int = 7) -> dict:
        return self._request("GET", f"/calendar/upcoming?{urlencode({'days': days})}")


__all__ = ["APIClient", "TokenProvider"]
