"""Implementaciones de repositorios para acceso a datos."""

from __future__ import annotations

from typing import Optional

from calendario_app.infrastructure.api_client import APIClient
from calendario_app.models.dto import (
    AuthResponse,
    CalendarResponse,
    CreateEventDTO,
    CreateUserDTO,
    UpcomingEventsResponse,
    UpdateEventDTO,
    UpdateUserDTO,
)
from calendario_app.models.event import Event, EventType
from calendario_app.models.user import User


# Un 2xx sin cuerpo llega como {}: la operación se hizo pero no hay entidad
def _evento_o_none(datos: dict) -> Optional[Event]:
    return Event.from_dict(datos) if datos else None


def _usuario_o_none(datos: dict) -> Optional[User]:
    return User.from_dict(datos) if datos else None


class AuthRepository:
    """Login y registro contra ``/auth``."""

    def __init__(self, api_client: APIClient) -> None:
        self._api_client = api_client

    def login(self, email: str, password: str) -> AuthResponse:
        return AuthResponse.from_dict(self._api_client.login(email, password))

    def register(self, nombre: str, email: str, password: str) -> AuthResponse:
        return AuthResponse.from_dict(self._api_client.register(nombre, email, password))


class EventRepository:
    """Repositorio de eventos basado en un cliente API."""

    def __init__(self, api_client: APIClient) -> None:
        self._api_client = api_client

    def listar(
        self,
        fecha_desde: Optional[str] = None,
        fecha_hasta: Optional[str] = None,
        tipo_evento: Optional[EventType] = None,
    ) -> list[Event]:
        eventos_crudos = self._api_client.get_events(
            fecha_desde=fecha_desde,
            fecha_hasta=fecha_hasta,
            tipo_evento=tipo_evento.value if tipo_evento else None,
        )
        return [Event.from_dict(datos) for datos in eventos_crudos or []]

    def obtener(self, event_id: str) -> Event:
        return Event.from_dict(self._api_client.get_event(event_id))

    def crear(self, dto: CreateEventDTO) -> Optional[Event]:
        return _evento_o_none(self._api_client.create_event(dto.to_payload()))

    def actualizar(self, event_id: str, dto: UpdateEventDTO) -> Optional[Event]:
        return _evento_o_none(self._api_client.update_event(event_id, dto.to_payload()))

    def eliminar(self, event_id: str) -> None:
        self._api_client.delete_event(event_id)


class UserRepository:
    """Repositorio de usuarios basado en un cliente API."""

    def __init__(self, api_client: APIClient) -> None:
        self._api_client = api_client

    def obtener_usuarios(self) -> list[User]:
        """Devuelve la lista completa de usuarios."""

        usuarios_crudos = self._api_client.get_users()
        return [User.from_dict(datos) for datos in usuarios_crudos or []]

    def obtener(self, user_id: str) -> User:
        return User.from_dict(self._api_client.get_user(user_id))

    def crear(self, dto: CreateUserDTO) -> Optional[User]:
        return _usuario_o_none(self._api_client.create_user(dto.to_payload()))

    def actualizar(self, user_id: str, dto: UpdateUserDTO) -> Optional[User]:
        return _usuario_o_none(self._api_client.update_user(user_id, dto.to_payload()))

    def eliminar(self, user_id: str) -> None:
        self._api_client.delete_user(user_id)


class CalendarRepository:
    def __init__(self, api_client: APIClient) -> None:
        self._api_client = api_client

    def mes(self, year: int, month: int) -> CalendarResponse:
        return CalendarResponse.from_dict(self._api_client.get_calendar(year, month))

    def proximos(self, days: int = 7) -> UpcomingEventsResponse:
        return UpcomingEventsResponse.from_dict(self._api_client.get_upcoming_events(days))


__all__ = ["AuthRepository", "CalendarRepository", "EventRepository", "UserRepository"]
