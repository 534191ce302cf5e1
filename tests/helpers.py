"""Dobles de prueba compartidos por los tests."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from calendario_app.core.errors import ApiError
from calendario_app.models.dto import CalendarResponse, UpcomingEventsResponse
from calendario_app.models.event import Area, Event, EventType
from calendario_app.models.user import User, UserRole

ADMIN = User(id="u-admin", nombre="Ana", email="ana@ejemplo.com", rol=UserRole.ADMIN)
VEEDOR = User(id="u-veedor", nombre="Victor", email="victor@ejemplo.com", rol=UserRole.VEEDOR)


def make_event(
    event_id: str = "e1",
    desde: str = "2025-01-22",
    hasta: Optional[str] = None,
    tipo: EventType = EventType.PENDIENTE,
    **extra: Any,
) -> Event:
    datos: Dict[str, Any] = {
        "id": event_id,
        "titulo": f"Evento {event_id}",
        "informacion": "Detalle del evento",
        "fecha_desde": desde,
        "fecha_hasta": hasta or desde,
        "hora_desde": "09:00",
        "hora_hasta": "10:00",
        "tipo_evento": tipo,
        "area": Area.AUDITORIO,
        "organizador_solicitante": "Municipalidad",
        "contacto_formal": "+54 9 11 1234-5678",
    }
    datos.update(extra)
    return Event(**datos)


class FakeNavigator:
    def __init__(self) -> None:
        self.visitas: List[tuple] = []
        self.refrescos = 0

    def navigate(self, route, **params) -> None:
        self.visitas.append((route, params))

    def refresh(self) -> None:
        self.refrescos += 1

    @property
    def ultima(self):
        return self.visitas[-1][0] if self.visitas else None


class FakeEventRepository:
    def __init__(self, eventos: Optional[List[Event]] = None, error: Optional[ApiError] = None) -> None:
        self.eventos = list(eventos or [])
        self.error = error
        self.llamadas: List[tuple] = []

    def _fallar(self) -> None:
        if self.error is not None:
            raise self.error

    def listar(self, fecha_desde=None, fecha_hasta=None, tipo_evento=None) -> List[Event]:
        self.llamadas.append(("listar", fecha_desde, fecha_hasta, tipo_evento))
        self._fallar()
        return list(self.eventos)

    def obtener(self, event_id: str) -> Event:
        self.llamadas.append(("obtener", event_id))
        self._fallar()
        for evento in self.eventos:
            if evento.id == event_id:
                return evento
        raise ApiError("Evento no existe", 404)

    def crear(self, dto) -> Event:
        self.llamadas.append(("crear", dto))
        self._fallar()
        return make_event("nuevo")

    def actualizar(self, event_id: str, dto) -> Event:
        self.llamadas.append(("actualizar", event_id, dto))
        self._fallar()
        return make_event(event_id)

    def eliminar(self, event_id: str) -> None:
        self.llamadas.append(("eliminar", event_id))
        self._fallar()


class FakeUserRepository:
    def __init__(self, usuarios: Optional[List[User]] = None, error: Optional[ApiError] = None) -> None:
        self.usuarios = list(usuarios or [])
        self.error = error
        self.llamadas: List[tuple] = []

    def _fallar(self) -> None:
        if self.error is not None:
            raise self.error

    def obtener_usuarios(self) -> List[User]:
        self.llamadas.append(("obtener_usuarios",))
        self._fallar()
        return list(self.usuarios)

    def obtener(self, user_id: str) -> User:
        self.llamadas.append(("obtener", user_id))
        self._fallar()
        return next(usuario for usuario in self.usuarios if usuario.id == user_id)

    def crear(self, dto) -> User:
        self.llamadas.append(("crear", dto))
        self._fallar()
        return User(id="nuevo", nombre=dto.nombre, email=dto.email, rol=dto.rol)

    def actualizar(self, user_id: str, dto) -> User:
        self.llamadas.append(("actualizar", user_id, dto))
        self._fallar()
        return User(id=user_id, nombre=dto.nombre or "", email=dto.email or "")

    def eliminar(self, user_id: str) -> None:
        self.llamadas.append(("eliminar", user_id))
        self._fallar()


class FakeCalendarRepository:
    def __init__(self, eventos: Optional[List[Event]] = None, error: Optional[ApiError] = None) -> None:
        self.eventos = list(eventos or [])
        self.error = error
        self.llamadas: List[tuple] = []

    def mes(self, year: int, month: int) -> CalendarResponse:
        self.llamadas.append(("mes", year, month))
        if self.error is not None:
            raise self.error
        return CalendarResponse(
            year=year,
            month=month,
            start_date=f"{year:04d}-{month:02d}-01",
            end_date=f"{year:04d}-{month:02d}-28",
            events=list(self.eventos),
            total_events=len(self.eventos),
        )

    def proximos(self, days: int = 7) -> UpcomingEventsResponse:
        self.llamadas.append(("proximos", days))
        if self.error is not None:
            raise self.error
        return UpcomingEventsResponse(
            start_date="",
            end_date="",
            days=days,
            events=list(self.eventos),
            total_events=len(self.eventos),
        )


class FakeSession:
    """Sustituto mínimo de ``SessionStore`` para controladores."""

    def __init__(self, user: Optional[User] = None) -> None:
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.rol is UserRole.ADMIN
