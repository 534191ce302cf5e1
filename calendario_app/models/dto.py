"""Objetos de transferencia hacia y desde el backend."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional

from calendario_app.models.event import Area, Event, EventType
from calendario_app.models.user import User, UserRole

# Nombre en Python -> nombre en el JSON del backend
_CAMPOS_EVENTO = {
    "titulo": "titulo",
    "descripcion": "descripcion",
    "informacion": "informacion",
    "fecha_desde": "fechaDesde",
    "fecha_hasta": "fechaHasta",
    "hora_desde": "horaDesde",
    "hora_hasta": "horaHasta",
    "tipo_evento": "tipoEvento",
    "area": "area",
    "organizador_solicitante": "organizadorSolicitante",
    "cobertura_prensa": "coberturaPrensaBol",
    "anexos": "anexos",
    "contacto_formal": "contactoFormal",
    "contacto_informal": "contactoInformal",
    "convocatoria": "convocatoria",
}

# Campos opcionales que se omiten cuando están vacíos en lugar de enviar ""
_OPCIONALES_TEXTO = {"descripcion", "contacto_informal"}


def _serializar(valor: Any) -> Any:
    if isinstance(valor, (EventType, Area, UserRole)):
        return valor.value
    return valor


def _payload_evento(valores: dict[str, Any]) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for nombre, clave in _CAMPOS_EVENTO.items():
        valor = valores.get(nombre)
        if valor is None:
            continue
        if nombre in _OPCIONALES_TEXTO and not valor:
            continue
        payload[clave] = _serializar(valor)
    return payload


@dataclass(slots=True)
class CreateEventDTO:
    titulo: str
    informacion: str
    fecha_desde: str
    fecha_hasta: str
    hora_desde: str
    hora_hasta: str
    tipo_evento: EventType
    area: Area
    organizador_solicitante: str
    contacto_formal: str
    cobertura_prensa: bool = False
    convocatoria: int = 0
    anexos: List[str] = field(default_factory=list)
    descripcion: Optional[str] = None
    contacto_informal: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        return _payload_evento(asdict(self))


@dataclass(slots=True)
class UpdateEventDTO:
    """Actualización parcial: los campos ``None`` no se envían."""

    titulo: Optional[str] = None
    descripcion: Optional[str] = None
    informacion: Optional[str] = None
    fecha_desde: Optional[str] = None
    fecha_hasta: Optional[str] = None
    hora_desde: Optional[str] = None
    hora_hasta: Optional[str] = None
    tipo_evento: Optional[EventType] = None
    area: Optional[Area] = None
    organizador_solicitante: Optional[str] = None
    cobertura_prensa: Optional[bool] = None
    anexos: Optional[List[str]] = None
    contacto_formal: Optional[str] = None
    contacto_informal: Optional[str] = None
    convocatoria: Optional[int] = None

    def to_payload(self) -> dict[str, Any]:
        return _payload_evento(asdict(self))


@dataclass(slots=True)
class CreateUserDTO:
    nombre: str
    email: str
    password: str
    rol: UserRole = UserRole.VEEDOR

    def to_payload(self) -> dict[str, Any]:
        return {
            "nombre": self.nombre,
            "email": self.email,
            "password": self.password,
            "rol": self.rol.value,
        }


@dataclass(slots=True)
class UpdateUserDTO:
    nombre: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    rol: Optional[UserRole] = None

    def to_payload(self) -> dict[str, Any]:
        payload = {
            "nombre": self.nombre,
            "email": self.email,
            "rol": _serializar(self.rol),
        }
        if self.password:
            payload["password"] = self.password
        return {clave: valor for clave, valor in payload.items() if valor is not None}


@dataclass(frozen=True, slots=True)
class AuthResponse:
    user: User
    access_token: str

    @classmethod
    def from_dict(cls, datos: dict[str, Any]) -> "AuthResponse":
        return cls(user=User.from_dict(datos["user"]), access_token=datos["access_token"])


@dataclass(frozen=True, slots=True)
class CalendarResponse:
    year: int
    month: int
    start_date: str
    end_date: str
    events: List[Event]
    total_events: int

    @classmethod
    def from_dict(cls, datos: dict[str, Any]) -> "CalendarResponse":
        eventos = [Event.from_dict(item) for item in datos.get("events") or []]
        return cls(
            year=int(datos.get("year") or 0),
            month=int(datos.get("month") or 0),
            start_date=datos.get("startDate") or "",
            end_date=datos.get("endDate") or "",
            events=eventos,
            total_events=int(datos.get("totalEvents") or len(eventos)),
        )


@dataclass(frozen=True, slots=True)
class UpcomingEventsResponse:
    start_date: str
    end_date: str
    days: int
    events: List[Event]
    total_events: int

    @classmethod
    def from_dict(cls, datos: dict[str, Any]) -> "UpcomingEventsResponse":
        eventos = [Event.from_dict(item) for item in datos.get("events") or []]
        return cls(
            start_date=datos.get("startDate") or "",
            end_date=datos.get("endDate") or "",
            days=int(datos.get("days") or 0),
            events=eventos,
            total_events=int(datos.get("totalEvents") or len(eventos)),
        )


__all__ = [
    "AuthResponse",
    "CalendarResponse",
    "CreateEventDTO",
    "CreateUserDTO",
    "UpcomingEventsResponse",
    "UpdateEventDTO",
    "UpdateUserDTO",
]
