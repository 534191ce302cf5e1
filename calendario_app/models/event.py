"""Modelo de evento y catálogos asociados (tipos y áreas)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from calendario_app.models.user import User

MAX_ANEXOS = 4


class EventType(str, Enum):
    PENDIENTE = "PENDIENTE"
    EN_CURSO = "EN_CURSO"
    FINALIZADO = "FINALIZADO"
    CANCELADO = "CANCELADO"
    MASIVO = "MASIVO"
    ESCOLAR = "ESCOLAR"


class Area(str, Enum):
    COWORKING = "COWORKING"
    AUDITORIO = "AUDITORIO"
    LABORATORIO = "LABORATORIO"
    AULA_1 = "AULA_1"
    AULA_2 = "AULA_2"
    AULA_3 = "AULA_3"
    AULA_4 = "AULA_4"
    AULA_5 = "AULA_5"
    AULA_6 = "AULA_6"
    RECEPCION_ESTE = "RECEPCION_ESTE"
    RECEPCION_OESTE = "RECEPCION_OESTE"
    EXPLANADA = "EXPLANADA"
    PLAZA = "PLAZA"
    SALA_REUNIONES = "SALA_REUNIONES"


EVENT_TYPE_LABELS = {
    EventType.PENDIENTE: "Pendiente",
    EventType.EN_CURSO: "En Curso",
    EventType.FINALIZADO: "Finalizado",
    EventType.CANCELADO: "Cancelado",
    EventType.MASIVO: "Masivo",
    EventType.ESCOLAR: "Escolar",
}

EVENT_TYPE_COLORS = {
    EventType.PENDIENTE: "#f59e0b",
    EventType.EN_CURSO: "#3b82f6",
    EventType.FINALIZADO: "#10b981",
    EventType.CANCELADO: "#6b7280",
    EventType.MASIVO: "#f43f5e",
    EventType.ESCOLAR: "#ec4899",
}

AREA_LABELS = {
    Area.COWORKING: "Coworking",
    Area.AUDITORIO: "Auditorio",
    Area.LABORATORIO: "Laboratorio",
    Area.AULA_1: "Aula 1",
    Area.AULA_2: "Aula 2",
    Area.AULA_3: "Aula 3",
    Area.AULA_4: "Aula 4",
    Area.AULA_5: "Aula 5",
    Area.AULA_6: "Aula 6",
    Area.RECEPCION_ESTE: "Recepción Este",
    Area.RECEPCION_OESTE: "Recepción Oeste",
    Area.EXPLANADA: "Explanada",
    Area.PLAZA: "Plaza",
    Area.SALA_REUNIONES: "Sala de Reuniones",
}


def solo_fecha(valor: str) -> str:
    """Devuelve la porción ``YYYY-MM-DD`` de una fecha o fecha ISO."""

    return (valor or "").split("T")[0]


@dataclass(frozen=True, slots=True)
class Event:
    """Evento programado en un área.

    Attributes
    ----------
    fecha_desde / fecha_hasta:
        Fechas de calendario tal como llegan del backend (``YYYY-MM-DD`` o
        ISO completo). Para comparar días se usa :func:`solo_fecha`.
    hora_desde / hora_hasta:
        Horas en formato ``HH:MM``.
    anexos:
        Hasta :data:`MAX_ANEXOS` URLs externas.
    created_by:
        Usuario creador; no se modifica al editar.
    """

    id: str
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
    descripcion: Optional[str] = None
    contacto_informal: Optional[str] = None
    cobertura_prensa: bool = False
    convocatoria: int = 0
    anexos: List[str] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    created_by: Optional[User] = None

    @property
    def dia_desde(self) -> str:
        return solo_fecha(self.fecha_desde)

    @property
    def dia_hasta(self) -> str:
        return solo_fecha(self.fecha_hasta)

    @property
    def es_multidia(self) -> bool:
        return self.dia_desde != self.dia_hasta

    def ocurre_en(self, dia: str) -> bool:
        """Indica si ``dia`` (``YYYY-MM-DD``) cae dentro del rango inclusivo."""

        return self.dia_desde <= dia <= self.dia_hasta

    @classmethod
    def from_dict(cls, datos: dict[str, Any]) -> "Event":
        creador = datos.get("createdBy")
        return cls(
            id=str(datos["id"]),
            titulo=datos.get("titulo") or "",
            informacion=datos.get("informacion") or "",
            fecha_desde=datos.get("fechaDesde") or "",
            fecha_hasta=datos.get("fechaHasta") or "",
            hora_desde=datos.get("horaDesde") or "",
            hora_hasta=datos.get("horaHasta") or "",
            tipo_evento=EventType(datos.get("tipoEvento") or EventType.PENDIENTE.value),
            area=Area(datos.get("area") or Area.COWORKING.value),
            organizador_solicitante=datos.get("organizadorSolicitante") or "",
            contacto_formal=datos.get("contactoFormal") or "",
            descripcion=datos.get("descripcion") or None,
            contacto_informal=datos.get("contactoInformal") or None,
            cobertura_prensa=bool(datos.get("coberturaPrensaBol", False)),
            convocatoria=int(datos.get("convocatoria") or 0),
            anexos=list(datos.get("anexos") or []),
            created_at=datos.get("createdAt"),
            updated_at=datos.get("updatedAt"),
            created_by=User.from_dict(creador) if isinstance(creador, dict) else None,
        )


__all__ = [
    "AREA_LABELS",
    "Area",
    "EVENT_TYPE_COLORS",
    "EVENT_TYPE_LABELS",
    "Event",
    "EventType",
    "MAX_ANEXOS",
    "solo_fecha",
]
