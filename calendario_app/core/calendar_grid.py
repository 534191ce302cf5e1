"""Construcción de la grilla mensual de 6 semanas (domingo primero).

La grilla siempre tiene 42 celdas. Los días del mes anterior y del siguiente
se muestran sólo como números: sus eventos no se piden al backend y por eso
esas celdas nunca llevan eventos.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from calendario_app.models.event import Event

TOTAL_CELDAS = 42
EVENTOS_POR_CELDA = 3

DIAS_SEMANA = ("Dom", "Lun", "Mar", "Mié", "Jue", "Vie", "Sáb")
NOMBRES_MESES = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)


@dataclass(frozen=True, slots=True)
class CalendarCell:
    """Celda de la grilla: número de día, pertenencia al mes y eventos."""

    dia: int
    es_mes_actual: bool
    eventos: Tuple[Event, ...] = field(default_factory=tuple)


def _validar_mes(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Mes fuera de rango: {month}")


def dias_en_mes(year: int, month: int) -> int:
    _validar_mes(month)
    return calendar.monthrange(year, month)[1]


def primer_dia_semana(year: int, month: int) -> int:
    """Día de la semana del día 1 con 0 = domingo."""

    _validar_mes(month)
    # date.weekday(): lunes = 0 ... domingo = 6
    return (date(year, month, 1).weekday() + 1) % 7


def mes_anterior(year: int, month: int) -> Tuple[int, int]:
    return (year - 1, 12) if month == 1 else (year, month - 1)


def mes_siguiente(year: int, month: int) -> Tuple[int, int]:
    return (year + 1, 1) if month == 12 else (year, month + 1)


def clave_dia(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def construir_grilla(year: int, month: int, eventos: Iterable[Event]) -> List[CalendarCell]:
    """Devuelve las 42 celdas del mes ``month`` de ``year``.

    Cada celda del mes actual contiene, en el orden recibido, los eventos
    cuyo rango ``[fecha_desde, fecha_hasta]`` incluye el día.
    """

    total_dias = dias_en_mes(year, month)
    inicio = primer_dia_semana(year, month)
    eventos = list(eventos)

    celdas: List[CalendarCell] = []

    anio_prev, mes_prev = mes_anterior(year, month)
    dias_prev = dias_en_mes(anio_prev, mes_prev)
    for offset in range(inicio - 1, -1, -1):
        celdas.append(CalendarCell(dia=dias_prev - offset, es_mes_actual=False))

    for dia in range(1, total_dias + 1):
        clave = clave_dia(year, month, dia)
        del_dia = tuple(evento for evento in eventos if evento.ocurre_en(clave))
        celdas.append(CalendarCell(dia=dia, es_mes_actual=True, eventos=del_dia))

    restantes = TOTAL_CELDAS - len(celdas)
    for dia in range(1, restantes + 1):
        celdas.append(CalendarCell(dia=dia, es_mes_actual=False))

    return celdas


def eventos_visibles(
    celda: CalendarCell, limite: int = EVENTOS_POR_CELDA
) -> Tuple[Sequence[Event], int]:
    """Eventos a dibujar en la celda y cantidad oculta para el "+N más"."""

    visibles = celda.eventos[:limite]
    return visibles, len(celda.eventos) - len(visibles)


def es_hoy(celda: CalendarCell, year: int, month: int, hoy: Optional[date] = None) -> bool:
    hoy = hoy or date.today()
    return (
        celda.es_mes_actual
        and celda.dia == hoy.day
        and month == hoy.month
        and year == hoy.year
    )


def fecha_de_celda(celda: CalendarCell, year: int, month: int) -> Optional[date]:
    if not celda.es_mes_actual:
        return None
    return date(year, month, celda.dia)


def titulo_mes(year: int, month: int) -> str:
    _validar_mes(month)
    return f"{NOMBRES_MESES[month - 1]} {year}"


__all__ = [
    "CalendarCell",
    "DIAS_SEMANA",
    "EVENTOS_POR_CELDA",
    "NOMBRES_MESES",
    "TOTAL_CELDAS",
    "clave_dia",
    "construir_grilla",
    "dias_en_mes",
    "es_hoy",
    "eventos_visibles",
    "fecha_de_celda",
    "mes_anterior",
    "mes_siguiente",
    "primer_dia_semana",
    "titulo_mes",
]
