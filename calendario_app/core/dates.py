"""Utilidades de fechas independientes de la zona horaria.

Las fechas del backend son días de calendario (``YYYY-MM-DD`` o un ISO
completo). Nunca se interpretan como instantes UTC: se toman año, mes y día
tal cual, de modo que "2025-01-22" es el 22 en cualquier huso horario.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional

from PyQt6.QtCore import QDate, QLocale

FORMATO_CORTO = "dd MMM yyyy"
FORMATO_LARGO = "dddd, d 'de' MMMM 'de' yyyy"
FORMATO_DIA_SEMANA = "ddd"

_LOCALE = QLocale("es_ES")


def parse_local_date(valor: str) -> date:
    """Convierte ``valor`` en una fecha usando sólo la parte anterior a ``T``.

    Raises
    ------
    ValueError
        Si la cadena no tiene la forma ``YYYY-MM-DD``.
    """

    parte_fecha = (valor or "").strip().split("T")[0]
    piezas = parte_fecha.split("-")
    if len(piezas) != 3:
        raise ValueError(f"Fecha inválida: {valor!r}")
    anio, mes, dia = (int(pieza) for pieza in piezas)
    return date(anio, mes, dia)


def _hoy(hoy: Optional[date]) -> date:
    if hoy is None:
        return date.today()
    if isinstance(hoy, datetime):
        return hoy.date()
    return hoy


def days_between(fecha: date, referencia: Optional[date] = None) -> int:
    """Días enteros (redondeo hacia arriba) de ``referencia`` a ``fecha``.

    Positivo = futuro, negativo = pasado. Ambas se normalizan a medianoche.
    """

    inicio = _hoy(referencia)
    if isinstance(fecha, datetime):
        fecha = fecha.date()
    return math.ceil((fecha - inicio).total_seconds() / 86400)


def get_days_until(valor: str, hoy: Optional[date] = None) -> int:
    """Días que faltan para ``valor`` (positivo = en el futuro)."""

    return days_between(parse_local_date(valor), hoy)


def get_days_since(valor: str, hoy: Optional[date] = None) -> int:
    """Días transcurridos desde ``valor`` (negativo = todavía no ocurrió)."""

    return -days_between(parse_local_date(valor), hoy)


def format_date(valor: str, formato: Optional[str] = None) -> str:
    fecha = parse_local_date(valor)
    qdate = QDate(fecha.year, fecha.month, fecha.day)
    return _LOCALE.toString(qdate, formato or FORMATO_CORTO)


def etiqueta_relativa(dias: int) -> str:
    """Texto corto para una distancia en días respecto de hoy."""

    if dias == 0:
        return "Hoy"
    if dias == 1:
        return "Mañana"
    if dias == -1:
        return "Ayer"
    if dias > 1:
        return f"En {dias} días"
    return f"Hace {abs(dias)} días"


__all__ = [
    "FORMATO_CORTO",
    "FORMATO_DIA_SEMANA",
    "FORMATO_LARGO",
    "days_between",
    "etiqueta_relativa",
    "format_date",
    "get_days_since",
    "get_days_until",
    "parse_local_date",
]
