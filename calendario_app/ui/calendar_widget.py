"""Widgets de la vista mensual: navegador de meses y grilla de 6x7."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from calendario_app.core.calendar_grid import (
    DIAS_SEMANA,
    CalendarCell,
    es_hoy,
    eventos_visibles,
)
from calendario_app.models.event import EVENT_TYPE_COLORS, EVENT_TYPE_LABELS, Event, EventType


class MonthNavigator(QWidget):
    """Botones anterior/siguiente/hoy con el título del mes y la leyenda."""

    previous_clicked = pyqtSignal()
    next_clicked = pyqtSignal()
    today_clicked = pyqtSignal()

    LEYENDA = (EventType.PENDIENTE, EventType.EN_CURSO, EventType.FINALIZADO, EventType.MASIVO)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.btn_prev = QPushButton("‹")
        self.btn_prev.setToolTip("Mes anterior")
        self.btn_prev.clicked.connect(self.previous_clicked)
        self.btn_next = QPushButton("›")
        self.btn_next.setToolTip("Mes siguiente")
        self.btn_next.clicked.connect(self.next_clicked)
        self.btn_today = QPushButton("Hoy")
        self.btn_today.clicked.connect(self.today_clicked)

        self.lbl_title = QLabel("")
        self.lbl_title.setStyleSheet("font-size: 13pt; font-weight: 600;")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.btn_prev)
        layout.addWidget(self.btn_next)
        layout.addWidget(self.btn_today)
        layout.addStretch(1)
        layout.addWidget(self.lbl_title)
        layout.addStretch(1)
        for tipo in self.LEYENDA:
            muestra = QLabel(f"■ {EVENT_TYPE_LABELS[tipo]}")
            muestra.setStyleSheet(f"color: {EVENT_TYPE_COLORS[tipo]}; font-size: 8pt;")
            layout.addWidget(muestra)

    def set_title(self, title: str) -> None:
        self.lbl_title.setText(title)

    def set_enabled(self, enabled: bool) -> None:
        for boton in (self.btn_prev, self.btn_next, self.btn_today):
            boton.setEnabled(enabled)


class _DayCell(QFrame):
    double_clicked = pyqtSignal(object)
    event_clicked = pyqtSignal(object)

    def __init__(self, celda: CalendarCell, resaltar: bool, editable: bool) -> None:
        super().__init__()
        self.celda = celda
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setMinimumHeight(96)
        if editable and celda.es_mes_actual:
            self.setCursor(Qt.CursorShape.PointingHandCursor)

        fondo = "#ffffff" if celda.es_mes_actual else "#f4f4f5"
        self.setObjectName("dayCell")
        self.setStyleSheet(f"#dayCell {{ background: {fondo}; }}")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)

        cabecera = QHBoxLayout()
        numero = QLabel(str(celda.dia))
        if resaltar:
            numero.setStyleSheet(
                "background: #2563eb; color: white; border-radius: 10px; "
                "padding: 1px 6px; font-weight: 600;"
            )
        elif not celda.es_mes_actual:
            numero.setStyleSheet("color: #a1a1aa;")
        cabecera.addWidget(numero)
        cabecera.addStretch(1)

        visibles, restantes = eventos_visibles(celda)
        if restantes > 0:
            extra = QLabel(f"+{restantes} más")
            extra.setStyleSheet("color: #52525b; font-size: 7pt;")
            cabecera.addWidget(extra)
        layout.addLayout(cabecera)

        for evento in visibles:
            layout.addWidget(self._boton_evento(evento))
        layout.addStretch(1)

    def _boton_evento(self, evento: Event) -> QPushButton:
        boton = QPushButton(f"{evento.hora_desde} {evento.titulo}")
        boton.setToolTip(evento.titulo)
        boton.setFlat(True)
        color = EVENT_TYPE_COLORS[evento.tipo_evento]
        boton.setStyleSheet(
            f"text-align: left; font-size: 8pt; padding: 1px 4px; "
            f"border-left: 3px solid {color}; background: #fafafa;"
        )
        boton.clicked.connect(lambda _checked=False, e=evento: self.event_clicked.emit(e))
        return boton

    def mouseDoubleClickEvent(self, event) -> None:  # pragma: no cover - interacción UI
        self.double_clicked.emit(self.celda)
        super().mouseDoubleClickEvent(event)


class CalendarGridWidget(QWidget):
    """Dibuja las 42 celdas devueltas por :func:`construir_grilla`."""

    event_selected = pyqtSignal(object)
    day_double_clicked = pyqtSignal(object)

    def __init__(self, editable: bool = False, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._editable = editable
        self._grid = QGridLayout(self)
        self._grid.setSpacing(0)
        for columna, nombre in enumerate(DIAS_SEMANA):
            cabecera = QLabel(nombre.upper())
            cabecera.setAlignment(Qt.AlignmentFlag.AlignCenter)
            cabecera.setStyleSheet("color: #71717a; font-size: 8pt; padding: 6px;")
            self._grid.addWidget(cabecera, 0, columna)
        self._celdas: List[_DayCell] = []

    def set_editable(self, editable: bool) -> None:
        self._editable = editable

    def mostrar(self, celdas: List[CalendarCell], year: int, month: int) -> None:
        for widget in self._celdas:
            self._grid.removeWidget(widget)
            widget.deleteLater()
        self._celdas = []

        hoy = date.today()
        for indice, celda in enumerate(celdas):
            widget = _DayCell(celda, es_hoy(celda, year, month, hoy), self._editable)
            widget.event_clicked.connect(self.event_selected)
            widget.double_clicked.connect(self.day_double_clicked)
            self._grid.addWidget(widget, 1 + indice // 7, indice % 7)
            self._celdas.append(widget)


__all__ = ["CalendarGridWidget", "MonthNavigator"]
