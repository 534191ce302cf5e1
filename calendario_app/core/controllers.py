"""Controladores de página: carga explícita de datos y estado de filtros.

Cada controlador expone ``load()``, que la vista invoca al entrar y cada vez
que cambia una dependencia (filtros, mes, ventana de días). La carga se
divide en ``fetch`` (sólo E/S, puede correr en otro hilo) y ``aplicar``
(muta el estado, siempre en el hilo de la interfaz).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from calendario_app.core.calendar_grid import (
    CalendarCell,
    construir_grilla,
    fecha_de_celda,
    mes_anterior,
    mes_siguiente,
    titulo_mes,
)
from calendario_app.core.dates import format_date, get_days_since, get_days_until
from calendario_app.core.errors import ApiError, mensaje_para
from calendario_app.core.navigation import Navigator, Route
from calendario_app.core.session import SessionStore
from calendario_app.infrastructure.repositories import (
    CalendarRepository,
    EventRepository,
    UserRepository,
)
from calendario_app.infrastructure.storage import CLAVE_DESBLOQUEO, KeyValueStorage
from calendario_app.models.dto import CalendarResponse, UpcomingEventsResponse
from calendario_app.models.event import AREA_LABELS, Event, EventType
from calendario_app.models.user import User

logger = logging.getLogger(__name__)

VENTANAS_PROXIMOS = (7, 14, 30)


class PageController:
    """Base con el ciclo ``is_loading``/``error`` común a todas las páginas."""

    mensaje_fallback = "Error al cargar datos"
    mensaje_no_encontrado: Optional[str] = None

    def __init__(self) -> None:
        self.is_loading = False
        self.error = ""

    def fetch(self) -> Any:
        raise NotImplementedError

    def aplicar(self, datos: Any) -> None:
        raise NotImplementedError

    def iniciar_carga(self) -> None:
        self.is_loading = True
        self.error = ""

    def registrar_error(self, exc: ApiError) -> None:
        self.error = mensaje_para(
            exc, self.mensaje_fallback, not_found=self.mensaje_no_encontrado
        )
        logger.warning("%s: %s", type(self).__name__, exc.message)

    def finalizar_carga(self) -> None:
        self.is_loading = False

    def load(self) -> bool:
        self.iniciar_carga()
        try:
            datos = self.fetch()
        except ApiError as exc:
            self.registrar_error(exc)
            return False
        else:
            self.aplicar(datos)
            return True
        finally:
            self.finalizar_carga()

    def limpiar_error(self) -> None:
        self.error = ""


class _EliminacionMixin:
    """Borrado con confirmación: quita de la lista sólo si el backend acepta."""

    mensaje_error_eliminar = "Error al eliminar"

    def __init__(self) -> None:
        self.is_deleting = False

    def eliminar_remoto(self, item_id: str) -> None:
        raise NotImplementedError

    def _quitar_local(self, item_id: str) -> None:
        raise NotImplementedError

    def iniciar_eliminacion(self, item_id: str) -> bool:
        if self.is_deleting:
            return False
        self.is_deleting = True
        return True

    def confirmar_eliminacion(self, item_id: str) -> None:
        self.is_deleting = False
        self._quitar_local(item_id)

    def fallo_eliminacion(self, exc: ApiError) -> None:
        self.is_deleting = False
        self.error = mensaje_para(exc, self.mensaje_error_eliminar)

    def delete(self, item_id: str) -> bool:
        if not self.iniciar_eliminacion(item_id):
            return False
        try:
            self.eliminar_remoto(item_id)
        except ApiError as exc:
            self.fallo_eliminacion(exc)
            return False
        self.confirmar_eliminacion(item_id)
        return True


@dataclass(frozen=True, slots=True)
class EventStats:
    total: int = 0
    pendientes: int = 0
    en_curso: int = 0
    finalizados: int = 0

    @classmethod
    def desde(cls, eventos: List[Event]) -> "EventStats":
        def contar(tipo: EventType) -> int:
            return sum(1 for evento in eventos if evento.tipo_evento is tipo)

        return cls(
            total=len(eventos),
            pendientes=contar(EventType.PENDIENTE),
            en_curso=contar(EventType.EN_CURSO),
            finalizados=contar(EventType.FINALIZADO),
        )


class DashboardController(PageController):
    """Resumen: próximos 7 días y contadores por estado."""

    mensaje_fallback = "Error al cargar datos"
    LIMITE_PROXIMOS = 5

    def __init__(
        self,
        calendar_repository: CalendarRepository,
        event_repository: EventRepository,
    ) -> None:
        super().__init__()
        self._calendar_repository = calendar_repository
        self._event_repository = event_repository
        self.proximos: Optional[UpcomingEventsResponse] = None
        self.eventos: List[Event] = []

    def fetch(self) -> Tuple[UpcomingEventsResponse, List[Event]]:
        # Ambas o ninguna: si una falla no se aplica la otra
        proximos = self._calendar_repository.proximos(7)
        eventos = self._event_repository.listar()
        return proximos, eventos

    def aplicar(self, datos: Tuple[UpcomingEventsResponse, List[Event]]) -> None:
        self.proximos, self.eventos = datos

    @property
    def stats(self) -> EventStats:
        return EventStats.desde(self.eventos)

    def eventos_proximos(self, hoy: Optional[date] = None) -> List[Event]:
        if not self.proximos:
            return []
        en_ventana = [
            evento
            for evento in self.proximos.events
            if -7 <= get_days_since(evento.fecha_desde, hoy) <= 0
        ]
        return en_ventana[: self.LIMITE_PROXIMOS]


class UpcomingEventsController(PageController):
    mensaje_fallback = "Error al cargar eventos"

    def __init__(self, calendar_repository: CalendarRepository, days: int = 7) -> None:
        super().__init__()
        self._calendar_repository = calendar_repository
        self.days = days
        self.datos: Optional[UpcomingEventsResponse] = None

    def fetch(self) -> UpcomingEventsResponse:
        return self._calendar_repository.proximos(self.days)

    def aplicar(self, datos: UpcomingEventsResponse) -> None:
        self.datos = datos

    def cambiar_ventana(self, days: int, recargar: bool = True) -> bool:
        if days not in VENTANAS_PROXIMOS:
            raise ValueError(f"Ventana no soportada: {days}")
        self.days = days
        return self.load() if recargar else True

    @property
    def eventos(self) -> List[Event]:
        return list(self.datos.events) if self.datos else []

    @staticmethod
    def dias_restantes(evento: Event, hoy: Optional[date] = None) -> int:
        return get_days_until(evento.fecha_desde, hoy)


class EventListController(_EliminacionMixin, PageController):
    """Listado de eventos con filtros por rango de fechas y tipo."""

    mensaje_fallback = "Error al cargar eventos"
    mensaje_error_eliminar = "Error al eliminar el evento"

    def __init__(self, event_repository: EventRepository) -> None:
        PageController.__init__(self)
        _EliminacionMixin.__init__(self)
        self._event_repository = event_repository
        self.eventos: List[Event] = []
        self.filtros: Dict[str, Any] = {
            "fecha_desde": "",
            "fecha_hasta": "",
            "tipo_evento": None,
        }

    def fetch(self) -> List[Event]:
        return self._event_repository.listar(
            fecha_desde=self.filtros["fecha_desde"] or None,
            fecha_hasta=self.filtros["fecha_hasta"] or None,
            tipo_evento=self.filtros["tipo_evento"] or None,
        )

    def aplicar(self, datos: List[Event]) -> None:
        self.eventos = list(datos)

    def set_filtro(self, campo: str, valor: Any, recargar: bool = True) -> bool:
        if campo not in self.filtros:
            raise KeyError(campo)
        if campo == "tipo_evento" and valor:
            valor = EventType(valor)
        self.filtros[campo] = valor or ("" if campo != "tipo_evento" else None)
        return self.load() if recargar else True

    def limpiar_filtros(self, recargar: bool = True) -> bool:
        self.filtros = {"fecha_desde": "", "fecha_hasta": "", "tipo_evento": None}
        return self.load() if recargar else True

    @property
    def filtros_activos(self) -> int:
        return sum(1 for valor in self.filtros.values() if valor)

    def eliminar_remoto(self, item_id: str) -> None:
        self._event_repository.eliminar(item_id)

    def _quitar_local(self, item_id: str) -> None:
        self.eventos = [evento for evento in self.eventos if evento.id != item_id]

    @property
    def resumen(self) -> str:
        total = len(self.eventos)
        sufijo = "" if total == 1 else "s"
        return f"{total} evento{sufijo} encontrado{sufijo}"


class EventDetailController(_EliminacionMixin, PageController):
    mensaje_fallback = "Error al cargar el evento"
    mensaje_no_encontrado = "Evento no encontrado"
    mensaje_error_eliminar = "Error al eliminar el evento"

    def __init__(
        self, event_repository: EventRepository, navigator: Navigator, event_id: str
    ) -> None:
        PageController.__init__(self)
        _EliminacionMixin.__init__(self)
        self._event_repository = event_repository
        self._navigator = navigator
        self.event_id = event_id
        self.evento: Optional[Event] = None

    def fetch(self) -> Event:
        return self._event_repository.obtener(self.event_id)

    def aplicar(self, datos: Event) -> None:
        self.evento = datos

    def eliminar_remoto(self, item_id: str) -> None:
        self._event_repository.eliminar(item_id)

    def _quitar_local(self, item_id: str) -> None:
        self.evento = None
        self._navigator.navigate(Route.EVENTS)


class EventEditController(PageController):
    """Carga el evento a editar antes de abrir el formulario."""

    mensaje_fallback = "Error al cargar el evento"
    mensaje_no_encontrado = "Evento no encontrado"

    def __init__(self, event_repository: EventRepository, event_id: str) -> None:
        super().__init__()
        self._event_repository = event_repository
        self.event_id = event_id
        self.evento: Optional[Event] = None

    def fetch(self) -> Event:
        return self._event_repository.obtener(self.event_id)

    def aplicar(self, datos: Event) -> None:
        self.evento = datos


class UserEditController(PageController):
    mensaje_fallback = "Error al cargar el usuario"
    mensaje_no_encontrado = "Usuario no encontrado"

    def __init__(self, user_repository: UserRepository, user_id: str) -> None:
        super().__init__()
        self._user_repository = user_repository
        self.user_id = user_id
        self.usuario: Optional[User] = None

    def fetch(self) -> User:
        return self._user_repository.obtener(self.user_id)

    def aplicar(self, datos: User) -> None:
        self.usuario = datos


class CalendarController(PageController):
    """Vista mensual del panel: navegación de meses y grilla."""

    mensaje_fallback = "Error al cargar el calendario"

    def __init__(
        self,
        calendar_repository: CalendarRepository,
        session: SessionStore,
        navigator: Navigator,
        hoy: Optional[date] = None,
    ) -> None:
        super().__init__()
        self._calendar_repository = calendar_repository
        self._session = session
        self._navigator = navigator
        hoy = hoy or date.today()
        self.year = hoy.year
        self.month = hoy.month
        self.datos: Optional[CalendarResponse] = None

    def fetch(self) -> CalendarResponse:
        return self._calendar_repository.mes(self.year, self.month)

    def aplicar(self, datos: CalendarResponse) -> None:
        self.datos = datos

    @property
    def eventos(self) -> List[Event]:
        return list(self.datos.events) if self.datos else []

    @property
    def total_eventos(self) -> int:
        return self.datos.total_events if self.datos else 0

    @property
    def titulo(self) -> str:
        return titulo_mes(self.year, self.month)

    def grilla(self) -> List[CalendarCell]:
        return construir_grilla(self.year, self.month, self.eventos)

    def anterior(self, recargar: bool = True) -> bool:
        self.year, self.month = mes_anterior(self.year, self.month)
        return self.load() if recargar else True

    def siguiente(self, recargar: bool = True) -> bool:
        self.year, self.month = mes_siguiente(self.year, self.month)
        return self.load() if recargar else True

    def hoy(self, hoy: Optional[date] = None, recargar: bool = True) -> bool:
        hoy = hoy or date.today()
        self.year, self.month = hoy.year, hoy.month
        return self.load() if recargar else True

    def doble_clic(self, celda: CalendarCell) -> bool:
        """Abre el alta de evento con la fecha de la celda (sólo admin)."""

        if not self._session.is_admin:
            return False
        fecha = fecha_de_celda(celda, self.year, self.month)
        if fecha is None:
            return False
        self._navigator.navigate(Route.NEW_EVENT, date=fecha.isoformat())
        return True


class UserListController(_EliminacionMixin, PageController):
    """Administración de usuarios, reservada al rol ADMIN."""

    mensaje_fallback = "Error al cargar usuarios"
    mensaje_error_eliminar = "Error al eliminar el usuario"
    MENSAJE_CUENTA_PROPIA = "No puedes eliminar tu propia cuenta"

    def __init__(
        self,
        user_repository: UserRepository,
        session: SessionStore,
        navigator: Navigator,
    ) -> None:
        PageController.__init__(self)
        _EliminacionMixin.__init__(self)
        self._user_repository = user_repository
        self._session = session
        self._navigator = navigator
        self.usuarios: List[User] = []

    def load(self) -> bool:
        if not self._session.is_admin:
            self._navigator.navigate(Route.DASHBOARD)
            return False
        return super().load()

    def fetch(self) -> List[User]:
        return self._user_repository.obtener_usuarios()

    def aplicar(self, datos: List[User]) -> None:
        self.usuarios = list(datos)

    def puede_eliminar(self, usuario: User) -> bool:
        actual = self._session.user
        return actual is None or usuario.id != actual.id

    def iniciar_eliminacion(self, item_id: str) -> bool:
        actual = self._session.user
        if actual is not None and actual.id == item_id:
            self.error = self.MENSAJE_CUENTA_PROPIA
            return False
        return super().iniciar_eliminacion(item_id)

    def eliminar_remoto(self, item_id: str) -> None:
        self._user_repository.eliminar(item_id)

    def _quitar_local(self, item_id: str) -> None:
        self.usuarios = [usuario for usuario in self.usuarios if usuario.id != item_id]

    @property
    def resumen(self) -> str:
        total = len(self.usuarios)
        sufijo = "" if total == 1 else "s"
        return f"{total} usuario{sufijo} registrado{sufijo}"


def enlace_whatsapp(evento: Event) -> str:
    """Enlace ``wa.me`` con un recordatorio del evento para el contacto formal."""

    telefono = "".join(caracter for caracter in evento.contacto_formal if caracter.isdigit())
    fecha = format_date(evento.fecha_desde, "d 'de' MMMM 'de' yyyy")
    mensaje = (
        "Hola, le recordamos que tiene un evento programado:\n\n"
        f"📅 {evento.titulo}\n"
        f"📍 {AREA_LABELS[evento.area]}\n"
        f"🗓️ {fecha}\n"
        f"⏰ {evento.hora_desde} - {evento.hora_hasta}\n\n"
        "Más información:\n"
        f"{evento.informacion[:100]}..."
    )
    return f"https://wa.me/{telefono}?text={quote(mensaje)}"


class PublicCalendarController(CalendarController):
    """Calendario de sólo lectura detrás de la contraseña pública."""

    def __init__(
        self,
        calendar_repository: CalendarRepository,
        session: SessionStore,
        navigator: Navigator,
        session_storage: KeyValueStorage,
        hoy: Optional[date] = None,
    ) -> None:
        super().__init__(calendar_repository, session, navigator, hoy)
        self._session_storage = session_storage
        self.seleccionado: Optional[Event] = None

    @property
    def desbloqueado(self) -> bool:
        return self._session_storage.get(CLAVE_DESBLOQUEO) == "true"

    def load(self) -> bool:
        if not self.desbloqueado:
            self._navigator.navigate(Route.PUBLIC_GATE)
            return False
        return super().load()

    def doble_clic(self, celda: CalendarCell) -> bool:
        return False

    def seleccionar(self, evento: Optional[Event]) -> None:
        self.seleccionado = evento


__all__ = [
    "CalendarController",
    "DashboardController",
    "EventDetailController",
    "EventEditController",
    "EventListController",
    "EventStats",
    "PageController",
    "PublicCalendarController",
    "UpcomingEventsController",
    "UserEditController",
    "UserListController",
    "VENTANAS_PROXIMOS",
    "enlace_whatsapp",
]
