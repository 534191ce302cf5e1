"""Ventana principal: barra lateral del panel y pila de páginas.

Implementa :class:`~calendario_app.core.navigation.Navigator`. Cada
navegación construye una página nueva y descarta la anterior; los diálogos
de acceso (contraseña pública y login) se abren en la siguiente vuelta del
bucle de eventos para no anidar ``exec`` dentro de otra señal.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from calendario_app.core.controllers import (
    CalendarController,
    DashboardController,
    EventDetailController,
    EventListController,
    PublicCalendarController,
    UpcomingEventsController,
    UserListController,
)
from calendario_app.core.navigation import RUTAS_PANEL, Route, resolver_ruta
from calendario_app.core.public_gate import PublicGate
from calendario_app.core.session import SessionStore
from calendario_app.infrastructure.repositories import (
    CalendarRepository,
    EventRepository,
    UserRepository,
)
from calendario_app.infrastructure.storage import KeyValueStorage
from calendario_app.models.user import ROLE_LABELS
from calendario_app.ui.form_pages import EventFormPage, UserFormPage
from calendario_app.ui.login_dialog import LoginDialog
from calendario_app.ui.pages import (
    CalendarPage,
    DashboardPage,
    EventDetailPage,
    EventsPage,
    PublicCalendarPage,
    UsersPage,
)
from calendario_app.ui.public_gate_dialog import PublicGateDialog
from calendario_app.ui.workers import BackgroundRunner

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Contenedor de todas las páginas de la aplicación."""

    def __init__(
        self,
        *,
        session: SessionStore,
        gate: PublicGate,
        event_repository: EventRepository,
        user_repository: UserRepository,
        calendar_repository: CalendarRepository,
        session_storage: KeyValueStorage,
    ) -> None:
        super().__init__()
        self.session = session
        self.gate = gate
        self.event_repository = event_repository
        self.user_repository = user_repository
        self.calendar_repository = calendar_repository
        self.session_storage = session_storage
        self.runner = BackgroundRunner(self)

        self.route: Optional[Route] = None
        self.params: Dict[str, Any] = {}
        self._page: Optional[QWidget] = None
        self._dialog_pending = False

        self.setWindowTitle("Calendario de eventos")
        self.resize(1200, 780)

        self.stack = QStackedWidget()
        self.sidebar = self._build_sidebar()

        layout = QHBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.sidebar)
        layout.addWidget(self.stack, 1)

        container = QWidget()
        container.setLayout(layout)
        self.setCentralWidget(container)

    # ------------------------------------------------------------------
    # Barra lateral
    # ------------------------------------------------------------------
    def _build_sidebar(self) -> QWidget:
        sidebar = QWidget()
        sidebar.setObjectName("sidebar")
        sidebar.setFixedWidth(220)
        sidebar.setStyleSheet("#sidebar { background: #18181b; } #sidebar QLabel { color: #fafafa; }")

        titulo = QLabel("Calendario")
        titulo.setStyleSheet("font-size: 14pt; font-weight: 700;")

        self._nav_buttons: Dict[Route, QPushButton] = {}
        layout = QVBoxLayout(sidebar)
        layout.setContentsMargins(12, 16, 12, 16)
        layout.addWidget(titulo)
        for route, texto in (
            (Route.DASHBOARD, "Dashboard"),
            (Route.CALENDAR, "Calendario"),
            (Route.EVENTS, "Eventos"),
            (Route.USERS, "Usuarios"),
        ):
            boton = QPushButton(texto)
            boton.setCheckable(True)
            boton.clicked.connect(lambda _c=False, r=route: self.navigate(r))
            self._nav_buttons[route] = boton
            layout.addWidget(boton)
        layout.addStretch(1)

        self.lbl_user = QLabel("")
        self.lbl_user.setWordWrap(True)
        btn_logout = QPushButton("Cerrar sesión")
        btn_logout.clicked.connect(self.session.logout)
        layout.addWidget(self.lbl_user)
        layout.addWidget(btn_logout)
        return sidebar

    def _actualizar_sidebar(self) -> None:
        en_panel = self.route in RUTAS_PANEL
        self.sidebar.setVisible(en_panel)
        if not en_panel:
            return
        self._nav_buttons[Route.USERS].setVisible(self.session.is_admin)
        for route, boton in self._nav_buttons.items():
            activo = self.route is route or (
                route is Route.EVENTS
                and self.route in (Route.EVENT_DETAIL, Route.NEW_EVENT, Route.EDIT_EVENT)
            ) or (route is Route.USERS and self.route in (Route.NEW_USER, Route.EDIT_USER))
            boton.setChecked(activo)
        usuario = self.session.user
        if usuario is not None:
            self.lbl_user.setText(f"{usuario.nombre}\n{ROLE_LABELS[usuario.rol]}")

    # ------------------------------------------------------------------
    # Navigator
    # ------------------------------------------------------------------
    def navigate(self, route: Route, **params: Any) -> None:
        logger.debug("Navegando a %s %s", route.value, params)

        route, params = resolver_ruta(
            route,
            params,
            autenticado=self.session.is_authenticated,
            es_admin=self.session.is_admin,
            desbloqueado=self.gate.desbloqueado,
        )

        if route in (Route.PUBLIC_GATE, Route.LOGIN) and self.route in RUTAS_PANEL:
            self._descartar_pagina()
        if route is Route.PUBLIC_GATE:
            self._programar_dialogo(self._mostrar_gate)
            return
        if route is Route.LOGIN:
            self._programar_dialogo(self._mostrar_login)
            return

        self.route = route
        self.params = params
        self._mostrar_pagina(self._crear_pagina(route, params))

    def refresh(self) -> None:
        self._actualizar_sidebar()
        if self._page is not None and hasattr(self._page, "cargar"):
            self._page.cargar()

    # ------------------------------------------------------------------
    # Páginas
    # ------------------------------------------------------------------
    def _crear_pagina(self, route: Route, params: Dict[str, Any]) -> QWidget:
        session, runner = self.session, self.runner
        if route is Route.DASHBOARD:
            return DashboardPage(
                DashboardController(self.calendar_repository, self.event_repository),
                UpcomingEventsController(self.calendar_repository),
                runner,
                self,
                session,
            )
        if route is Route.CALENDAR:
            return CalendarPage(
                CalendarController(self.calendar_repository, session, self),
                runner,
                self,
                session,
            )
        if route is Route.EVENTS:
            return EventsPage(EventListController(self.event_repository), runner, self, session)
        if route is Route.EVENT_DETAIL:
            return EventDetailPage(
                EventDetailController(self.event_repository, self, params["id"]),
                runner,
                self,
                session,
            )
        if route is Route.NEW_EVENT:
            return EventFormPage(self.event_repository, runner, self, fecha=params.get("date"))
        if route is Route.EDIT_EVENT:
            return EventFormPage(self.event_repository, runner, self, event_id=params["id"])
        if route is Route.USERS:
            return UsersPage(
                UserListController(self.user_repository, session, self), runner, self, session
            )
        if route is Route.NEW_USER:
            return UserFormPage(self.user_repository, runner, self)
        if route is Route.EDIT_USER:
            return UserFormPage(self.user_repository, runner, self, user_id=params["id"])
        if route is Route.PUBLIC_CALENDAR:
            return PublicCalendarPage(
                PublicCalendarController(
                    self.calendar_repository, session, self, self.session_storage
                ),
                runner,
                self,
            )
        raise ValueError(f"Ruta no soportada: {route}")

    def _mostrar_pagina(self, page: QWidget) -> None:
        anterior = self._page
        self._page = page
        self.stack.addWidget(page)
        self.stack.setCurrentWidget(page)
        if anterior is not None:
            self.stack.removeWidget(anterior)
            anterior.deleteLater()
        self._actualizar_sidebar()
        page.cargar()

    def _descartar_pagina(self) -> None:
        if self._page is not None:
            self.stack.removeWidget(self._page)
            self._page.deleteLater()
        self._page = None
        self.route = None
        self._actualizar_sidebar()

    # ------------------------------------------------------------------
    # Diálogos de acceso
    # ------------------------------------------------------------------
    def _programar_dialogo(self, mostrar) -> None:
        if self._dialog_pending:
            return
        self._dialog_pending = True
        QTimer.singleShot(0, mostrar)

    def _mostrar_gate(self) -> None:
        self._dialog_pending = False
        dialog = PublicGateDialog(self.gate, self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            return
        if dialog.admin_requested:
            self.navigate(Route.LOGIN)
        elif self._page is None:
            self.close()

    def _mostrar_login(self) -> None:
        self._dialog_pending = False
        dialog = LoginDialog(self.session, self)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            self.navigate(Route.PUBLIC_GATE)


__all__ = ["MainWindow"]
