"""Páginas del panel y de la vista pública.

Cada página es una vista delgada sobre su controlador: dispara ``cargar``
al mostrarse y vuelve a dibujar a partir del estado del controlador.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from PyQt6.QtCore import Qt, QUrl
from PyQt6.QtGui import QColor, QDesktopServices
from PyQt6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from calendario_app.core.controllers import (
    VENTANAS_PROXIMOS,
    CalendarController,
    DashboardController,
    EventDetailController,
    EventListController,
    PageController,
    PublicCalendarController,
    UpcomingEventsController,
    UserListController,
    enlace_whatsapp,
)
from calendario_app.core.dates import (
    FORMATO_DIA_SEMANA,
    FORMATO_LARGO,
    etiqueta_relativa,
    format_date,
    get_days_until,
)
from calendario_app.core.navigation import Navigator, Route
from calendario_app.core.session import SessionStore
from calendario_app.models.event import (
    AREA_LABELS,
    EVENT_TYPE_COLORS,
    EVENT_TYPE_LABELS,
    Event,
    EventType,
)
from calendario_app.models.user import ROLE_LABELS, User
from calendario_app.ui.calendar_widget import CalendarGridWidget, MonthNavigator
from calendario_app.ui.workers import BackgroundRunner, cargar


class ErrorBanner(QWidget):
    """Mensaje de error en línea que el usuario puede descartar."""

    def __init__(self, on_dismiss: Optional[Callable[[], None]] = None) -> None:
        super().__init__()
        self._on_dismiss = on_dismiss
        self._label = QLabel("")
        self._label.setWordWrap(True)
        self._label.setStyleSheet("color: #b91c1c; font-weight: 600;")
        boton = QPushButton("×")
        boton.setFlat(True)
        boton.setFixedWidth(24)
        boton.clicked.connect(self._dismiss)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        layout.addWidget(self._label, 1)
        layout.addWidget(boton)
        self.setStyleSheet("background: #fee2e2; border-radius: 6px;")
        self.setVisible(False)

    def show_message(self, message: str) -> None:
        self._label.setText(message)
        self.setVisible(bool(message))

    def _dismiss(self) -> None:
        self.setVisible(False)
        if self._on_dismiss:
            self._on_dismiss()


class _Page(QWidget):
    """Estructura común: título, barra de acciones, error y estado de carga."""

    def __init__(
        self,
        title: str,
        controller: PageController,
        runner: BackgroundRunner,
        navigator: Navigator,
        description: str = "",
    ) -> None:
        super().__init__()
        self.controller = controller
        self.runner = runner
        self.navigator = navigator

        self.lbl_title = QLabel(title)
        self.lbl_title.setStyleSheet("font-size: 16pt; font-weight: 700;")
        self.lbl_description = QLabel(description)
        self.lbl_description.setStyleSheet("color: #71717a;")
        self.actions = QHBoxLayout()
        self.actions.addStretch(1)

        cabecera = QHBoxLayout()
        textos = QVBoxLayout()
        textos.addWidget(self.lbl_title)
        textos.addWidget(self.lbl_description)
        cabecera.addLayout(textos, 1)
        cabecera.addLayout(self.actions)

        self.banner = ErrorBanner(controller.limpiar_error)
        self.lbl_loading = QLabel("Cargando...")
        self.lbl_loading.setVisible(False)

        self.body = QVBoxLayout()
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 16, 20, 16)
        layout.addLayout(cabecera)
        layout.addWidget(self.banner)
        layout.addWidget(self.lbl_loading)
        layout.addLayout(self.body, 1)

    def cargar(self) -> None:
        cargar(self.runner, self.controller, self.refrescar, self)

    def refrescar(self) -> None:
        self.lbl_loading.setVisible(self.controller.is_loading)
        self.banner.show_message(self.controller.error)
        self._dibujar()

    def _dibujar(self) -> None:
        raise NotImplementedError

    def _eliminar(self, item_id: str, pregunta: str) -> None:
        """Confirma y borra en segundo plano usando el controlador."""

        respuesta = QMessageBox.question(
            self,
            "Confirmar eliminación",
            f"{pregunta}\n\nEsta acción no se puede deshacer.",
        )
        if respuesta != QMessageBox.StandardButton.Yes:
            return
        if not self.controller.iniciar_eliminacion(item_id):
            self.refrescar()
            return
        self.refrescar()

        def _ok(_resultado: Any) -> None:
            self.controller.confirmar_eliminacion(item_id)
            self.refrescar()

        def _error(exc) -> None:
            self.controller.fallo_eliminacion(exc)
            self.refrescar()

        self.runner.run(lambda: self.controller.eliminar_remoto(item_id), _ok, _error, self)


def _boton_nuevo_evento(navigator: Navigator) -> QPushButton:
    boton = QPushButton("Nuevo evento")
    boton.clicked.connect(lambda: navigator.navigate(Route.NEW_EVENT))
    return boton


class UpcomingEventsWidget(QWidget):
    """Lista de próximos eventos con selector de ventana (7/14/30 días)."""

    def __init__(
        self,
        controller: UpcomingEventsController,
        runner: BackgroundRunner,
        navigator: Navigator,
    ) -> None:
        super().__init__()
        self.controller = controller
        self.runner = runner
        self.navigator = navigator

        self.lbl_description = QLabel("")
        self.combo_days = QComboBox()
        for dias in VENTANAS_PROXIMOS:
            self.combo_days.addItem(f"{dias} días", dias)
        self.combo_days.currentIndexChanged.connect(self._on_days_changed)

        self.lista = QListWidget()
        self.lista.itemActivated.connect(self._on_item_activated)
        self.lbl_status = QLabel("")

        cabecera = QHBoxLayout()
        titulo = QLabel("Próximos Eventos")
        titulo.setStyleSheet("font-weight: 700;")
        cabecera.addWidget(titulo)
        cabecera.addWidget(self.lbl_description, 1)
        cabecera.addWidget(self.combo_days)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addLayout(cabecera)
        layout.addWidget(self.lbl_status)
        layout.addWidget(self.lista)

    def cargar(self) -> None:
        cargar(self.runner, self.controller, self.refrescar, self)

    def _on_days_changed(self, _index: int) -> None:
        self.controller.cambiar_ventana(self.combo_days.currentData(), recargar=False)
        self.cargar()

    def _on_item_activated(self, item: QListWidgetItem) -> None:
        evento: Event = item.data(Qt.ItemDataRole.UserRole)
        self.navigator.navigate(Route.EVENT_DETAIL, id=evento.id)

    def refrescar(self) -> None:
        self.lbl_description.setText(f"Eventos en los próximos {self.controller.days} días")
        self.lista.clear()
        if self.controller.is_loading:
            self.lbl_status.setText("Cargando...")
            return
        if self.controller.error:
            self.lbl_status.setText(self.controller.error)
            return
        eventos = self.controller.eventos
        self.lbl_status.setText("" if eventos else "No hay eventos próximos")
        for evento in eventos:
            dias = get_days_until(evento.fecha_desde)
            texto = (
                f"{format_date(evento.fecha_desde, FORMATO_DIA_SEMANA)} "
                f"{format_date(evento.fecha_desde, 'd')} · {evento.titulo} "
                f"[{EVENT_TYPE_LABELS[evento.tipo_evento]}] "
                f"{evento.hora_desde} - {evento.hora_hasta}"
            )
            if dias >= 0:
                texto += f" · {etiqueta_relativa(dias)}"
            item = QListWidgetItem(texto)
            item.setData(Qt.ItemDataRole.UserRole, evento)
            self.lista.addItem(item)


class DashboardPage(_Page):
    controller: DashboardController

    def __init__(
        self,
        controller: DashboardController,
        upcoming: UpcomingEventsController,
        runner: BackgroundRunner,
        navigator: Navigator,
        session: SessionStore,
    ) -> None:
        nombre = session.user.nombre if session.user else ""
        super().__init__("Dashboard", controller, runner, navigator, f"Bienvenido, {nombre}")
        if session.is_admin:
            self.actions.addWidget(_boton_nuevo_evento(navigator))

        self._stats = {clave: QLabel("0") for clave in ("total", "pendientes", "en_curso", "finalizados")}
        grilla = QGridLayout()
        titulos = {
            "total": "Total Eventos",
            "pendientes": "Pendientes",
            "en_curso": "En Curso",
            "finalizados": "Finalizados",
        }
        for columna, (clave, titulo) in enumerate(titulos.items()):
            self._stats[clave].setStyleSheet("font-size: 18pt; font-weight: 700;")
            grilla.addWidget(QLabel(titulo), 0, columna)
            grilla.addWidget(self._stats[clave], 1, columna)
        self.body.addLayout(grilla)

        self.lista = QListWidget()
        self.lista.itemActivated.connect(
            lambda item: navigator.navigate(
                Route.EVENT_DETAIL, id=item.data(Qt.ItemDataRole.UserRole).id
            )
        )
        encabezado = QHBoxLayout()
        encabezado.addWidget(QLabel("Esta semana"))
        encabezado.addStretch(1)
        btn_calendario = QPushButton("Ver calendario")
        btn_calendario.clicked.connect(lambda: navigator.navigate(Route.CALENDAR))
        encabezado.addWidget(btn_calendario)
        self.body.addLayout(encabezado)
        self.body.addWidget(self.lista)

        self.upcoming = UpcomingEventsWidget(upcoming, runner, navigator)
        self.body.addWidget(self.upcoming)

    def cargar(self) -> None:
        super().cargar()
        self.upcoming.cargar()

    def _dibujar(self) -> None:
        stats = self.controller.stats
        self._stats["total"].setText(str(stats.total))
        self._stats["pendientes"].setText(str(stats.pendientes))
        self._stats["en_curso"].setText(str(stats.en_curso))
        self._stats["finalizados"].setText(str(stats.finalizados))

        self.lista.clear()
        for evento in self.controller.eventos_proximos():
            dias = get_days_until(evento.fecha_desde)
            item = QListWidgetItem(
                f"{format_date(evento.fecha_desde, FORMATO_DIA_SEMANA)} "
                f"{format_date(evento.fecha_desde, 'd')} · {evento.titulo} · "
                f"{evento.hora_desde} - {evento.hora_hasta} · {etiqueta_relativa(dias)}"
            )
            item.setData(Qt.ItemDataRole.UserRole, evento)
            self.lista.addItem(item)


class CalendarPage(_Page):
    controller: CalendarController

    def __init__(
        self,
        controller: CalendarController,
        runner: BackgroundRunner,
        navigator: Navigator,
        session: SessionStore,
    ) -> None:
        super().__init__("Calendario", controller, runner, navigator, "Vista mensual de eventos")
        if session.is_admin:
            self.actions.addWidget(_boton_nuevo_evento(navigator))

        self.navigator_bar = MonthNavigator()
        self.navigator_bar.previous_clicked.connect(lambda: self._cambiar_mes(controller.anterior))
        self.navigator_bar.next_clicked.connect(lambda: self._cambiar_mes(controller.siguiente))
        self.navigator_bar.today_clicked.connect(lambda: self._cambiar_mes(controller.hoy))

        self.grid = CalendarGridWidget(editable=session.is_admin)
        self.grid.event_selected.connect(
            lambda evento: navigator.navigate(Route.EVENT_DETAIL, id=evento.id)
        )
        self.grid.day_double_clicked.connect(controller.doble_clic)

        self.lbl_hint = QLabel("Doble clic en una fecha para crear un evento")
        self.lbl_hint.setStyleSheet("color: #71717a;")
        self.lbl_hint.setVisible(session.is_admin)
        self.lbl_total = QLabel("")

        self.body.addWidget(self.navigator_bar)
        self.body.addWidget(self.lbl_hint)
        self.body.addWidget(self.grid, 1)
        self.body.addWidget(self.lbl_total)

    def _cambiar_mes(self, accion: Callable[..., bool]) -> None:
        accion(recargar=False)
        self.cargar()

    def _dibujar(self) -> None:
        self.navigator_bar.set_title(self.controller.titulo)
        self.navigator_bar.set_enabled(not self.controller.is_loading)
        self.grid.mostrar(self.controller.grilla(), self.controller.year, self.controller.month)
        self.lbl_total.setText(f"Total de eventos este mes: {self.controller.total_eventos}")


class EventsPage(_Page):
    controller: EventListController

    TIPOS_FILTRO = (
        EventType.PENDIENTE,
        EventType.EN_CURSO,
        EventType.FINALIZADO,
        EventType.MASIVO,
    )

    def __init__(
        self,
        controller: EventListController,
        runner: BackgroundRunner,
        navigator: Navigator,
        session: SessionStore,
    ) -> None:
        super().__init__(
            "Eventos", controller, runner, navigator, "Gestiona todos los eventos del calendario"
        )
        self._is_admin = session.is_admin
        if self._is_admin:
            self.actions.addWidget(_boton_nuevo_evento(navigator))

        self.input_desde = QLineEdit()
        self.input_desde.setPlaceholderText("Desde (AAAA-MM-DD)")
        self.input_desde.editingFinished.connect(
            lambda: self._filtrar("fecha_desde", self.input_desde.text().strip())
        )
        self.input_hasta = QLineEdit()
        self.input_hasta.setPlaceholderText("Hasta (AAAA-MM-DD)")
        self.input_hasta.editingFinished.connect(
            lambda: self._filtrar("fecha_hasta", self.input_hasta.text().strip())
        )
        self.combo_tipo = QComboBox()
        self.combo_tipo.addItem("Todos", None)
        for tipo in self.TIPOS_FILTRO:
            self.combo_tipo.addItem(EVENT_TYPE_LABELS[tipo], tipo.value)
        self.combo_tipo.currentIndexChanged.connect(
            lambda _i: self._filtrar("tipo_evento", self.combo_tipo.currentData())
        )
        self.btn_clear = QPushButton("Limpiar filtros")
        self.btn_clear.clicked.connect(self._limpiar_filtros)

        filtros = QHBoxLayout()
        filtros.addWidget(self.input_desde)
        filtros.addWidget(self.input_hasta)
        filtros.addWidget(self.combo_tipo)
        filtros.addWidget(self.btn_clear)
        self.body.addLayout(filtros)

        self.table = QTableWidget(columnCount=5)
        self.table.setHorizontalHeaderLabels(["Título", "Fecha", "Horario", "Tipo", ""])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.body.addWidget(self.table, 1)

        self.lbl_count = QLabel("")
        self.body.addWidget(self.lbl_count)

    def _filtrar(self, campo: str, valor: Any) -> None:
        if self.controller.filtros.get(campo) == valor:
            return
        self.controller.set_filtro(campo, valor, recargar=False)
        self.cargar()

    def _limpiar_filtros(self) -> None:
        for widget in (self.input_desde, self.input_hasta, self.combo_tipo):
            widget.blockSignals(True)
        self.input_desde.clear()
        self.input_hasta.clear()
        self.combo_tipo.setCurrentIndex(0)
        for widget in (self.input_desde, self.input_hasta, self.combo_tipo):
            widget.blockSignals(False)
        self.controller.limpiar_filtros(recargar=False)
        self.cargar()

    def _dibujar(self) -> None:
        activos = self.controller.filtros_activos
        self.btn_clear.setVisible(bool(activos))
        self.btn_clear.setText(f"Limpiar filtros ({activos})" if activos else "Limpiar filtros")

        eventos = self.controller.eventos
        self.table.setRowCount(len(eventos))
        for row, evento in enumerate(eventos):
            fecha = format_date(evento.fecha_desde)
            if evento.es_multidia:
                fecha += f" - {format_date(evento.fecha_hasta)}"
            valores = (
                evento.titulo,
                fecha,
                f"{evento.hora_desde} - {evento.hora_hasta}",
                EVENT_TYPE_LABELS[evento.tipo_evento],
            )
            for columna, texto in enumerate(valores):
                self.table.setItem(row, columna, QTableWidgetItem(texto))
            self.table.item(row, 3).setForeground(QColor(EVENT_TYPE_COLORS[evento.tipo_evento]))
            self.table.setCellWidget(row, 4, self._acciones(evento))
        self.table.resizeColumnsToContents()
        self.lbl_count.setText(self.controller.resumen)

    def _acciones(self, evento: Event) -> QWidget:
        contenedor = QWidget()
        layout = QHBoxLayout(contenedor)
        layout.setContentsMargins(0, 0, 0, 0)
        btn_ver = QPushButton("Ver")
        btn_ver.clicked.connect(lambda: self.navigator.navigate(Route.EVENT_DETAIL, id=evento.id))
        layout.addWidget(btn_ver)
        if self._is_admin:
            btn_editar = QPushButton("Editar")
            btn_editar.clicked.connect(
                lambda: self.navigator.navigate(Route.EDIT_EVENT, id=evento.id)
            )
            btn_eliminar = QPushButton("Eliminar")
            btn_eliminar.setEnabled(not self.controller.is_deleting)
            btn_eliminar.clicked.connect(
                lambda: self._eliminar(evento.id, "¿Eliminar evento?")
            )
            layout.addWidget(btn_editar)
            layout.addWidget(btn_eliminar)
        return contenedor


def _texto_detalle(evento: Event) -> List[tuple[str, str]]:
    fechas = format_date(evento.fecha_desde, FORMATO_LARGO)
    if evento.es_multidia:
        fechas += f"\nhasta {format_date(evento.fecha_hasta, FORMATO_LARGO)}"
    filas = [
        ("Tipo", EVENT_TYPE_LABELS[evento.tipo_evento]),
        ("Fecha", fechas),
        ("Horario", f"{evento.hora_desde} - {evento.hora_hasta}"),
        ("Área", AREA_LABELS[evento.area]),
    ]
    if evento.descripcion:
        filas.append(("Descripción", evento.descripcion))
    filas.extend(
        [
            ("Información", evento.informacion),
            ("Organizador", evento.organizador_solicitante),
            ("Contacto formal", evento.contacto_formal),
        ]
    )
    if evento.contacto_informal:
        filas.append(("Contacto informal", evento.contacto_informal))
    filas.extend(
        [
            ("Convocatoria", f"{evento.convocatoria} personas"),
            ("Cobertura de prensa", "Sí" if evento.cobertura_prensa else "No"),
        ]
    )
    return filas


def _enlaces_anexos(anexos: List[str]) -> str:
    return " · ".join(
        f'<a href="{anexo}">Anexo {indice}</a>' for indice, anexo in enumerate(anexos, start=1)
    )


class EventDetailPage(_Page):
    controller: EventDetailController

    def __init__(
        self,
        controller: EventDetailController,
        runner: BackgroundRunner,
        navigator: Navigator,
        session: SessionStore,
    ) -> None:
        super().__init__("Evento", controller, runner, navigator)
        btn_volver = QPushButton("Volver a eventos")
        btn_volver.clicked.connect(lambda: navigator.navigate(Route.EVENTS))
        self.actions.addWidget(btn_volver)

        self.btn_editar = QPushButton("Editar")
        self.btn_editar.clicked.connect(
            lambda: navigator.navigate(Route.EDIT_EVENT, id=controller.event_id)
        )
        self.btn_eliminar = QPushButton("Eliminar")
        self.btn_eliminar.clicked.connect(self._on_delete)
        for boton in (self.btn_editar, self.btn_eliminar):
            boton.setVisible(session.is_admin)
            self.actions.addWidget(boton)

        self.form = QFormLayout()
        self.body.addLayout(self.form)
        self.lbl_anexos = QLabel("")
        self.lbl_anexos.setOpenExternalLinks(True)
        self.lbl_meta = QLabel("")
        self.lbl_meta.setStyleSheet("color: #71717a;")
        self.body.addWidget(self.lbl_anexos)
        self.body.addWidget(self.lbl_meta)
        self.body.addStretch(1)

    def _on_delete(self) -> None:
        evento = self.controller.evento
        if evento is None:
            return
        self._eliminar(
            evento.id, f'El evento "{evento.titulo}" será eliminado permanentemente.'
        )

    def _dibujar(self) -> None:
        while self.form.rowCount():
            self.form.removeRow(0)
        evento = self.controller.evento
        self.btn_eliminar.setEnabled(evento is not None and not self.controller.is_deleting)
        self.btn_editar.setEnabled(evento is not None)
        if evento is None:
            self.lbl_anexos.setText("")
            self.lbl_meta.setText("")
            return

        self.lbl_title.setText(evento.titulo)
        for etiqueta, valor in _texto_detalle(evento):
            texto = QLabel(valor)
            texto.setWordWrap(True)
            self.form.addRow(etiqueta, texto)

        self.lbl_anexos.setText(_enlaces_anexos(evento.anexos))
        meta = []
        if evento.created_by:
            meta.append(f"Creado por {evento.created_by.nombre}")
        if evento.created_at:
            meta.append(f"el {format_date(evento.created_at, 'd MMMM yyyy')}")
        if evento.updated_at and evento.updated_at != evento.created_at:
            meta.append(f"· Última actualización: {format_date(evento.updated_at, 'd MMMM yyyy')}")
        self.lbl_meta.setText(" ".join(meta))


class UsersPage(_Page):
    controller: UserListController

    def __init__(
        self,
        controller: UserListController,
        runner: BackgroundRunner,
        navigator: Navigator,
        session: SessionStore,
    ) -> None:
        self._session = session
        super().__init__(
            "Usuarios", controller, runner, navigator, "Gestiona los usuarios del sistema"
        )
        btn_nuevo = QPushButton("Nuevo usuario")
        btn_nuevo.clicked.connect(lambda: navigator.navigate(Route.NEW_USER))
        self.actions.addWidget(btn_nuevo)

        self.table = QTableWidget(columnCount=4)
        self.table.setHorizontalHeaderLabels(["Nombre", "Email", "Rol", ""])
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.body.addWidget(self.table, 1)
        self.lbl_count = QLabel("")
        self.body.addWidget(self.lbl_count)

    def cargar(self) -> None:
        # Sin permisos el controlador redirige y no hay nada que pedir
        if not self._session.is_admin:
            self.controller.load()
            return
        super().cargar()

    def _dibujar(self) -> None:
        usuarios = self.controller.usuarios
        self.table.setRowCount(len(usuarios))
        for row, usuario in enumerate(usuarios):
            self.table.setItem(row, 0, QTableWidgetItem(usuario.nombre))
            self.table.setItem(row, 1, QTableWidgetItem(usuario.email))
            self.table.setItem(row, 2, QTableWidgetItem(ROLE_LABELS[usuario.rol]))
            self.table.setCellWidget(row, 3, self._acciones(usuario))
        self.table.resizeColumnsToContents()
        self.lbl_count.setText(self.controller.resumen)

    def _acciones(self, usuario: User) -> QWidget:
        contenedor = QWidget()
        layout = QHBoxLayout(contenedor)
        layout.setContentsMargins(0, 0, 0, 0)
        btn_editar = QPushButton("Editar")
        btn_editar.clicked.connect(lambda: self.navigator.navigate(Route.EDIT_USER, id=usuario.id))
        btn_eliminar = QPushButton("Eliminar")
        propio = not self.controller.puede_eliminar(usuario)
        btn_eliminar.setEnabled(not propio and not self.controller.is_deleting)
        btn_eliminar.setToolTip(
            UserListController.MENSAJE_CUENTA_PROPIA if propio else "Eliminar"
        )
        btn_eliminar.clicked.connect(
            lambda: self._eliminar(
                usuario.id,
                "El usuario será eliminado permanentemente del sistema.",
            )
        )
        layout.addWidget(btn_editar)
        layout.addWidget(btn_eliminar)
        return contenedor


class PublicCalendarPage(_Page):
    """Calendario de sólo lectura con panel de detalle del evento elegido."""

    controller: PublicCalendarController

    def __init__(
        self,
        controller: PublicCalendarController,
        runner: BackgroundRunner,
        navigator: Navigator,
    ) -> None:
        super().__init__("Calendario de Eventos", controller, runner, navigator)
        btn_admin = QPushButton("Admin Login")
        btn_admin.clicked.connect(lambda: navigator.navigate(Route.LOGIN))
        self.actions.addWidget(btn_admin)

        self.navigator_bar = MonthNavigator()
        self.navigator_bar.previous_clicked.connect(lambda: self._cambiar_mes(controller.anterior))
        self.navigator_bar.next_clicked.connect(lambda: self._cambiar_mes(controller.siguiente))
        self.navigator_bar.today_clicked.connect(lambda: self._cambiar_mes(controller.hoy))

        self.grid = CalendarGridWidget(editable=False)
        self.grid.event_selected.connect(self._on_event_selected)

        self.detalle = QFormLayout()
        self.lbl_anexos = QLabel("")
        self.lbl_anexos.setOpenExternalLinks(True)
        self.btn_whatsapp = QPushButton("Enviar recordatorio por WhatsApp")
        self.btn_whatsapp.clicked.connect(self._on_whatsapp)

        panel = QVBoxLayout()
        panel.addLayout(self.detalle)
        panel.addWidget(self.lbl_anexos)
        panel.addWidget(self.btn_whatsapp)
        panel.addStretch(1)

        contenido = QHBoxLayout()
        contenido.addWidget(self.grid, 3)
        contenido.addLayout(panel, 1)

        self.body.addWidget(self.navigator_bar)
        self.body.addLayout(contenido, 1)

    def cargar(self) -> None:
        if not self.controller.desbloqueado:
            self.controller.load()
            return
        super().cargar()

    def _cambiar_mes(self, accion: Callable[..., bool]) -> None:
        accion(recargar=False)
        self.cargar()

    def _on_event_selected(self, evento: Event) -> None:
        self.controller.seleccionar(evento)
        self._dibujar_detalle()

    def _on_whatsapp(self) -> None:
        evento = self.controller.seleccionado
        if evento is not None:
            QDesktopServices.openUrl(QUrl(enlace_whatsapp(evento)))

    def _dibujar(self) -> None:
        self.navigator_bar.set_title(self.controller.titulo)
        self.navigator_bar.set_enabled(not self.controller.is_loading)
        self.grid.mostrar(self.controller.grilla(), self.controller.year, self.controller.month)
        self._dibujar_detalle()

    def _dibujar_detalle(self) -> None:
        while self.detalle.rowCount():
            self.detalle.removeRow(0)
        evento = self.controller.seleccionado
        self.btn_whatsapp.setVisible(evento is not None)
        if evento is None:
            self.lbl_anexos.setText("")
            return
        titulo = QLabel(evento.titulo)
        titulo.setStyleSheet("font-weight: 700;")
        self.detalle.addRow(titulo)
        for etiqueta, valor in _texto_detalle(evento):
            texto = QLabel(valor)
            texto.setWordWrap(True)
            self.detalle.addRow(etiqueta, texto)
        self.lbl_anexos.setText(_enlaces_anexos(evento.anexos))


__all__ = [
    "CalendarPage",
    "DashboardPage",
    "ErrorBanner",
    "EventDetailPage",
    "EventsPage",
    "PublicCalendarPage",
    "UpcomingEventsWidget",
    "UsersPage",
]
