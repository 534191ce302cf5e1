"""Páginas de alta y edición de eventos y usuarios."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from PyQt6.QtCore import QTime
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QScrollArea,
    QSpinBox,
    QTimeEdit,
    QVBoxLayout,
    QWidget,
)

from calendario_app.core.controllers import EventEditController, PageController, UserEditController
from calendario_app.core.errors import ApiError
from calendario_app.core.forms import EventForm, UserForm
from calendario_app.core.navigation import Navigator, Route
from calendario_app.infrastructure.repositories import EventRepository, UserRepository
from calendario_app.models.event import AREA_LABELS, EVENT_TYPE_LABELS, MAX_ANEXOS
from calendario_app.models.user import ROLE_LABELS
from calendario_app.ui.pages import ErrorBanner
from calendario_app.ui.workers import BackgroundRunner, cargar

FORMATO_HORA = "HH:mm"


def _valor(dato: Any) -> Any:
    return getattr(dato, "value", dato)


def _error_label() -> QLabel:
    label = QLabel("")
    label.setStyleSheet("color: #b91c1c; font-size: 9pt;")
    label.setVisible(False)
    return label


class _FormPage(QWidget):
    """Estructura común: carga opcional de la entidad, campos y botones."""

    texto_crear = "Crear"

    def __init__(
        self,
        title: str,
        runner: BackgroundRunner,
        navigator: Navigator,
        cancel_route: Route,
        controller: Optional[PageController] = None,
    ) -> None:
        super().__init__()
        self.runner = runner
        self.navigator = navigator
        self.controller = controller
        self.form: Any = None
        self._errores: Dict[str, QLabel] = {}

        titulo = QLabel(title)
        titulo.setStyleSheet("font-size: 16pt; font-weight: 700;")
        self.banner = ErrorBanner()
        self.lbl_loading = QLabel("Cargando...")
        self.lbl_loading.setVisible(False)

        self.campos = QWidget()
        self.campos_layout = QFormLayout(self.campos)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.campos)

        self.btn_cancel = QPushButton("Cancelar")
        self.btn_cancel.clicked.connect(lambda: navigator.navigate(cancel_route))
        self.btn_submit = QPushButton("Guardar")
        self.btn_submit.setDefault(True)
        self.btn_submit.clicked.connect(self._on_submit)
        self.btn_submit.setEnabled(False)

        botones = QHBoxLayout()
        botones.addStretch(1)
        botones.addWidget(self.btn_cancel)
        botones.addWidget(self.btn_submit)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 16, 20, 16)
        layout.addWidget(titulo)
        layout.addWidget(self.banner)
        layout.addWidget(self.lbl_loading)
        layout.addWidget(scroll, 1)
        layout.addLayout(botones)

    # ------------------------------------------------------------------
    # Carga
    # ------------------------------------------------------------------
    def cargar(self) -> None:
        if self.controller is None:
            self._montar(self._crear_form(None))
            return
        cargar(self.runner, self.controller, self._on_loaded, self)

    def _on_loaded(self) -> None:
        controller = self.controller
        self.lbl_loading.setVisible(controller.is_loading)
        if controller.is_loading:
            return
        if controller.error:
            self.banner.show_message(controller.error)
            return
        self._montar(self._crear_form(self._entidad()))

    def _entidad(self) -> Any:
        raise NotImplementedError

    def _crear_form(self, entidad: Any) -> Any:
        raise NotImplementedError

    def _construir_campos(self) -> None:
        raise NotImplementedError

    def _montar(self, form: Any) -> None:
        self.form = form
        self.btn_submit.setText("Guardar cambios" if form.es_edicion else self.texto_crear)
        self._construir_campos()
        self.btn_submit.setEnabled(True)

    def _agregar(self, etiqueta: str, campo: str, widget: QWidget) -> None:
        error = _error_label()
        self._errores[campo] = error
        contenedor = QVBoxLayout()
        contenedor.addWidget(widget)
        contenedor.addWidget(error)
        self.campos_layout.addRow(etiqueta, contenedor)

    # ------------------------------------------------------------------
    # Envío
    # ------------------------------------------------------------------
    def _on_submit(self) -> None:
        dto = self.form.preparar()
        self._mostrar_errores()
        if dto is None:
            return
        self._set_busy(True)
        form = self.form
        self.runner.run(lambda: form.enviar(dto), self._on_saved, self._on_failed, self)

    def _on_saved(self, _resultado: Any) -> None:
        self._set_busy(False)
        self.form.completar()

    def _on_failed(self, exc: ApiError) -> None:
        self.form.fallar(exc)
        self._set_busy(False)
        self._mostrar_errores()

    def _set_busy(self, busy: bool) -> None:
        self.btn_submit.setEnabled(not busy)
        self.btn_cancel.setEnabled(not busy)
        self.campos.setEnabled(not busy)
        if busy:
            self.btn_submit.setText("Guardando...")
        else:
            self.btn_submit.setText("Guardar cambios" if self.form.es_edicion else self.texto_crear)

    def _cambiar(self, campo: str, valor: Any) -> None:
        self.form.cambiar(campo, valor)
        label = self._errores.get(campo)
        if label is not None:
            label.setVisible(False)


class EventFormPage(_FormPage):
    texto_crear = "Crear evento"

    def __init__(
        self,
        repository: EventRepository,
        runner: BackgroundRunner,
        navigator: Navigator,
        event_id: Optional[str] = None,
        fecha: Optional[str] = None,
    ) -> None:
        controller = EventEditController(repository, event_id) if event_id else None
        super().__init__(
            "Editar evento" if event_id else "Nuevo evento",
            runner,
            navigator,
            Route.EVENTS,
            controller,
        )
        self._repository = repository
        self._fecha = fecha
        self._anexos_widget = QWidget()
        self._anexos_layout = QVBoxLayout(self._anexos_widget)
        self._anexos_layout.setContentsMargins(0, 0, 0, 0)

    def _entidad(self) -> Any:
        return self.controller.evento

    def _crear_form(self, entidad: Any) -> EventForm:
        return EventForm(self._repository, self.navigator, entidad, self._fecha)

    def _texto(self, campo: str, placeholder: str = "") -> QLineEdit:
        widget = QLineEdit(str(self.form.datos[campo]))
        widget.setPlaceholderText(placeholder)
        widget.textChanged.connect(lambda texto: self._cambiar(campo, texto))
        return widget

    def _area_texto(self, campo: str) -> QPlainTextEdit:
        widget = QPlainTextEdit(str(self.form.datos[campo]))
        widget.setFixedHeight(80)
        widget.textChanged.connect(lambda: self._cambiar(campo, widget.toPlainText()))
        return widget

    def _hora(self, campo: str) -> QTimeEdit:
        widget = QTimeEdit(QTime.fromString(self.form.datos[campo], FORMATO_HORA))
        widget.setDisplayFormat(FORMATO_HORA)
        widget.timeChanged.connect(
            lambda hora: self._cambiar(campo, hora.toString(FORMATO_HORA))
        )
        return widget

    def _combo(self, campo: str, etiquetas: Dict[Any, str]) -> QComboBox:
        widget = QComboBox()
        for valor, texto in etiquetas.items():
            widget.addItem(texto, valor.value)
        widget.setCurrentIndex(max(0, widget.findData(_valor(self.form.datos[campo]))))
        widget.currentIndexChanged.connect(
            lambda _i: self._cambiar(campo, widget.currentData())
        )
        return widget

    def _construir_campos(self) -> None:
        datos = self.form.datos
        self._agregar("Título *", "titulo", self._texto("titulo", "Nombre del evento"))
        self._agregar("Descripción", "descripcion", self._area_texto("descripcion"))
        self._agregar("Información *", "informacion", self._area_texto("informacion"))
        self._agregar("Fecha desde *", "fecha_desde", self._texto("fecha_desde", "AAAA-MM-DD"))
        self._agregar("Fecha hasta *", "fecha_hasta", self._texto("fecha_hasta", "AAAA-MM-DD"))
        self._agregar("Hora desde *", "hora_desde", self._hora("hora_desde"))
        self._agregar("Hora hasta *", "hora_hasta", self._hora("hora_hasta"))
        self._agregar("Tipo de evento *", "tipo_evento", self._combo("tipo_evento", EVENT_TYPE_LABELS))
        self._agregar("Área *", "area", self._combo("area", AREA_LABELS))
        self._agregar(
            "Organizador / Solicitante *",
            "organizador_solicitante",
            self._texto("organizador_solicitante"),
        )
        self._agregar("Contacto formal *", "contacto_formal", self._texto("contacto_formal"))
        self._agregar("Contacto informal", "contacto_informal", self._texto("contacto_informal"))

        convocatoria = QSpinBox()
        convocatoria.setRange(0, 1_000_000)
        convocatoria.setValue(int(datos["convocatoria"] or 0))
        convocatoria.valueChanged.connect(lambda valor: self._cambiar("convocatoria", valor))
        self._agregar("Convocatoria *", "convocatoria", convocatoria)

        cobertura = QCheckBox("Requiere cobertura de prensa")
        cobertura.setChecked(bool(datos["cobertura_prensa"]))
        cobertura.toggled.connect(lambda marcado: self._cambiar("cobertura_prensa", marcado))
        self._agregar("", "cobertura_prensa", cobertura)

        self._agregar(f"Anexos (máx. {MAX_ANEXOS})", "anexos", self._anexos_widget)
        self._dibujar_anexos()

    def _dibujar_anexos(self) -> None:
        while self._anexos_layout.count():
            item = self._anexos_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()

        for indice, valor in enumerate(self.form.anexos):
            fila = QWidget()
            fila_layout = QHBoxLayout(fila)
            fila_layout.setContentsMargins(0, 0, 0, 0)
            entrada = QLineEdit(valor)
            entrada.setPlaceholderText("https://...")
            entrada.textChanged.connect(
                lambda texto, i=indice: self.form.actualizar_anexo(i, texto)
            )
            fila_layout.addWidget(entrada, 1)
            if len(self.form.anexos) > 1:
                quitar = QPushButton("Quitar")
                quitar.clicked.connect(lambda _c=False, i=indice: self._quitar_anexo(i))
                fila_layout.addWidget(quitar)
            self._anexos_layout.addWidget(fila)

        agregar = QPushButton("Agregar anexo")
        agregar.setEnabled(self.form.puede_agregar_anexo())
        agregar.clicked.connect(self._agregar_anexo)
        self._anexos_layout.addWidget(agregar)

    def _agregar_anexo(self) -> None:
        if self.form.agregar_anexo():
            self._dibujar_anexos()

    def _quitar_anexo(self, indice: int) -> None:
        self.form.quitar_anexo(indice)
        self._dibujar_anexos()


class UserFormPage(_FormPage):
    texto_crear = "Crear usuario"

    def __init__(
        self,
        repository: UserRepository,
        runner: BackgroundRunner,
        navigator: Navigator,
        user_id: Optional[str] = None,
    ) -> None:
        controller = UserEditController(repository, user_id) if user_id else None
        super().__init__(
            "Editar usuario" if user_id else "Nuevo usuario",
            runner,
            navigator,
            Route.USERS,
            controller,
        )
        self._repository = repository

    def _entidad(self) -> Any:
        return self.controller.usuario

    def _crear_form(self, entidad: Any) -> UserForm:
        return UserForm(self._repository, self.navigator, entidad)

    def _construir_campos(self) -> None:
        datos = self.form.datos
        entradas: List[tuple[str, str, QLineEdit]] = []

        nombre = QLineEdit(datos["nombre"])
        email = QLineEdit(datos["email"])
        email.setPlaceholderText("correo@ejemplo.com")
        password = QLineEdit()
        password.setEchoMode(QLineEdit.EchoMode.Password)
        if self.form.es_edicion:
            password.setPlaceholderText("Dejar vacío para mantener la actual")
        entradas.extend(
            [
                ("Nombre *", "nombre", nombre),
                ("Correo electrónico *", "email", email),
                ("Contraseña" + ("" if self.form.es_edicion else " *"), "password", password),
            ]
        )
        for etiqueta, campo, widget in entradas:
            widget.textChanged.connect(lambda texto, c=campo: self._cambiar(c, texto))
            self._agregar(etiqueta, campo, widget)

        rol = QComboBox()
        for valor, texto in ROLE_LABELS.items():
            rol.addItem(texto, valor.value)
        rol.setCurrentIndex(max(0, rol.findData(_valor(datos["rol"]))))
        rol.currentIndexChanged.connect(lambda _i: self._cambiar("rol", rol.currentData()))
        self._agregar("Rol *", "rol", rol)


__all__ = ["EventFormPage", "UserFormPage"]
