"""Diálogo de inicio de sesión contra ``/auth/login``."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from calendario_app.core.errors import ApiError, ErrorKind, mensaje_para
from calendario_app.core.session import SessionStore


class LoginDialog(QDialog):
    """Pantalla modal de acceso para administradores y veedores."""

    def __init__(self, session: SessionStore, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Acceso de Administrador")
        self.setModal(True)
        self._session = session

        self._lbl_status = QLabel("")
        self._lbl_status.setObjectName("statusLabel")
        self._lbl_status.setWordWrap(True)
        self._lbl_status.setVisible(False)

        self._input_email = QLineEdit()
        self._input_email.setPlaceholderText("usuario@ejemplo.com")

        self._input_password = QLineEdit()
        self._input_password.setPlaceholderText("contraseña")
        self._input_password.setEchoMode(QLineEdit.EchoMode.Password)
        self._input_password.returnPressed.connect(self._on_submit)

        self._btn_login = QPushButton("Ingresar")
        self._btn_login.clicked.connect(self._on_submit)

        self._btn_cancel = QPushButton("Cancelar")
        self._btn_cancel.clicked.connect(self.reject)

        self._build_ui()
        self._input_email.setFocus()

    def _build_ui(self) -> None:
        title = QLabel("Calendario de eventos")
        title.setStyleSheet("font-size: 15pt; font-weight: 700;")
        subtitle = QLabel("Usa tus credenciales para continuar")

        form = QFormLayout()
        form.setLabelAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        form.addRow("Correo", self._input_email)
        form.addRow("Contraseña", self._input_password)

        buttons = QDialogButtonBox()
        buttons.addButton(self._btn_login, QDialogButtonBox.ButtonRole.AcceptRole)
        buttons.addButton(self._btn_cancel, QDialogButtonBox.ButtonRole.RejectRole)

        layout = QVBoxLayout()
        layout.setSpacing(16)
        layout.setContentsMargins(20, 18, 20, 16)
        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addLayout(form)
        layout.addWidget(buttons)

        status_layout = QHBoxLayout()
        status_layout.addWidget(self._lbl_status)
        status_layout.addStretch(1)
        layout.addLayout(status_layout)

        self.setLayout(layout)
        self.setMinimumWidth(420)
        self.setStyleSheet("#statusLabel { color: #b91c1c; font-weight: 600; }")

    def _on_submit(self) -> None:
        email = self._input_email.text().strip()
        password = self._input_password.text()

        if not email or not password:
            self._show_status("Correo y contraseña son obligatorios.")
            return

        self._toggle_controls(False)
        try:
            self._session.login(email, password)
        except ApiError as exc:
            if exc.kind is ErrorKind.UNAUTHORIZED:
                self._show_status(mensaje_para(exc, "Credenciales inválidas."))
            else:
                self._show_status(mensaje_para(exc, "Error al iniciar sesión"))
            return
        finally:
            self._toggle_controls(True)

        self.accept()

    def _toggle_controls(self, enabled: bool) -> None:
        for widget in (self._input_email, self._input_password, self._btn_login):
            widget.setEnabled(enabled)
        self._btn_login.setText("Ingresar" if enabled else "Ingresando...")

    def _show_status(self, message: str) -> None:
        self._lbl_status.setText(message)
        self._lbl_status.setToolTip(message)
        self._lbl_status.setVisible(bool(message))


__all__ = ["LoginDialog"]
