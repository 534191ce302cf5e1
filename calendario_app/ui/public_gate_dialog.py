"""Pantalla de bloqueo del calendario público."""

from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from calendario_app.core.public_gate import PublicGate


class PublicGateDialog(QDialog):
    """Pide la contraseña compartida antes de mostrar el calendario público.

    ``admin_requested`` queda en ``True`` si se elige el acceso de
    administrador en lugar de la vista pública.
    """

    def __init__(self, gate: PublicGate, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Calendario de eventos")
        self.setModal(True)
        self._gate = gate
        self.admin_requested = False

        self._input_password = QLineEdit()
        self._input_password.setPlaceholderText("Contraseña")
        self._input_password.setEchoMode(QLineEdit.EchoMode.Password)
        self._input_password.textChanged.connect(self._on_text_changed)
        self._input_password.returnPressed.connect(self._on_unlock)

        self._btn_unlock = QPushButton("Acceder al Calendario")
        self._btn_unlock.setEnabled(False)
        self._btn_unlock.clicked.connect(self._on_unlock)

        self._btn_admin = QPushButton("Acceso de Administrador")
        self._btn_admin.setFlat(True)
        self._btn_admin.clicked.connect(self._on_admin)

        self._lbl_status = QLabel("")
        self._lbl_status.setStyleSheet("color: #b91c1c; font-weight: 600;")
        self._lbl_status.setVisible(False)

        layout = QVBoxLayout()
        layout.setSpacing(12)
        layout.setContentsMargins(24, 20, 24, 16)
        layout.addWidget(QLabel("Ingresa la contraseña para acceder al calendario"))
        layout.addWidget(self._input_password)
        layout.addWidget(self._btn_unlock)
        layout.addWidget(self._lbl_status)
        layout.addWidget(self._btn_admin)
        self.setLayout(layout)
        self.setMinimumWidth(380)

    def _on_text_changed(self, text: str) -> None:
        self._btn_unlock.setEnabled(bool(text))
        self._lbl_status.setVisible(False)

    def _on_unlock(self) -> None:
        if self._gate.desbloquear(self._input_password.text()):
            self.accept()
            return
        self._lbl_status.setText(self._gate.error)
        self._lbl_status.setVisible(True)

    def _on_admin(self) -> None:
        self.admin_requested = True
        self.reject()


__all__ = ["PublicGateDialog"]
