"""Punto de entrada de la aplicación.

Crea la configuración, el almacenamiento, el cliente HTTP, los repositorios
y el estado de sesión, y arranca la ventana principal.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from calendario_app.config import get_settings
from calendario_app.core.navigation import Route
from calendario_app.core.public_gate import PublicGate
from calendario_app.core.session import SessionStore
from calendario_app.infrastructure.api_client import APIClient
from calendario_app.infrastructure.repositories import (
    AuthRepository,
    CalendarRepository,
    EventRepository,
    UserRepository,
)
from calendario_app.infrastructure.storage import JsonFileStorage, MemoryStorage
from calendario_app.ui.main_window import MainWindow

FORMATO_LOG = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configurar_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=FORMATO_LOG)


def main() -> None:
    """Arranca la aplicación PyQt6 con las dependencias configuradas."""

    settings = get_settings()
    configurar_logging(settings.LOG_LEVEL)

    app = QApplication(sys.argv)

    storage = JsonFileStorage(settings.storage_file)
    session_storage = MemoryStorage()

    api_client = APIClient(base_url=settings.api_base, timeout=settings.REQUEST_TIMEOUT)
    session = SessionStore(AuthRepository(api_client), storage)
    api_client.set_token_provider(session.token_actual)
    gate = PublicGate(session_storage, password=settings.LOCK_PASSWORD)

    window = MainWindow(
        session=session,
        gate=gate,
        event_repository=EventRepository(api_client),
        user_repository=UserRepository(api_client),
        calendar_repository=CalendarRepository(api_client),
        session_storage=session_storage,
    )
    session.set_navigator(window)
    gate.set_navigator(window)

    session.inicializar()
    window.show()
    window.navigate(Route.DASHBOARD if session.is_authenticated else Route.PUBLIC_GATE)

    sys.exit(app.exec())


if __name__ == "__main__":  # pragma: no cover - punto de entrada interactivo
    main()


__all__ = ["configurar_logging", "main"]
