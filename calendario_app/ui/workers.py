"""Ejecución de peticiones al backend fuera del hilo de la interfaz.

La función de E/S corre en un ``QThread``; el resultado o el error vuelven
al hilo principal mediante señales, de modo que el estado de controladores y
formularios sólo se modifica desde el bucle de eventos de Qt.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PyQt6 import sip
from PyQt6.QtCore import QObject, QThread, pyqtSignal

from calendario_app.core.errors import ApiError, UnexpectedError

logger = logging.getLogger(__name__)


class _TaskWorker(QObject):
    finished = pyqtSignal(object)
    error = pyqtSignal(object)

    def __init__(self, funcion: Callable[[], Any]) -> None:
        super().__init__()
        self._funcion = funcion

    def run(self) -> None:
        try:
            resultado = self._funcion()
        except ApiError as exc:
            self.error.emit(exc)
            return
        except Exception as exc:
            logger.exception("Fallo inesperado en tarea de fondo")
            self.error.emit(UnexpectedError(exc))
            return
        self.finished.emit(resultado)


def _si_vivo(owner: Optional[QObject], callback: Callable[[Any], None]) -> Callable[[Any], None]:
    def _llamar(valor: Any) -> None:
        if owner is not None and sip.isdeleted(owner):
            logger.debug("Resultado descartado: la vista ya no existe")
            return
        callback(valor)

    return _llamar


class BackgroundRunner(QObject):
    """Lanza tareas en hilos propios y conserva referencias hasta que terminan."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._activos: set[tuple[QThread, _TaskWorker]] = set()

    def run(
        self,
        funcion: Callable[[], Any],
        on_success: Callable[[Any], None],
        on_error: Callable[[ApiError], None],
        owner: Optional[QObject] = None,
    ) -> None:
        """Ejecuta ``funcion`` en otro hilo.

        Si ``owner`` ya fue destruido cuando llega el resultado, los
        callbacks no se invocan.
        """

        thread = QThread(self)
        worker = _TaskWorker(funcion)
        worker.moveToThread(thread)
        par = (thread, worker)
        self._activos.add(par)

        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        worker.finished.connect(_si_vivo(owner, on_success))
        worker.error.connect(_si_vivo(owner, on_error))
        thread.finished.connect(lambda: self._limpiar(par))

        thread.start()

    def _limpiar(self, par: tuple[QThread, _TaskWorker]) -> None:
        thread, worker = par
        self._activos.discard(par)
        worker.deleteLater()
        thread.deleteLater()


def cargar(
    runner: BackgroundRunner,
    controller: Any,
    on_done: Callable[[], None],
    owner: Optional[QObject] = None,
) -> None:
    """Ejecuta ``controller.fetch`` en segundo plano y aplica el resultado."""

    controller.iniciar_carga()
    on_done()

    def _ok(datos: Any) -> None:
        controller.aplicar(datos)
        controller.finalizar_carga()
        on_done()

    def _error(exc: ApiError) -> None:
        controller.registrar_error(exc)
        controller.finalizar_carga()
        on_done()

    runner.run(controller.fetch, _ok, _error, owner)


__all__ = ["BackgroundRunner", "cargar"]
