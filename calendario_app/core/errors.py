"""Errores de la capa HTTP y su traducción a mensajes para la interfaz."""

from __future__ import annotations

from enum import Enum
from typing import Optional

MENSAJE_CONEXION = "Error de conexión"
MENSAJE_GENERICO = "Error en la solicitud"
MENSAJE_INESPERADO = "Error inesperado"


class ErrorKind(str, Enum):
    NETWORK = "network"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    HTTP = "http"
    UNEXPECTED = "unexpected"


class ApiError(Exception):
    """Fallo de una llamada al backend.

    ``status_code`` es ``None`` cuando la petición no llegó a obtener
    respuesta (caída de red, timeout).
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def kind(self) -> ErrorKind:
        if self.status_code is None:
            return ErrorKind.NETWORK
        if self.status_code == 401:
            return ErrorKind.UNAUTHORIZED
        if self.status_code == 404:
            return ErrorKind.NOT_FOUND
        if self.status_code == 409:
            return ErrorKind.CONFLICT
        return ErrorKind.HTTP

    def __repr__(self) -> str:
        return f"ApiError(message={self.message!r}, status_code={self.status_code!r})"


class UnexpectedError(ApiError):
    """Fallo local que no proviene del backend (un error de programación)."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"{MENSAJE_INESPERADO}: {cause}")
        self.cause = cause

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.UNEXPECTED


def mensaje_para(
    exc: ApiError,
    fallback: str,
    *,
    not_found: Optional[str] = None,
    conflict: Optional[str] = None,
) -> str:
    """Elige el texto a mostrar según el tipo de error."""

    if exc.kind is ErrorKind.NOT_FOUND and not_found:
        return not_found
    if exc.kind is ErrorKind.CONFLICT and conflict:
        return conflict
    return exc.message or fallback


__all__ = [
    "ApiError",
    "ErrorKind",
    "MENSAJE_CONEXION",
    "MENSAJE_GENERICO",
    "MENSAJE_INESPERADO",
    "UnexpectedError",
    "mensaje_para",
]
