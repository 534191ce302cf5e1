"""Formularios de alta y edición de eventos y usuarios.

La validación local bloquea el envío y deja un mensaje por campo; el backend
sigue siendo la autoridad final. El envío se divide en fases
(``preparar`` -> ``enviar`` -> ``completar``/``fallar``) para que la vista
pueda ejecutar la petición fuera del hilo de la interfaz. ``submit`` las
encadena de forma sincrónica.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse

from calendario_app.core.errors import ApiError, mensaje_para
from calendario_app.core.navigation import Navigator, Route
from calendario_app.infrastructure.repositories import EventRepository, UserRepository
from calendario_app.models.dto import CreateEventDTO, CreateUserDTO, UpdateEventDTO, UpdateUserDTO
from calendario_app.models.event import MAX_ANEXOS, Area, Event, EventType, solo_fecha
from calendario_app.models.user import User, UserRole

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD = 6
MENSAJE_EMAIL_DUPLICADO = "Ya existe un usuario con este correo electrónico"


def es_url_valida(valor: str) -> bool:
    """URL absoluta: esquema y algo después (``https://host/...``, ``mailto:x``)."""

    partes = urlparse(valor.strip())
    return bool(partes.scheme and (partes.netloc or partes.path))


class _FormBase:
    lista_route: Route
    mensaje_fallback: str

    def __init__(self, navigator: Navigator) -> None:
        self._navigator = navigator
        self.errors: Dict[str, str] = {}
        self.is_loading = False
        self.submit_error = ""

    def validar(self) -> bool:
        raise NotImplementedError

    def _construir_dto(self) -> Any:
        raise NotImplementedError

    def enviar(self, dto: Any) -> Any:
        raise NotImplementedError

    def _mensaje_error(self, exc: ApiError) -> str:
        return mensaje_para(exc, self.mensaje_fallback)

    def preparar(self) -> Optional[Any]:
        """Valida y marca el formulario como ocupado. ``None`` si no se envía."""

        if self.is_loading:
            return None
        self.submit_error = ""
        if not self.validar():
            return None
        self.is_loading = True
        return self._construir_dto()

    def completar(self) -> None:
        self.is_loading = False
        self._navigator.navigate(self.lista_route)
        self._navigator.refresh()

    def fallar(self, exc: ApiError) -> None:
        self.is_loading = False
        self.submit_error = self._mensaje_error(exc)
        logger.info("Envío rechazado: %s", exc.message)

    def submit(self) -> bool:
        dto = self.preparar()
        if dto is None:
            return False
        try:
            self.enviar(dto)
        except ApiError as exc:
            self.fallar(exc)
            return False
        self.completar()
        return True


class EventForm(_FormBase):
    """Formulario de evento (alta si ``evento`` es ``None``, edición si no)."""

    lista_route = Route.EVENTS
    mensaje_fallback = "Error al guardar el evento"

    def __init__(
        self,
        repository: EventRepository,
        navigator: Navigator,
        evento: Optional[Event] = None,
        fecha_por_defecto: Optional[Union[str, date]] = None,
    ) -> None:
        super().__init__(navigator)
        self._repository = repository
        self.evento = evento

        if isinstance(fecha_por_defecto, date):
            fecha_por_defecto = fecha_por_defecto.isoformat()
        fecha_inicial = fecha_por_defecto or ""

        self.datos: Dict[str, Any] = {
            "titulo": evento.titulo if evento else "",
            "descripcion": (evento.descripcion or "") if evento else "",
            "informacion": evento.informacion if evento else "",
            "fecha_desde": (solo_fecha(evento.fecha_desde) if evento else "") or fecha_inicial,
            "fecha_hasta": (solo_fecha(evento.fecha_hasta) if evento else "") or fecha_inicial,
            "hora_desde": (evento.hora_desde if evento else "") or "09:00",
            "hora_hasta": (evento.hora_hasta if evento else "") or "10:00",
            "tipo_evento": evento.tipo_evento if evento else EventType.PENDIENTE,
            "area": evento.area if evento else Area.COWORKING,
            "organizador_solicitante": evento.organizador_solicitante if evento else "",
            "cobertura_prensa": evento.cobertura_prensa if evento else False,
            "contacto_formal": evento.contacto_formal if evento else "",
            "contacto_informal": (evento.contacto_informal or "") if evento else "",
            "convocatoria": evento.convocatoria if evento else 0,
        }
        self.anexos: List[str] = list(evento.anexos) if evento and evento.anexos else [""]

    @property
    def es_edicion(self) -> bool:
        return self.evento is not None

    # ------------------------------------------------------------------
    # Edición de campos
    # ------------------------------------------------------------------
    def cambiar(self, campo: str, valor: Any) -> None:
        if campo not in self.datos:
            raise KeyError(campo)
        self.datos[campo] = valor
        self.errors.pop(campo, None)

    def puede_agregar_anexo(self) -> bool:
        return len(self.anexos) < MAX_ANEXOS

    def agregar_anexo(self) -> bool:
        if not self.puede_agregar_anexo():
            return False
        self.anexos.append("")
        return True

    def quitar_anexo(self, indice: int) -> None:
        del self.anexos[indice]

    def actualizar_anexo(self, indice: int, valor: str) -> None:
        self.anexos[indice] = valor
        self.errors.pop("anexos", None)

    def anexos_validos(self) -> List[str]:
        return [anexo.strip() for anexo in self.anexos if anexo.strip()]

    # ------------------------------------------------------------------
    # Validación y envío
    # ------------------------------------------------------------------
    def validar(self) -> bool:
        d = self.datos
        errores: Dict[str, str] = {}

        if not str(d["titulo"]).strip():
            errores["titulo"] = "El título es requerido"
        if not str(d["informacion"]).strip():
            errores["informacion"] = "La información es requerida"
        if not d["fecha_desde"]:
            errores["fecha_desde"] = "La fecha de inicio es requerida"
        if not d["fecha_hasta"]:
            errores["fecha_hasta"] = "La fecha de fin es requerida"
        if d["fecha_desde"] and d["fecha_hasta"] and d["fecha_hasta"] < d["fecha_desde"]:
            errores["fecha_hasta"] = (
                "La fecha de fin debe ser igual o posterior a la fecha de inicio"
            )
        if not d["hora_desde"]:
            errores["hora_desde"] = "La hora de inicio es requerida"
        if not d["hora_hasta"]:
            errores["hora_hasta"] = "La hora de fin es requerida"
        if (
            d["fecha_desde"] == d["fecha_hasta"]
            and d["hora_desde"]
            and d["hora_hasta"]
            and d["hora_hasta"] <= d["hora_desde"]
        ):
            errores["hora_hasta"] = "La hora de fin debe ser posterior a la hora de inicio"
        if not str(d["organizador_solicitante"]).strip():
            errores["organizador_solicitante"] = "El organizador es requerido"
        if not str(d["contacto_formal"]).strip():
            errores["contacto_formal"] = "El contacto formal es requerido"

        try:
            convocatoria = int(d["convocatoria"])
        except (TypeError, ValueError):
            convocatoria = -1
        if convocatoria < 0:
            errores["convocatoria"] = "La convocatoria debe ser mayor o igual a 0"

        if len(self.anexos) > MAX_ANEXOS:
            errores["anexos"] = f"Se permiten como máximo {MAX_ANEXOS} anexos"
        elif not all(es_url_valida(anexo) for anexo in self.anexos_validos()):
            errores["anexos"] = "Todos los anexos deben ser URLs válidas"

        self.errors = errores
        return not errores

    def _campos_comunes(self) -> Dict[str, Any]:
        d = self.datos
        return {
            "titulo": d["titulo"],
            "descripcion": d["descripcion"] or None,
            "informacion": d["informacion"],
            "fecha_desde": d["fecha_desde"],
            "fecha_hasta": d["fecha_hasta"],
            "hora_desde": d["hora_desde"],
            "hora_hasta": d["hora_hasta"],
            "tipo_evento": EventType(d["tipo_evento"]),
            "area": Area(d["area"]),
            "organizador_solicitante": d["organizador_solicitante"],
            "cobertura_prensa": bool(d["cobertura_prensa"]),
            "contacto_formal": d["contacto_formal"],
            "contacto_informal": d["contacto_informal"] or None,
            "convocatoria": int(d["convocatoria"]),
            "anexos": self.anexos_validos(),
        }

    def _construir_dto(self) -> Union[CreateEventDTO, UpdateEventDTO]:
        if self.es_edicion:
            return UpdateEventDTO(**self._campos_comunes())
        return CreateEventDTO(**self._campos_comunes())

    def enviar(self, dto: Union[CreateEventDTO, UpdateEventDTO]) -> Optional[Event]:
        if isinstance(dto, UpdateEventDTO):
            return self._repository.actualizar(self.evento.id, dto)
        return self._repository.crear(dto)


class UserForm(_FormBase):
    """Formulario de usuario; en edición la contraseña vacía no se cambia."""

    lista_route = Route.USERS
    mensaje_fallback = "Error al guardar el usuario"

    def __init__(
        self,
        repository: UserRepository,
        navigator: Navigator,
        usuario: Optional[User] = None,
    ) -> None:
        super().__init__(navigator)
        self._repository = repository
        self.usuario = usuario
        self.datos: Dict[str, Any] = {
            "nombre": usuario.nombre if usuario else "",
            "email": usuario.email if usuario else "",
            "password": "",
            "rol": usuario.rol if usuario else UserRole.VEEDOR,
        }

    @property
    def es_edicion(self) -> bool:
        return self.usuario is not None

    def cambiar(self, campo: str, valor: Any) -> None:
        if campo not in self.datos:
            raise KeyError(campo)
        self.datos[campo] = valor
        self.errors.pop(campo, None)

    def validar(self) -> bool:
        d = self.datos
        errores: Dict[str, str] = {}

        if not d["nombre"].strip():
            errores["nombre"] = "El nombre es requerido"
        if not d["email"].strip():
            errores["email"] = "El correo electrónico es requerido"
        elif not EMAIL_RE.match(d["email"]):
            errores["email"] = "El formato del correo electrónico no es válido"
        if not self.es_edicion and not d["password"]:
            errores["password"] = "La contraseña es requerida"
        elif d["password"] and len(d["password"]) < MIN_PASSWORD:
            errores["password"] = f"La contraseña debe tener al menos {MIN_PASSWORD} caracteres"

        self.errors = errores
        return not errores

    def _construir_dto(self) -> Union[CreateUserDTO, UpdateUserDTO]:
        d = self.datos
        rol = UserRole(d["rol"])
        if self.es_edicion:
            return UpdateUserDTO(
                nombre=d["nombre"],
                email=d["email"],
                rol=rol,
                password=d["password"] or None,
            )
        return CreateUserDTO(nombre=d["nombre"], email=d["email"], password=d["password"], rol=rol)

    def enviar(self, dto: Union[CreateUserDTO, UpdateUserDTO]) -> Optional[User]:
        if isinstance(dto, UpdateUserDTO):
            return self._repository.actualizar(self.usuario.id, dto)
        return self._repository.crear(dto)

    def _mensaje_error(self, exc: ApiError) -> str:
        return mensaje_para(exc, self.mensaje_fallback, conflict=MENSAJE_EMAIL_DUPLICADO)


__all__ = ["EventForm", "MENSAJE_EMAIL_DUPLICADO", "UserForm", "es_url_valida"]
