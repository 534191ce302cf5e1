"""Destinos de navegación de la aplicación y reglas de acceso."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Protocol, Tuple


class Route(str, Enum):
    PUBLIC_GATE = "/"
    PUBLIC_CALENDAR = "/calendar"
    LOGIN = "/login"
    DASHBOARD = "/dashboard"
    CALENDAR = "/dashboard/calendar"
    EVENTS = "/dashboard/events"
    EVENT_DETAIL = "/dashboard/events/:id"
    NEW_EVENT = "/dashboard/events/new"
    EDIT_EVENT = "/dashboard/events/:id/edit"
    USERS = "/dashboard/users"
    NEW_USER = "/dashboard/users/new"
    EDIT_USER = "/dashboard/users/:id/edit"


# Requieren sesión iniciada
RUTAS_PANEL = frozenset(
    {
        Route.DASHBOARD,
        Route.CALENDAR,
        Route.EVENTS,
        Route.EVENT_DETAIL,
        Route.NEW_EVENT,
        Route.EDIT_EVENT,
        Route.USERS,
        Route.NEW_USER,
        Route.EDIT_USER,
    }
)

# Requieren además el rol ADMIN; el valor es adónde se envía a un VIEWER
_DESTINO_SIN_PERMISO = {
    Route.NEW_EVENT: Route.EVENTS,
    Route.EDIT_EVENT: Route.EVENTS,
    Route.USERS: Route.DASHBOARD,
    Route.NEW_USER: Route.DASHBOARD,
    Route.EDIT_USER: Route.DASHBOARD,
}
RUTAS_ADMIN = frozenset(_DESTINO_SIN_PERMISO)


class Navigator(Protocol):
    """Lo implementa la ventana principal; los controladores sólo lo invocan."""

    def navigate(self, route: Route, **params: Any) -> None: ...

    def refresh(self) -> None: ...


def resolver_ruta(
    route: Route,
    params: Dict[str, Any],
    *,
    autenticado: bool,
    es_admin: bool,
    desbloqueado: bool,
) -> Tuple[Route, Dict[str, Any]]:
    """Aplica las redirecciones de acceso y devuelve el destino final.

    - Panel sin sesión -> LOGIN.
    - Formularios de eventos sin rol ADMIN -> listado de eventos.
    - Gestión de usuarios sin rol ADMIN -> DASHBOARD.
    - LOGIN con sesión -> DASHBOARD.
    - Pantalla de contraseña ya desbloqueada -> calendario público.
    """

    if route in RUTAS_PANEL and not autenticado:
        return Route.LOGIN, {}
    if route in RUTAS_ADMIN and not es_admin:
        return _DESTINO_SIN_PERMISO[route], {}
    if route is Route.LOGIN and autenticado:
        return Route.DASHBOARD, {}
    if route is Route.PUBLIC_GATE and desbloqueado:
        return Route.PUBLIC_CALENDAR, {}
    return route, params


__all__ = ["Navigator", "RUTAS_ADMIN", "RUTAS_PANEL", "Route", "resolver_ruta"]
