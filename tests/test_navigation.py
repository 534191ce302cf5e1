import unittest

from calendario_app.core.navigation import RUTAS_ADMIN, RUTAS_PANEL, Route, resolver_ruta


def _resolver(route, params=None, *, autenticado=True, es_admin=False, desbloqueado=False):
    return resolver_ruta(
        route,
        params or {},
        autenticado=autenticado,
        es_admin=es_admin,
        desbloqueado=desbloqueado,
    )


class TestRouteAccess(unittest.TestCase):
    def test_event_forms_send_viewer_to_event_list(self) -> None:
        for route in (Route.NEW_EVENT, Route.EDIT_EVENT):
            with self.subTest(route=route):
                self.assertEqual(_resolver(route, {"id": "x"}), (Route.EVENTS, {}))

    def test_user_routes_send_viewer_to_dashboard(self) -> None:
        for route in (Route.USERS, Route.NEW_USER, Route.EDIT_USER):
            with self.subTest(route=route):
                self.assertEqual(_resolver(route, {"id": "u1"}), (Route.DASHBOARD, {}))

    def test_admin_reaches_admin_routes_with_params(self) -> None:
        self.assertEqual(
            _resolver(Route.EDIT_EVENT, {"id": "e1"}, es_admin=True),
            (Route.EDIT_EVENT, {"id": "e1"}),
        )
        self.assertEqual(
            _resolver(Route.NEW_EVENT, {"date": "2025-01-15"}, es_admin=True),
            (Route.NEW_EVENT, {"date": "2025-01-15"}),
        )

    def test_viewer_keeps_read_only_routes(self) -> None:
        for route in (Route.DASHBOARD, Route.CALENDAR, Route.EVENTS, Route.EVENT_DETAIL):
            with self.subTest(route=route):
                self.assertIs(_resolver(route, {"id": "e1"})[0], route)

    def test_panel_without_session_goes_to_login(self) -> None:
        for route in RUTAS_PANEL:
            with self.subTest(route=route):
                self.assertEqual(_resolver(route, autenticado=False), (Route.LOGIN, {}))

    def test_login_with_session_goes_to_dashboard(self) -> None:
        self.assertEqual(_resolver(Route.LOGIN), (Route.DASHBOARD, {}))
        self.assertEqual(_resolver(Route.LOGIN, autenticado=False), (Route.LOGIN, {}))

    def test_public_gate_when_unlocked(self) -> None:
        self.assertEqual(
            _resolver(Route.PUBLIC_GATE, autenticado=False, desbloqueado=True),
            (Route.PUBLIC_CALENDAR, {}),
        )
        self.assertIs(_resolver(Route.PUBLIC_GATE, autenticado=False)[0], Route.PUBLIC_GATE)

    def test_admin_routes_are_panel_routes(self) -> None:
        self.assertTrue(RUTAS_ADMIN <= RUTAS_PANEL)


if __name__ == "__main__":
    unittest.main(verbosity=2)
