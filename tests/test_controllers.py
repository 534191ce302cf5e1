import unittest
from datetime import date
from urllib.parse import unquote

from calendario_app.core.calendar_grid import CalendarCell
from calendario_app.core.controllers import (
    CalendarController,
    DashboardController,
    EventDetailController,
    EventEditController,
    EventListController,
    PublicCalendarController,
    UpcomingEventsController,
    UserListController,
    enlace_whatsapp,
)
from calendario_app.core.errors import ApiError
from calendario_app.core.navigation import Route
from calendario_app.infrastructure.storage import CLAVE_DESBLOQUEO, MemoryStorage
from calendario_app.models.event import EventType
from tests.helpers import (
    ADMIN,
    VEEDOR,
    FakeCalendarRepository,
    FakeEventRepository,
    FakeNavigator,
    FakeSession,
    FakeUserRepository,
    make_event,
)


class TestEventListController(unittest.TestCase):
    def setUp(self) -> None:
        self.eventos = [make_event("e1"), make_event("e2", tipo=EventType.FINALIZADO)]
        self.repo = FakeEventRepository(self.eventos)
        self.controller = EventListController(self.repo)

    def test_load(self) -> None:
        self.assertTrue(self.controller.load())
        self.assertEqual(len(self.controller.eventos), 2)
        self.assertFalse(self.controller.is_loading)
        self.assertEqual(self.controller.resumen, "2 eventos encontrados")

    def test_load_error_keeps_message(self) -> None:
        self.repo.error = ApiError("", 500)
        self.assertFalse(self.controller.load())
        self.assertEqual(self.controller.error, "Error al cargar eventos")
        self.assertFalse(self.controller.is_loading)

    def test_filters_are_sent_and_counted(self) -> None:
        self.controller.set_filtro("fecha_desde", "2025-01-01")
        self.controller.set_filtro("tipo_evento", "FINALIZADO")
        self.assertEqual(self.repo.llamadas[-1], ("listar", "2025-01-01", None, EventType.FINALIZADO))
        self.assertEqual(self.controller.filtros_activos, 2)

    def test_clear_filters_reloads_unfiltered(self) -> None:
        self.controller.set_filtro("fecha_hasta", "2025-02-01", recargar=False)
        self.controller.limpiar_filtros()
        self.assertEqual(self.repo.llamadas[-1], ("listar", None, None, None))
        self.assertEqual(self.controller.filtros_activos, 0)

    def test_unknown_filter(self) -> None:
        with self.assertRaises(KeyError):
            self.controller.set_filtro("area", "PLAZA")

    def test_delete_success_removes_row(self) -> None:
        self.controller.load()
        self.assertTrue(self.controller.delete("e1"))
        self.assertEqual([e.id for e in self.controller.eventos], ["e2"])
        self.assertFalse(self.controller.is_deleting)

    def test_delete_failure_keeps_row(self) -> None:
        self.controller.load()
        self.repo.error = ApiError("No autorizado", 403)
        self.assertFalse(self.controller.delete("e1"))
        self.assertEqual(len(self.controller.eventos), 2)
        self.assertEqual(self.controller.error, "No autorizado")
        self.assertFalse(self.controller.is_deleting)

    def test_second_delete_is_refused_while_pending(self) -> None:
        self.assertTrue(self.controller.iniciar_eliminacion("e1"))
        self.assertFalse(self.controller.iniciar_eliminacion("e2"))


class TestEventDetailController(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = FakeEventRepository([make_event("e1")])
        self.navigator = FakeNavigator()

    def test_not_found_message(self) -> None:
        controller = EventDetailController(self.repo, self.navigator, "zzz")
        self.assertFalse(controller.load())
        self.assertEqual(controller.error, "Evento no encontrado")
        self.assertIsNone(controller.evento)

    def test_delete_navigates_to_list(self) -> None:
        controller = EventDetailController(self.repo, self.navigator, "e1")
        controller.load()
        self.assertTrue(controller.delete("e1"))
        self.assertIsNone(controller.evento)
        self.assertIs(self.navigator.ultima, Route.EVENTS)

    def test_delete_failure_stays(self) -> None:
        controller = EventDetailController(self.repo, self.navigator, "e1")
        controller.load()
        self.repo.error = ApiError("Error del servidor", 500)
        self.assertFalse(controller.delete("e1"))
        self.assertIsNotNone(controller.evento)
        self.assertEqual(self.navigator.visitas, [])

    def test_edit_controller_not_found(self) -> None:
        controller = EventEditController(self.repo, "zzz")
        self.assertFalse(controller.load())
        self.assertEqual(controller.error, "Evento no encontrado")


class TestDashboardController(unittest.TestCase):
    def test_stats_and_recent_window(self) -> None:
        hoy = date(2025, 1, 20)
        proximos = [
            make_event("hoy", desde="2025-01-20"),
            make_event("d3", desde="2025-01-23", tipo=EventType.EN_CURSO),
            make_event("d7", desde="2025-01-27"),
            make_event("d8", desde="2025-01-28"),
            make_event("ayer", desde="2025-01-19"),
        ]
        calendario = FakeCalendarRepository(proximos)
        eventos = FakeEventRepository(
            [make_event("a"), make_event("b", tipo=EventType.FINALIZADO), make_event("c", tipo=EventType.EN_CURSO)]
        )
        controller = DashboardController(calendario, eventos)
        self.assertTrue(controller.load())
        self.assertEqual(calendario.llamadas, [("proximos", 7)])

        stats = controller.stats
        self.assertEqual((stats.total, stats.pendientes, stats.en_curso, stats.finalizados), (3, 1, 1, 1))
        ids = [evento.id for evento in controller.eventos_proximos(hoy)]
        self.assertEqual(ids, ["hoy", "d3", "d7"])

    def test_recent_list_is_capped_at_five(self) -> None:
        proximos = [make_event(f"e{i}", desde="2025-01-21") for i in range(8)]
        controller = DashboardController(FakeCalendarRepository(proximos), FakeEventRepository())
        controller.load()
        self.assertEqual(len(controller.eventos_proximos(date(2025, 1, 20))), 5)

    def test_failure_applies_nothing(self) -> None:
        eventos = FakeEventRepository(error=ApiError("Caído", 503))
        controller = DashboardController(FakeCalendarRepository([make_event()]), eventos)
        self.assertFalse(controller.load())
        self.assertIsNone(controller.proximos)
        self.assertEqual(controller.error, "Caído")


class TestUpcomingEventsController(unittest.TestCase):
    def test_window_change_reloads(self) -> None:
        repo = FakeCalendarRepository([make_event()])
        controller = UpcomingEventsController(repo)
        controller.load()
        controller.cambiar_ventana(30)
        self.assertEqual(repo.llamadas, [("proximos", 7), ("proximos", 30)])
        self.assertEqual(len(controller.eventos), 1)

    def test_unsupported_window(self) -> None:
        controller = UpcomingEventsController(FakeCalendarRepository())
        with self.assertRaises(ValueError):
            controller.cambiar_ventana(10)

    def test_days_remaining(self) -> None:
        evento = make_event(desde="2025-01-25")
        self.assertEqual(UpcomingEventsController.dias_restantes(evento, date(2025, 1, 20)), 5)


class TestCalendarController(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = FakeCalendarRepository([make_event("e1", desde="2025-01-10")])
        self.navigator = FakeNavigator()

    def _controller(self, user=ADMIN) -> CalendarController:
        return CalendarController(self.repo, FakeSession(user), self.navigator, hoy=date(2025, 1, 15))

    def test_month_navigation_requests_new_month(self) -> None:
        controller = self._controller()
        controller.load()
        controller.anterior()
        controller.siguiente()
        controller.siguiente()
        self.assertEqual(
            self.repo.llamadas,
            [("mes", 2025, 1), ("mes", 2024, 12), ("mes", 2025, 1), ("mes", 2025, 2)],
        )
        controller.hoy(date(2025, 1, 15))
        self.assertEqual((controller.year, controller.month), (2025, 1))

    def test_grid_carries_loaded_events(self) -> None:
        controller = self._controller()
        controller.load()
        self.assertEqual(controller.titulo, "Enero 2025")
        self.assertEqual(controller.total_eventos, 1)
        con_evento = [celda.dia for celda in controller.grilla() if celda.eventos]
        self.assertEqual(con_evento, [10])

    def test_admin_double_click_opens_new_event(self) -> None:
        controller = self._controller()
        self.assertTrue(controller.doble_clic(CalendarCell(dia=15, es_mes_actual=True)))
        self.assertEqual(self.navigator.visitas, [(Route.NEW_EVENT, {"date": "2025-01-15"})])

    def test_double_click_ignored_for_viewer_and_adjacent_days(self) -> None:
        self.assertFalse(self._controller(VEEDOR).doble_clic(CalendarCell(dia=15, es_mes_actual=True)))
        self.assertFalse(self._controller().doble_clic(CalendarCell(dia=30, es_mes_actual=False)))
        self.assertEqual(self.navigator.visitas, [])


class TestUserListController(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = FakeUserRepository([ADMIN, VEEDOR])
        self.navigator = FakeNavigator()

    def test_viewer_is_redirected(self) -> None:
        controller = UserListController(self.repo, FakeSession(VEEDOR), self.navigator)
        self.assertFalse(controller.load())
        self.assertIs(self.navigator.ultima, Route.DASHBOARD)
        self.assertEqual(self.repo.llamadas, [])

    def test_admin_loads_users(self) -> None:
        controller = UserListController(self.repo, FakeSession(ADMIN), self.navigator)
        self.assertTrue(controller.load())
        self.assertEqual(controller.resumen, "2 usuarios registrados")

    def test_cannot_delete_own_account(self) -> None:
        controller = UserListController(self.repo, FakeSession(ADMIN), self.navigator)
        controller.load()
        self.assertFalse(controller.puede_eliminar(ADMIN))
        self.assertTrue(controller.puede_eliminar(VEEDOR))
        self.assertFalse(controller.delete(ADMIN.id))
        self.assertEqual(controller.error, "No puedes eliminar tu propia cuenta")
        self.assertNotIn(("eliminar", ADMIN.id), self.repo.llamadas)

    def test_delete_other_user(self) -> None:
        controller = UserListController(self.repo, FakeSession(ADMIN), self.navigator)
        controller.load()
        self.assertTrue(controller.delete(VEEDOR.id))
        self.assertEqual([u.id for u in controller.usuarios], [ADMIN.id])


class TestPublicCalendarController(unittest.TestCase):
    def setUp(self) -> None:
        self.storage = MemoryStorage()
        self.navigator = FakeNavigator()
        self.repo = FakeCalendarRepository([make_event()])
        self.controller = PublicCalendarController(
            self.repo, FakeSession(ADMIN), self.navigator, self.storage, hoy=date(2025, 1, 15)
        )

    def test_locked_redirects_to_gate(self) -> None:
        self.assertFalse(self.controller.load())
        self.assertIs(self.navigator.ultima, Route.PUBLIC_GATE)
        self.assertEqual(self.repo.llamadas, [])

    def test_unlocked_loads(self) -> None:
        self.storage.set(CLAVE_DESBLOQUEO, "true")
        self.assertTrue(self.controller.load())
        self.assertEqual(self.controller.total_eventos, 1)

    def test_read_only(self) -> None:
        self.assertFalse(self.controller.doble_clic(CalendarCell(dia=3, es_mes_actual=True)))
        self.assertEqual(self.navigator.visitas, [])

    def test_select_event(self) -> None:
        evento = make_event("e7")
        self.controller.seleccionar(evento)
        self.assertIs(self.controller.seleccionado, evento)
        self.controller.seleccionar(None)
        self.assertIsNone(self.controller.seleccionado)


class TestWhatsappLink(unittest.TestCase):
    def test_phone_digits_and_message(self) -> None:
        evento = make_event("w", desde="2025-01-22", titulo="Feria del libro")
        enlace = enlace_whatsapp(evento)
        self.assertTrue(enlace.startswith("https://wa.me/5491112345678?text="))
        texto = unquote(enlace.split("?text=", 1)[1])
        self.assertIn("Feria del libro", texto)
        self.assertIn("Auditorio", texto)
        self.assertIn("09:00 - 10:00", texto)


if __name__ == "__main__":
    unittest.main(verbosity=2)
