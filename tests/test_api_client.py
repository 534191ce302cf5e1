import io
import json
import unittest
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError, URLError

from calendario_app.core.errors import ErrorKind, MENSAJE_CONEXION, MENSAJE_GENERICO, ApiError
from calendario_app.infrastructure.api_client import APIClient
from calendario_app.core.forms import EventForm, UserForm
from calendario_app.core.navigation import Route
from calendario_app.infrastructure.repositories import (
    CalendarRepository,
    EventRepository,
    UserRepository,
)
from calendario_app.models.dto import CreateEventDTO
from calendario_app.models.event import Area, EventType
from tests.helpers import VEEDOR, FakeNavigator, make_event

BASE = "http://api.test/api"


def _respuesta(cuerpo: bytes) -> MagicMock:
    respuesta = MagicMock()
    respuesta.__enter__.return_value = respuesta
    respuesta.read.return_value = cuerpo
    return respuesta


def _http_error(code: int, cuerpo: bytes) -> HTTPError:
    return HTTPError(f"{BASE}/x", code, "error", {}, io.BytesIO(cuerpo))


class TestApiClientTransport(unittest.TestCase):
    def setUp(self) -> None:
        self.token = None
        self.client = APIClient(base_url=BASE + "/", token_provider=lambda: self.token, timeout=5)
        patcher = patch("calendario_app.infrastructure.api_client.urlopen")
        self.urlopen = patcher.start()
        self.addCleanup(patcher.stop)

    def _request_enviada(self):
        return self.urlopen.call_args[0][0]

    def test_strips_trailing_slash_from_base_url(self) -> None:
        self.assertEqual(self.client.base_url, BASE)

    def test_sends_bearer_token_when_available(self) -> None:
        self.token = "abc.def.ghi"
        self.urlopen.return_value = _respuesta(b"[]")
        self.client.get_users()
        request = self._request_enviada()
        self.assertEqual(request.get_header("Authorization"), "Bearer abc.def.ghi")
        self.assertEqual(request.full_url, f"{BASE}/users")
        self.assertEqual(request.get_method(), "GET")

    def test_no_authorization_header_without_token(self) -> None:
        self.urlopen.return_value = _respuesta(b"[]")
        self.client.get_users()
        self.assertIsNone(self._request_enviada().get_header("Authorization"))

    def test_json_body_on_post(self) -> None:
        self.urlopen.return_value = _respuesta(b'{"access_token": "t", "user": {"id": "1"}}')
        self.client.login("ana@ejemplo.com", "secreto")
        request = self._request_enviada()
        self.assertEqual(request.get_method(), "POST")
        self.assertEqual(json.loads(request.data), {"email": "ana@ejemplo.com", "password": "secreto"})
        self.assertEqual(request.get_header("Content-type"), "application/json")

    def test_empty_body_returns_empty_dict(self) -> None:
        self.urlopen.return_value = _respuesta(b"")
        self.assertEqual(self.client._request("DELETE", "/events/1"), {})

    def test_http_error_uses_server_message(self) -> None:
        self.urlopen.side_effect = _http_error(404, b'{"message": "Evento no encontrado"}')
        with self.assertRaises(ApiError) as ctx:
            self.client.get_event("x")
        self.assertEqual(ctx.exception.message, "Evento no encontrado")
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertIs(ctx.exception.kind, ErrorKind.NOT_FOUND)

    def test_validation_message_lists_are_joined(self) -> None:
        self.urlopen.side_effect = _http_error(400, b'{"message": ["titulo vacio", "area invalida"]}')
        with self.assertRaises(ApiError) as ctx:
            self.client.create_event({})
        self.assertEqual(ctx.exception.message, "titulo vacio, area invalida")

    def test_unparseable_error_body_is_connection_error(self) -> None:
        self.urlopen.side_effect = _http_error(502, b"<html>Bad gateway</html>")
        with self.assertRaises(ApiError) as ctx:
            self.client.get_users()
        self.assertEqual(ctx.exception.message, MENSAJE_CONEXION)
        self.assertEqual(ctx.exception.status_code, 502)

    def test_error_without_message_uses_generic_text(self) -> None:
        self.urlopen.side_effect = _http_error(500, b'{"statusCode": 500}')
        with self.assertRaises(ApiError) as ctx:
            self.client.get_users()
        self.assertEqual(ctx.exception.message, MENSAJE_GENERICO)

    def test_conflict_kind(self) -> None:
        self.urlopen.side_effect = _http_error(409, b'{"message": "duplicado"}')
        with self.assertRaises(ApiError) as ctx:
            self.client.create_user({})
        self.assertIs(ctx.exception.kind, ErrorKind.CONFLICT)

    def test_network_failure_has_no_status(self) -> None:
        self.urlopen.side_effect = URLError("connection refused")
        with self.assertRaises(ApiError) as ctx:
            self.client.get_users()
        self.assertIsNone(ctx.exception.status_code)
        self.assertIs(ctx.exception.kind, ErrorKind.NETWORK)
        self.assertEqual(ctx.exception.message, MENSAJE_CONEXION)

    def test_event_filters_are_omitted_when_empty(self) -> None:
        self.urlopen.return_value = _respuesta(b"[]")
        self.client.get_events(fecha_desde="2025-01-01", fecha_hasta="", tipo_evento=None)
        self.assertEqual(self._request_enviada().full_url, f"{BASE}/events?fechaDesde=2025-01-01")

        self.client.get_events()
        self.assertEqual(self._request_enviada().full_url, f"{BASE}/events")

    def test_calendar_query(self) -> None:
        self.urlopen.return_value = _respuesta(b'{"events": []}')
        self.client.get_calendar(2025, 3)
        self.assertEqual(self._request_enviada().full_url, f"{BASE}/calendar?year=2025&month=3")
        self.client.get_upcoming_events(14)
        self.assertEqual(self._request_enviada().full_url, f"{BASE}/calendar/upcoming?days=14")


class TestRepositories(unittest.TestCase):
    def setUp(self) -> None:
        self.api = MagicMock(spec=APIClient)

    def test_events_are_mapped_from_camel_case(self) -> None:
        self.api.get_events.return_value = [
            {
                "id": 7,
                "titulo": "Feria",
                "informacion": "info",
                "fechaDesde": "2025-01-10",
                "fechaHasta": "2025-01-12",
                "horaDesde": "10:00",
                "horaHasta": "18:00",
                "tipoEvento": "MASIVO",
                "area": "PLAZA",
                "organizadorSolicitante": "Club",
                "contactoFormal": "123",
                "coberturaPrensaBol": True,
                "convocatoria": 300,
                "anexos": ["https://a.test/1"],
                "createdBy": {"id": "u1", "nombre": "Ana", "email": "a@b.c", "rol": "ADMIN"},
            }
        ]
        eventos = EventRepository(self.api).listar(tipo_evento=EventType.MASIVO)
        self.api.get_events.assert_called_once_with(
            fecha_desde=None, fecha_hasta=None, tipo_evento="MASIVO"
        )
        evento = eventos[0]
        self.assertEqual(evento.id, "7")
        self.assertIs(evento.area, Area.PLAZA)
        self.assertTrue(evento.cobertura_prensa)
        self.assertTrue(evento.es_multidia)
        self.assertEqual(evento.created_by.nombre, "Ana")

    def test_create_payload_omits_empty_optional_text(self) -> None:
        self.api.create_event.return_value = {"id": "1"}
        dto = CreateEventDTO(
            titulo="Charla",
            informacion="info",
            fecha_desde="2025-02-01",
            fecha_hasta="2025-02-01",
            hora_desde="09:00",
            hora_hasta="10:00",
            tipo_evento=EventType.PENDIENTE,
            area=Area.AULA_1,
            organizador_solicitante="Escuela",
            contacto_formal="123",
            descripcion="",
        )
        EventRepository(self.api).crear(dto)
        payload = self.api.create_event.call_args[0][0]
        self.assertNotIn("descripcion", payload)
        self.assertNotIn("contactoInformal", payload)
        self.assertEqual(payload["tipoEvento"], "PENDIENTE")
        self.assertEqual(payload["area"], "AULA_1")
        self.assertEqual(payload["coberturaPrensaBol"], False)
        self.assertEqual(payload["anexos"], [])

    def test_calendar_response(self) -> None:
        self.api.get_calendar.return_value = {
            "year": 2025,
            "month": 1,
            "startDate": "2025-01-01",
            "endDate": "2025-01-31",
            "events": [],
            "totalEvents": 0,
        }
        respuesta = CalendarRepository(self.api).mes(2025, 1)
        self.assertEqual((respuesta.year, respuesta.month, respuesta.total_events), (2025, 1, 0))

    def test_null_total_falls_back_to_event_count(self) -> None:
        self.api.get_calendar.return_value = {"events": [{"id": "1"}], "totalEvents": None}
        self.assertEqual(CalendarRepository(self.api).mes(2025, 1).total_events, 1)

        self.api.get_upcoming_events.return_value = {"events": [], "totalEvents": None}
        self.assertEqual(CalendarRepository(self.api).proximos(7).total_events, 0)


class TestEmptySuccessBodies(unittest.TestCase):
    """Un 2xx sin cuerpo es un éxito aunque no devuelva la entidad."""

    def setUp(self) -> None:
        self.client = APIClient(base_url=BASE, timeout=5)
        self.navigator = FakeNavigator()
        patcher = patch("calendario_app.infrastructure.api_client.urlopen")
        self.urlopen = patcher.start()
        self.addCleanup(patcher.stop)
        self.urlopen.return_value = _respuesta(b"")

    def test_event_update_with_empty_body_completes(self) -> None:
        form = EventForm(EventRepository(self.client), self.navigator, evento=make_event("e1"))
        self.assertTrue(form.submit())
        self.assertEqual(form.submit_error, "")
        self.assertIs(self.navigator.ultima, Route.EVENTS)
        self.assertEqual(self.urlopen.call_args[0][0].get_method(), "PATCH")

    def test_user_update_with_empty_body_completes(self) -> None:
        form = UserForm(UserRepository(self.client), self.navigator, usuario=VEEDOR)
        self.assertTrue(form.submit())
        self.assertIs(self.navigator.ultima, Route.USERS)

    def test_create_returns_none_without_body(self) -> None:
        dto = CreateEventDTO(
            titulo="Charla",
            informacion="info",
            fecha_desde="2025-02-01",
            fecha_hasta="2025-02-01",
            hora_desde="09:00",
            hora_hasta="10:00",
            tipo_evento=EventType.PENDIENTE,
            area=Area.AULA_1,
            organizador_solicitante="Escuela",
            contacto_formal="123",
        )
        self.assertIsNone(EventRepository(self.client).crear(dto))
        self.assertEqual(self.urlopen.call_args[0][0].get_method(), "POST")


if __name__ == "__main__":
    unittest.main(verbosity=2)
