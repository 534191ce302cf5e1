import unittest
from datetime import date

from calendario_app.core.dates import (
    days_between,
    etiqueta_relativa,
    format_date,
    get_days_since,
    get_days_until,
    parse_local_date,
)


HOY = date(2025, 1, 20)


class TestParseLocalDate(unittest.TestCase):
    def test_plain_date(self) -> None:
        self.assertEqual(parse_local_date("2025-01-22"), date(2025, 1, 22))

    def test_iso_timestamp_keeps_calendar_day(self) -> None:
        # Una fecha UTC de fin de día no debe correrse al día anterior
        self.assertEqual(parse_local_date("2025-01-22T23:30:00.000Z"), date(2025, 1, 22))
        self.assertEqual(parse_local_date("2025-01-22T00:00:00.000Z"), date(2025, 1, 22))

    def test_rejects_malformed_values(self) -> None:
        for valor in ("", "2025-01", "22/01/2025"):
            with self.subTest(valor=valor):
                with self.assertRaises(ValueError):
                    parse_local_date(valor)

    def test_rejects_impossible_day(self) -> None:
        with self.assertRaises(ValueError):
            parse_local_date("2025-02-30")


class TestDayDistances(unittest.TestCase):
    def test_days_until_future_and_past(self) -> None:
        self.assertEqual(get_days_until("2025-01-22", HOY), 2)
        self.assertEqual(get_days_until("2025-01-20", HOY), 0)
        self.assertEqual(get_days_until("2025-01-13", HOY), -7)

    def test_days_since_is_inverse_of_days_until(self) -> None:
        for valor in ("2024-12-31", "2025-01-20", "2025-01-21", "2025-03-01"):
            with self.subTest(valor=valor):
                self.assertEqual(get_days_since(valor, HOY), -get_days_until(valor, HOY))

    def test_days_between_crosses_year(self) -> None:
        self.assertEqual(days_between(date(2025, 1, 1), date(2024, 12, 31)), 1)


class TestFormatting(unittest.TestCase):
    def test_format_date_uses_calendar_day(self) -> None:
        texto = format_date("2025-01-22T23:30:00.000Z", "dd/MM/yyyy")
        self.assertEqual(texto, "22/01/2025")

    def test_default_format_contains_day_and_year(self) -> None:
        texto = format_date("2025-01-05")
        self.assertTrue(texto.startswith("05"))
        self.assertTrue(texto.endswith("2025"))

    def test_relative_labels(self) -> None:
        self.assertEqual(etiqueta_relativa(0), "Hoy")
        self.assertEqual(etiqueta_relativa(1), "Mañana")
        self.assertEqual(etiqueta_relativa(-1), "Ayer")
        self.assertEqual(etiqueta_relativa(4), "En 4 días")
        self.assertEqual(etiqueta_relativa(-3), "Hace 3 días")


if __name__ == "__main__":
    unittest.main(verbosity=2)
