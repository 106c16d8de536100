"""
Tests de la conversión entre días locales y timestamps UTC.
"""
from datetime import date, datetime

import pytest

from inventario_api.utils.fechas import FechaHelper

pytestmark = pytest.mark.unit


def test_dia_en_lima(zona_horaria):
    zona_horaria("America/Lima")

    assert FechaHelper.rango_dias_utc(date(2024, 1, 10), date(2024, 1, 12)) == (
        datetime(2024, 1, 10, 5, 0),
        datetime(2024, 1, 13, 4, 59, 59, 999999),
    )


def test_dia_en_kiritimati(zona_horaria):
    zona_horaria("Pacific/Kiritimati")

    assert FechaHelper.inicio_dia_utc(date(2024, 1, 10)) == datetime(2024, 1, 9, 10, 0)
    assert FechaHelper.fin_dia_utc(date(2024, 1, 10)) == datetime(2024, 1, 10, 9, 59, 59, 999999)


def test_utc_sin_desplazamiento(zona_horaria):
    zona_horaria("UTC")

    assert FechaHelper.local_a_utc(datetime(2024, 6, 1, 12, 30)) == datetime(2024, 6, 1, 12, 30)


def test_ahora_utc_sin_tzinfo():
    assert FechaHelper.ahora_utc().tzinfo is None
