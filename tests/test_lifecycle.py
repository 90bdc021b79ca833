"""Tests for planting status derivation and derived metrics."""
from datetime import date, timedelta

import pytest

from microgreens.enums.enums import EventoTipoEnum, SiembraEstadoEnum
from microgreens.services.lifecycle import (
    ciclo_de_vida,
    derivar_estado,
    dias_desde_siembra,
    eficiencia_pct,
    etapa_en_fecha,
    fecha_esperada_por_defecto,
    fecha_luz_por_defecto,
    inicio_crecimiento,
    puede_cosecharse,
)

from .conftest import make_siembra


# --------------------
# Escenarios
# --------------------
def test_ready_on_expected_harvest_day():
    ciclo = ciclo_de_vida(make_siembra(), date(2025, 1, 12))
    assert ciclo.estado == SiembraEstadoEnum.listo
    assert ciclo.dias_desde_siembra == 7
    assert ciclo.dias_para_cosecha == 0
    assert ciclo.atrasada is False
    assert ciclo.puede_cosecharse is True


@pytest.mark.parametrize("today", [
    date(2025, 1, 1), date(2025, 1, 10), date(2025, 1, 12), date(2025, 6, 1),
])
def test_harvested_is_terminal_for_any_today(today):
    siembra = make_siembra(fecha_real_cosecha=date(2025, 1, 10))
    ciclo = ciclo_de_vida(siembra, today)
    assert ciclo.estado == SiembraEstadoEnum.cosechado
    assert ciclo.puede_cosecharse is False
    assert ciclo.atrasada is False


def test_before_planting_is_sembrado_and_days_clamped():
    siembra = make_siembra(fecha_siembra=date(2025, 2, 1), fecha_esperada_cosecha=date(2025, 2, 8))
    ciclo = ciclo_de_vida(siembra, date(2025, 1, 20))
    assert ciclo.estado == SiembraEstadoEnum.sembrado
    assert ciclo.dias_desde_siembra == 0
    assert ciclo.puede_cosecharse is False


def test_growing_once_dome_stage_starts():
    siembra = make_siembra(fecha_cupula=date(2025, 1, 7), fecha_luz=date(2025, 1, 9))
    assert ciclo_de_vida(siembra, date(2025, 1, 6)).estado == SiembraEstadoEnum.sembrado
    assert ciclo_de_vida(siembra, date(2025, 1, 7)).estado == SiembraEstadoEnum.creciendo
    assert ciclo_de_vida(siembra, date(2025, 1, 11)).estado == SiembraEstadoEnum.creciendo


def test_light_date_alone_starts_growth():
    siembra = make_siembra(fecha_luz=date(2025, 1, 8))
    assert ciclo_de_vida(siembra, date(2025, 1, 8)).estado == SiembraEstadoEnum.creciendo


def test_without_stage_dates_stays_sembrado_until_ready():
    siembra = make_siembra()
    assert ciclo_de_vida(siembra, date(2025, 1, 11)).estado == SiembraEstadoEnum.sembrado
    assert ciclo_de_vida(siembra, date(2025, 1, 12)).estado == SiembraEstadoEnum.listo


def test_overdue_when_expected_date_passed():
    ciclo = ciclo_de_vida(make_siembra(), date(2025, 1, 15))
    assert ciclo.estado == SiembraEstadoEnum.listo
    assert ciclo.dias_para_cosecha == -3
    assert ciclo.atrasada is True


def test_status_never_moves_backwards_as_time_passes():
    siembra = make_siembra(fecha_cupula=date(2025, 1, 7))
    orden = list(SiembraEstadoEnum)
    previo = None
    for offset in range(-3, 20):
        estado = ciclo_de_vida(siembra, date(2025, 1, 5) + timedelta(days=offset)).estado
        if previo is not None:
            assert orden.index(estado) >= orden.index(previo)
        previo = estado


def test_inverted_business_dates_do_not_raise():
    siembra = make_siembra(fecha_siembra=date(2025, 1, 12), fecha_esperada_cosecha=date(2025, 1, 5))
    ciclo = ciclo_de_vida(siembra, date(2025, 1, 10))
    assert ciclo.estado == SiembraEstadoEnum.listo
    assert ciclo.dias_para_cosecha == -5


# --------------------
# Funciones sueltas
# --------------------
def test_derivar_estado_priorities():
    kwargs = {"fecha_esperada_cosecha": date(2025, 1, 12), "fecha_cupula": date(2025, 1, 6)}
    assert derivar_estado(today=date(2025, 1, 20), fecha_real_cosecha=date(2025, 1, 11), **kwargs) \
        == SiembraEstadoEnum.cosechado
    assert derivar_estado(today=date(2025, 1, 12), **kwargs) == SiembraEstadoEnum.listo
    assert derivar_estado(today=date(2025, 1, 6), **kwargs) == SiembraEstadoEnum.creciendo
    assert derivar_estado(today=date(2025, 1, 5), **kwargs) == SiembraEstadoEnum.sembrado


def test_inicio_crecimiento_prefers_dome_date():
    assert inicio_crecimiento(None, None) is None
    assert inicio_crecimiento(date(2025, 1, 7), None) == date(2025, 1, 7)
    assert inicio_crecimiento(None, date(2025, 1, 8)) == date(2025, 1, 8)
    assert inicio_crecimiento(date(2025, 1, 9), date(2025, 1, 8)) == date(2025, 1, 9)


def test_light_before_dome_does_not_start_growth_early():
    siembra = make_siembra(fecha_cupula=date(2025, 1, 9), fecha_luz=date(2025, 1, 8))
    assert ciclo_de_vida(siembra, date(2025, 1, 8)).estado == SiembraEstadoEnum.sembrado
    assert ciclo_de_vida(siembra, date(2025, 1, 9)).estado == SiembraEstadoEnum.creciendo


def test_dias_desde_siembra():
    assert dias_desde_siembra(date(2025, 1, 5), date(2025, 1, 5)) == 0
    assert dias_desde_siembra(date(2025, 1, 5), date(2025, 1, 1)) == 0
    assert dias_desde_siembra(date(2025, 1, 5), date(2025, 1, 15)) == 10


@pytest.mark.parametrize("real,expected", [
    (None, None),
    (date(2025, 1, 12), 0.0),
    (date(2025, 1, 10), -28.6),
    (date(2025, 1, 14), 28.6),
])
def test_eficiencia_pct(real, expected):
    assert eficiencia_pct(date(2025, 1, 5), date(2025, 1, 12), real) == expected


def test_eficiencia_pct_none_when_planned_cycle_not_positive():
    assert eficiencia_pct(date(2025, 1, 5), date(2025, 1, 5), date(2025, 1, 6)) is None


def test_puede_cosecharse():
    assert puede_cosecharse(SiembraEstadoEnum.listo) is True
    assert puede_cosecharse(SiembraEstadoEnum.creciendo) is True
    assert puede_cosecharse(SiembraEstadoEnum.sembrado) is False
    assert puede_cosecharse(SiembraEstadoEnum.cosechado) is False


def test_sown_planting_is_not_harvestable_yet():
    ciclo = ciclo_de_vida(make_siembra(), date(2025, 1, 8))
    assert ciclo.estado == SiembraEstadoEnum.sembrado
    assert ciclo.puede_cosecharse is False


def test_etapa_en_fecha():
    siembra = make_siembra(
        fecha_cupula=date(2025, 1, 6),
        fecha_luz=date(2025, 1, 8),
        fecha_real_cosecha=date(2025, 1, 13),
    )
    assert etapa_en_fecha(siembra, date(2025, 1, 4)) is None
    assert etapa_en_fecha(siembra, date(2025, 1, 5)) == EventoTipoEnum.planted
    assert etapa_en_fecha(siembra, date(2025, 1, 6)) == EventoTipoEnum.dome
    assert etapa_en_fecha(siembra, date(2025, 1, 9)) == EventoTipoEnum.light
    assert etapa_en_fecha(siembra, date(2025, 1, 12)) == EventoTipoEnum.harvest
    assert etapa_en_fecha(siembra, date(2025, 1, 13)) == EventoTipoEnum.harvested


def test_defaults_from_variety():
    assert fecha_esperada_por_defecto(date(2025, 1, 5), 8) == date(2025, 1, 13)
    assert fecha_luz_por_defecto(date(2025, 1, 5), 3) == date(2025, 1, 8)
    assert fecha_luz_por_defecto(date(2025, 1, 5), None) is None
