# services/lifecycle.py
"""
Modelo de ciclo de vida de una siembra.

Funciones puras: reciben fechas de calendario (``date``) y el día de "hoy"
como parámetro. No leen el reloj, no tocan la BD y no lanzan excepciones por
datos de negocio incoherentes (p. ej. cosecha esperada anterior a la siembra);
en ese caso las fórmulas se aplican tal cual y el resultado es numérico.

Estado:
    El estado **se recalcula en cada lectura** a partir de las fechas y nunca
    se persiste; "fecha_real_cosecha presente <=> cosechado" se cumple por
    construcción. Un retroceso de estado solo ocurre por una edición explícita
    del usuario (cambiar fechas o eliminar la cosecha).

Reglas (comparando días de calendario):
    1. fecha_real_cosecha  -> cosechado (terminal)
    2. hoy >= fecha_esperada_cosecha -> listo
    3. hay fecha de etapa y hoy >= inicio de etapa -> creciendo
       (inicio = fecha_cupula; fecha_luz solo si no hay cúpula)
    4. en otro caso -> sembrado
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Optional

from microgreens.enums.enums import EventoTipoEnum, SiembraEstadoEnum


@dataclass(frozen=True)
class CicloVida:
    estado: SiembraEstadoEnum
    dias_desde_siembra: int
    dias_para_cosecha: int
    atrasada: bool
    eficiencia_pct: Optional[float]
    puede_cosecharse: bool


def inicio_crecimiento(fecha_cupula: Optional[date], fecha_luz: Optional[date]) -> Optional[date]:
    """Primer día de la etapa de crecimiento: la cúpula, o la luz si no hay cúpula."""
    return fecha_cupula if fecha_cupula is not None else fecha_luz


def derivar_estado(
    *,
    fecha_esperada_cosecha: date,
    today: date,
    fecha_cupula: Optional[date] = None,
    fecha_luz: Optional[date] = None,
    fecha_real_cosecha: Optional[date] = None,
) -> SiembraEstadoEnum:
    if fecha_real_cosecha is not None:
        return SiembraEstadoEnum.cosechado
    if today >= fecha_esperada_cosecha:
        return SiembraEstadoEnum.listo
    inicio = inicio_crecimiento(fecha_cupula, fecha_luz)
    if inicio is not None and today >= inicio:
        return SiembraEstadoEnum.creciendo
    return SiembraEstadoEnum.sembrado


def dias_desde_siembra(fecha_siembra: date, today: date) -> int:
    # Antes de la fecha de siembra se reporta 0, nunca negativo
    return max(0, (today - fecha_siembra).days)


def dias_para_cosecha(fecha_esperada_cosecha: date, today: date) -> int:
    """Negativo cuando la cosecha esperada ya pasó."""
    return (fecha_esperada_cosecha - today).days


def eficiencia_pct(
    fecha_siembra: date,
    fecha_esperada_cosecha: date,
    fecha_real_cosecha: Optional[date],
) -> Optional[float]:
    """
    Desviación porcentual del ciclo real frente al planeado.

    0 = a tiempo, negativo = antes de lo esperado, positivo = con retraso.
    None mientras no haya cosecha o si el ciclo planeado no es positivo.
    """
    if fecha_real_cosecha is None:
        return None
    planeado = (fecha_esperada_cosecha - fecha_siembra).days
    if planeado <= 0:
        return None
    real = (fecha_real_cosecha - fecha_siembra).days
    return round((real - planeado) / planeado * 100, 1)


ESTADOS_COSECHABLES = (SiembraEstadoEnum.listo, SiembraEstadoEnum.creciendo)


def puede_cosecharse(estado: SiembraEstadoEnum) -> bool:
    """Solo se cosecha lo que está creciendo o listo."""
    return estado in ESTADOS_COSECHABLES


def ciclo_de_vida(siembra: Any, today: date) -> CicloVida:
    """
    Deriva estado y métricas para cualquier objeto con los atributos de una
    siembra (modelo ORM, schema o SimpleNamespace).
    """
    fecha_siembra = siembra.fecha_siembra
    fecha_esperada = siembra.fecha_esperada_cosecha
    fecha_real = getattr(siembra, "fecha_real_cosecha", None)

    estado = derivar_estado(
        fecha_esperada_cosecha=fecha_esperada,
        today=today,
        fecha_cupula=getattr(siembra, "fecha_cupula", None),
        fecha_luz=getattr(siembra, "fecha_luz", None),
        fecha_real_cosecha=fecha_real,
    )
    restantes = dias_para_cosecha(fecha_esperada, today)
    return CicloVida(
        estado=estado,
        dias_desde_siembra=dias_desde_siembra(fecha_siembra, today),
        dias_para_cosecha=restantes,
        atrasada=restantes < 0 and estado != SiembraEstadoEnum.cosechado,
        eficiencia_pct=eficiencia_pct(fecha_siembra, fecha_esperada, fecha_real),
        puede_cosecharse=puede_cosecharse(estado),
    )


def estado_de(siembra: Any, today: date) -> SiembraEstadoEnum:
    return derivar_estado(
        fecha_esperada_cosecha=siembra.fecha_esperada_cosecha,
        today=today,
        fecha_cupula=getattr(siembra, "fecha_cupula", None),
        fecha_luz=getattr(siembra, "fecha_luz", None),
        fecha_real_cosecha=getattr(siembra, "fecha_real_cosecha", None),
    )


def etapa_en_fecha(siembra: Any, dia: date) -> Optional[EventoTipoEnum]:
    """
    Etapa en la que está la siembra en un día concreto; None antes de sembrar.
    El calendario la usa para colorear los días entre eventos.
    """
    if dia < siembra.fecha_siembra:
        return None
    fecha_real = getattr(siembra, "fecha_real_cosecha", None)
    if fecha_real is not None and dia >= fecha_real:
        return EventoTipoEnum.harvested
    if dia >= siembra.fecha_esperada_cosecha:
        return EventoTipoEnum.harvest
    fecha_luz = getattr(siembra, "fecha_luz", None)
    if fecha_luz is not None and dia >= fecha_luz:
        return EventoTipoEnum.light
    fecha_cupula = getattr(siembra, "fecha_cupula", None)
    if fecha_cupula is not None and dia >= fecha_cupula:
        return EventoTipoEnum.dome
    return EventoTipoEnum.planted


# ------ Valores por defecto a partir de la variedad ------

def fecha_esperada_por_defecto(fecha_siembra: date, growth_days: int) -> date:
    return fecha_siembra + timedelta(days=growth_days)


def fecha_luz_por_defecto(fecha_siembra: date, dome_days: Optional[int]) -> Optional[date]:
    """La luz empieza al terminar los días bajo cúpula."""
    if not dome_days:
        return None
    return fecha_siembra + timedelta(days=dome_days)
