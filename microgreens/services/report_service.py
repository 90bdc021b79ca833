# services/report_service.py
"""
Filtro, orden y proyección de siembras para reportes exportables.

Todo es puro: recibe las siembras ya cargadas y el "hoy" con el que se
derivan estados y métricas. La serialización a archivo (CSV/PDF) no vive aquí.
"""
from __future__ import annotations

import calendar
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Sequence

from microgreens.enums.enums import ESTADO_LABELS, SiembraEstadoEnum, SortOrderEnum
from microgreens.schemas.common import DateRange
from microgreens.schemas.reports import (
    ANALYTICS_SECTIONS, DEFAULT_SIEMBRA_COLUMNS, DEFAULT_SORT, AnalyticsReportConfig, ReportFilters,
    ReportPreset, SiembrasReportConfig, SiembrasReportOut, SortConfig,
)
from microgreens.services.lifecycle import ciclo_de_vida, estado_de
from microgreens.utils.text import collate_key

logger = logging.getLogger(__name__)

ESTADO_ORDEN = {estado: idx for idx, estado in enumerate(SiembraEstadoEnum)}

MISSING = "-"


# -------- valores por campo --------

def _valor(siembra: Any, field: str, today: date) -> Any:
    if field == "estado":
        return estado_de(siembra, today)
    if field in ("dias_desde_siembra", "dias_para_cosecha", "eficiencia_pct"):
        return getattr(ciclo_de_vida(siembra, today), field)
    return getattr(siembra, field, None)


def _sort_value(value: Any) -> Any:
    if isinstance(value, SiembraEstadoEnum):
        return ESTADO_ORDEN[value]
    if isinstance(value, str):
        return collate_key(value)
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    return value


SORTABLE_FIELDS = {
    "tipo_microgreen", "fecha_siembra", "estado", "dias_desde_siembra", "dias_para_cosecha",
    "fecha_esperada_cosecha", "fecha_cupula", "fecha_luz", "fecha_real_cosecha",
    "ubicacion_bandeja", "cantidad_sembrada", "eficiencia_pct", "created_at",
}


# -------- filtros --------

def cumple_filtros(
    siembra: Any,
    filtros: ReportFilters,
    rango: DateRange,
    today: date,
) -> bool:
    """AND de todos los filtros activos."""
    if not rango.contiene(siembra.fecha_siembra):
        return False
    if filtros.estados and estado_de(siembra, today) not in filtros.estados:
        return False
    if filtros.tipos and siembra.tipo_microgreen not in filtros.tipos:
        return False
    if filtros.bandejas and siembra.ubicacion_bandeja not in filtros.bandejas:
        return False
    if filtros.cantidad is not None:
        cantidad = float(siembra.cantidad_sembrada or 0)
        if filtros.cantidad.min is not None and cantidad < filtros.cantidad.min:
            return False
        if filtros.cantidad.max is not None and cantidad > filtros.cantidad.max:
            return False
    return True


def filtrar_siembras(
    siembras: Iterable[Any],
    filtros: ReportFilters,
    rango: DateRange,
    today: date,
) -> List[Any]:
    return [s for s in siembras if cumple_filtros(s, filtros, rango, today)]


# -------- orden --------

def _key_for(field: str, descending: bool, today: date) -> Callable[[Any], tuple]:
    # Los faltantes quedan al final en ambas direcciones
    def key(siembra: Any) -> tuple:
        value = _valor(siembra, field, today)
        present = value is not None
        # Con reverse=True los presentes (True) van primero; sin reverse, (False) primero
        flag = present if descending else not present
        return (flag, _sort_value(value) if present else 0)
    return key


def ordenar_siembras(siembras: Iterable[Any], orden: Sequence[SortConfig], today: date) -> List[Any]:
    """
    Orden estable por varias claves: la primera es la principal y las
    siguientes desempatan. Campos desconocidos se ignoran.
    """
    result = list(siembras)
    for sort in reversed(list(orden)):
        if sort.field not in SORTABLE_FIELDS:
            logger.debug("ordenar_siembras: campo '%s' ignorado", sort.field)
            continue
        descending = sort.direction == SortOrderEnum.desc
        result.sort(key=_key_for(sort.field, descending, today), reverse=descending)
    return result


# -------- proyección --------

def _formatear(field: str, value: Any) -> Any:
    if value is None or value == "":
        return MISSING
    if isinstance(value, SiembraEstadoEnum):
        return ESTADO_LABELS[value]
    if isinstance(value, (date, datetime)):
        return value.strftime("%d/%m/%Y")
    if isinstance(value, Decimal):
        return float(value)
    if field == "eficiencia_pct":
        return f"{value}%"
    return value


def proyectar_fila(siembra: Any, columnas, today: date) -> Dict[str, Any]:
    return {
        col.label: _formatear(col.key, _valor(siembra, col.key, today))
        for col in columnas
        if col.enabled
    }


def generar_reporte_siembras(
    siembras: Iterable[Any],
    config: SiembrasReportConfig,
    today: date,
) -> SiembrasReportOut:
    filtradas = filtrar_siembras(siembras, config.filtros, config.rango_fechas, today)
    ordenadas = ordenar_siembras(filtradas, config.orden or DEFAULT_SORT, today)
    columnas = [c for c in config.columnas if c.enabled]
    logger.info("Reporte '%s': %d siembras tras filtros", config.nombre, len(ordenadas))
    return SiembrasReportOut(
        nombre=config.nombre,
        generado_el=today,
        columnas=[c.label for c in columnas],
        total=len(ordenadas),
        filas=[proyectar_fila(s, columnas, today) for s in ordenadas],
    )


# -------- reportes predefinidos --------

def _restar_meses(d: date, meses: int) -> date:
    """31/05 - 3 meses -> 28/02 (o 29 en bisiesto)."""
    year, month = divmod(d.year * 12 + d.month - 1 - meses, 12)
    month += 1
    return date(year, month, min(d.day, calendar.monthrange(year, month)[1]))


def report_presets(today: date) -> List[ReportPreset]:
    """Mensual (mes en curso), trimestral (últimos 3 meses) y export completo (año en curso)."""
    return [
        ReportPreset(
            nombre="Reporte Mensual Estándar",
            tipo="siembras",
            formato="pdf",
            siembras=SiembrasReportConfig(
                nombre="Reporte Mensual Estándar",
                rango_fechas=DateRange(inicio=today.replace(day=1), fin=today),
                columnas=[c.model_copy() for c in DEFAULT_SIEMBRA_COLUMNS if c.enabled],
                orden=[s.model_copy() for s in DEFAULT_SORT],
            ),
        ),
        ReportPreset(
            nombre="Análisis Trimestral",
            tipo="analytics",
            formato="pdf",
            analytics=AnalyticsReportConfig(
                nombre="Análisis Trimestral",
                rango_fechas=DateRange(inicio=_restar_meses(today, 3), fin=today),
                secciones=list(ANALYTICS_SECTIONS[:6]),
            ),
        ),
        ReportPreset(
            nombre="Export Completo CSV",
            tipo="siembras",
            formato="csv",
            siembras=SiembrasReportConfig(
                nombre="Export Completo CSV",
                rango_fechas=DateRange(inicio=today.replace(month=1, day=1), fin=today),
                columnas=[c.model_copy(update={"enabled": True}) for c in DEFAULT_SIEMBRA_COLUMNS],
                orden=[s.model_copy() for s in DEFAULT_SORT],
            ),
        ),
    ]
