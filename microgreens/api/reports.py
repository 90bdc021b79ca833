# api/reports.py
"""
Reportes sobre siembras: tabla filtrada/ordenada/proyectada y análisis.
Solo se devuelven los datos; la generación de archivos vive en el cliente.
"""
from datetime import date
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from microgreens.models.user import Usuario
from microgreens.repositories import SqlSiembraRepository
from microgreens.schemas.reports import (
    DEFAULT_SIEMBRA_COLUMNS, AnalyticsReportConfig, ReportColumn, ReportPreset, SiembrasReportConfig,
    SiembrasReportOut,
)
from microgreens.services.analytics_service import generar_reporte_analytics
from microgreens.services.report_service import generar_reporte_siembras, report_presets
from microgreens.utils.dependencies import get_current_user, get_siembra_repo, get_today

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/columns", response_model=List[ReportColumn], summary="Columnas disponibles y su estado por defecto")
def report_columns(_user: Usuario = Depends(get_current_user)):
    return DEFAULT_SIEMBRA_COLUMNS


@router.get(
    "/presets",
    response_model=List[ReportPreset],
    summary="Reportes predefinidos",
    description="Configuraciones listas para enviar a `/reports/siembras` o `/reports/analytics`; los rangos se calculan sobre hoy.",
)
def presets(
    today: date = Depends(get_today),
    _user: Usuario = Depends(get_current_user),
):
    return report_presets(today)


@router.post(
    "/siembras",
    response_model=SiembrasReportOut,
    summary="Reporte de siembras",
    description=(
        "Aplica rango de fechas (sobre `fecha_siembra`), filtros por estado / tipo / bandeja / cantidad, "
        "orden multi-clave (por defecto `fecha_siembra` desc) y proyecta las columnas habilitadas.\n\n"
        "Fechas en dd/mm/yyyy; valores faltantes como `-`."
    ),
)
def reporte_siembras(
    config: SiembrasReportConfig,
    repo: SqlSiembraRepository = Depends(get_siembra_repo),
    today: date = Depends(get_today),
    _user: Usuario = Depends(get_current_user),
):
    return generar_reporte_siembras(repo.list(), config, today)


@router.post("/analytics", response_model=Dict[str, Any], summary="Reporte de análisis")
def reporte_analytics(
    config: AnalyticsReportConfig,
    repo: SqlSiembraRepository = Depends(get_siembra_repo),
    today: date = Depends(get_today),
    _user: Usuario = Depends(get_current_user),
):
    return generar_reporte_analytics(repo.list(), config, today)
