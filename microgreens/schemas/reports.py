from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import date

from microgreens.enums.enums import SiembraEstadoEnum, SortOrderEnum
from microgreens.schemas.common import DateRange, Rango


class ReportColumn(BaseModel):
    key: str
    label: str
    enabled: bool = True
    sortable: bool = True


class SortConfig(BaseModel):
    field: str
    direction: SortOrderEnum = SortOrderEnum.asc


class ReportFilters(BaseModel):
    """Lista vacía = sin filtro (no "excluir todo")."""
    estados: List[SiembraEstadoEnum] = []
    tipos: List[str] = []
    bandejas: List[str] = []
    cantidad: Optional[Rango] = None


DEFAULT_SIEMBRA_COLUMNS: List[ReportColumn] = [
    ReportColumn(key="tipo_microgreen", label="Nombre de Planta"),
    ReportColumn(key="fecha_siembra", label="Fecha Siembra"),
    ReportColumn(key="estado", label="Estado"),
    ReportColumn(key="dias_desde_siembra", label="Días Transcurridos"),
    ReportColumn(key="fecha_esperada_cosecha", label="Cosecha Esperada"),
    ReportColumn(key="fecha_cupula", label="Fecha Cúpula", enabled=False),
    ReportColumn(key="fecha_luz", label="Fecha Luz", enabled=False),
    ReportColumn(key="ubicacion_bandeja", label="Bandeja"),
    ReportColumn(key="cantidad_sembrada", label="Cantidad"),
    ReportColumn(key="notas", label="Notas", enabled=False, sortable=False),
    ReportColumn(key="eficiencia_pct", label="Eficiencia %", enabled=False),
    ReportColumn(key="created_at", label="Fecha Creación", enabled=False),
]

DEFAULT_SORT: List[SortConfig] = [SortConfig(field="fecha_siembra", direction=SortOrderEnum.desc)]


class SiembrasReportConfig(BaseModel):
    nombre: str = Field("Reporte de siembras", max_length=120)
    rango_fechas: DateRange = DateRange()
    filtros: ReportFilters = ReportFilters()
    columnas: List[ReportColumn] = Field(default_factory=lambda: [c.model_copy() for c in DEFAULT_SIEMBRA_COLUMNS])
    orden: List[SortConfig] = []


class SiembrasReportOut(BaseModel):
    nombre: str
    generado_el: date
    columnas: List[str]
    total: int
    filas: List[Dict[str, Any]]


ANALYTICS_SECTIONS = (
    "resumen_ejecutivo",
    "distribucion_estados",
    "top_plantas",
    "promedios_tiempo",
    "tasas_eficiencia",
    "tendencias_mensuales",
    "rendimiento_bandejas",
    "proyecciones",
)


class AnalyticsReportConfig(BaseModel):
    nombre: str = Field("Análisis de siembras", max_length=120)
    rango_fechas: DateRange = DateRange()
    filtros: ReportFilters = ReportFilters()
    secciones: List[str] = Field(default_factory=lambda: list(ANALYTICS_SECTIONS[:6]))


# -------------------------------------------------------------------
# Reportes predefinidos
# -------------------------------------------------------------------
class ReportPreset(BaseModel):
    nombre: str
    tipo: str = Field(..., description="siembras | analytics")
    formato: str = Field(..., description="Formato sugerido para la exportación del cliente (pdf | csv)")
    siembras: Optional[SiembrasReportConfig] = None
    analytics: Optional[AnalyticsReportConfig] = None
