# schemas/cosecha.py
from __future__ import annotations
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, Field, condecimal

from microgreens.schemas.common import LocalDate


class CosechaCreate(BaseModel):
    siembra_id: str
    fecha_cosecha: LocalDate
    peso_cosechado: condecimal(ge=0, max_digits=10, decimal_places=2)
    calidad: int = Field(..., ge=1, le=5)
    notas: Optional[str] = Field(None, max_length=500)


class CosechaUpdate(BaseModel):
    fecha_cosecha: Optional[LocalDate] = None
    peso_cosechado: Optional[condecimal(ge=0, max_digits=10, decimal_places=2)] = None
    calidad: Optional[int] = Field(None, ge=1, le=5)
    notas: Optional[str] = Field(None, max_length=500)


class CosechaOut(BaseModel):
    cosecha_id: str
    siembra_id: str
    fecha_cosecha: date
    peso_cosechado: float
    calidad: int
    notas: Optional[str]
    tipo_microgreen: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CosechaTipoStats(BaseModel):
    tipo_microgreen: str
    total_cosechas: int
    peso_total: float
    peso_promedio: float
    calidad_promedio: float


class CosechaStatsOut(BaseModel):
    total: int
    peso_total: float
    calidad_promedio: float
    cosechas_este_mes: int
    peso_este_mes: float
    cosechas_ultimos_7_dias: int
    por_tipo: List[CosechaTipoStats]
