from pydantic import BaseModel, Field, condecimal, model_validator
from typing import Optional
from datetime import datetime, date

from microgreens.enums.enums import SiembraEstadoEnum
from microgreens.schemas.common import LocalDate


class SiembraCreate(BaseModel):
    tipo_microgreen: Optional[str] = Field(None, min_length=1, max_length=80)
    variedad_id: Optional[str] = None
    fecha_siembra: LocalDate
    fecha_cupula: Optional[LocalDate] = None
    fecha_luz: Optional[LocalDate] = None
    # Si no viene se calcula con los growth_days de la variedad
    fecha_esperada_cosecha: Optional[LocalDate] = None
    cantidad_sembrada: condecimal(gt=0, max_digits=10, decimal_places=2)
    ubicacion_bandeja: Optional[str] = Field(None, max_length=40)
    notas: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def _check(self):
        if not self.tipo_microgreen and not self.variedad_id:
            raise ValueError("Debes indicar tipo_microgreen o variedad_id.")
        if self.fecha_esperada_cosecha and self.fecha_esperada_cosecha < self.fecha_siembra:
            raise ValueError("fecha_esperada_cosecha no puede ser anterior a fecha_siembra")
        return self


class SiembraUpdate(BaseModel):
    tipo_microgreen: Optional[str] = Field(None, min_length=1, max_length=80)
    fecha_siembra: Optional[LocalDate] = None
    fecha_cupula: Optional[LocalDate] = None
    fecha_luz: Optional[LocalDate] = None
    fecha_esperada_cosecha: Optional[LocalDate] = None
    cantidad_sembrada: Optional[condecimal(gt=0, max_digits=10, decimal_places=2)] = None
    ubicacion_bandeja: Optional[str] = Field(None, max_length=40)
    notas: Optional[str] = Field(None, max_length=500)


class SiembraOut(BaseModel):
    siembra_id: str
    tipo_microgreen: str
    variedad_id: Optional[str]
    fecha_siembra: date
    fecha_cupula: Optional[date]
    fecha_luz: Optional[date]
    fecha_esperada_cosecha: date
    fecha_real_cosecha: Optional[date]
    cantidad_sembrada: float
    ubicacion_bandeja: Optional[str]
    notas: Optional[str]
    created_at: datetime
    updated_at: datetime

    # Derivados en cada lectura (services/lifecycle.py)
    estado: SiembraEstadoEnum
    estado_label: str
    dias_desde_siembra: int
    dias_para_cosecha: int
    atrasada: bool
    eficiencia_pct: Optional[float]
    puede_cosecharse: bool

    class Config:
        from_attributes = True


class SiembraStatsOut(BaseModel):
    total: int
    sembradas: int
    creciendo: int
    listas: int
    cosechadas: int
    atrasadas: int
