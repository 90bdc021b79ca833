# schemas/variedad.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from microgreens.enums.enums import CategoriaVariedadEnum, DificultadEnum


class VariedadBase(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=80)
    categoria: CategoriaVariedadEnum
    descripcion: str = Field("", max_length=1000)
    growth_days: int = Field(..., ge=1, le=60, description="Días promedio hasta cosecha")
    dome_days: Optional[int] = Field(None, ge=0, le=30, description="Días bajo cúpula")
    light_days: Optional[int] = Field(None, ge=0, le=60, description="Días bajo luz")
    dificultad: DificultadEnum = DificultadEnum.easy
    tags: List[str] = []

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: List[str]) -> List[str]:
        return [t.strip().lower() for t in value if t and t.strip()]


class VariedadCreate(VariedadBase):
    pass


class VariedadUpdate(VariedadBase):
    pass


class VariedadOut(VariedadBase):
    variedad_id: str
    is_custom: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
