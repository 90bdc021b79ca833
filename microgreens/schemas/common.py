# schemas/common.py
from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Generic, Optional, Sequence, TypeVar

from pydantic import BaseModel, BeforeValidator, Field, model_validator

from microgreens.utils.datetime_utils import InvalidDateFormat, from_local_date_string, iso_to_local_date_string


# -------------------------------------------------------------------
# Fecha de calendario local
# Todo string que entra por la API pasa por la normalización local:
# "2025-01-05" o "2025-01-05T06:00:00.000Z" -> date(2025, 1, 5) en APP_TZ
# -------------------------------------------------------------------
def _coerce_local_date(value: Any) -> Any:
    if isinstance(value, str):
        return from_local_date_string(iso_to_local_date_string(value))
    if value is None or isinstance(value, date):
        return value
    # Números u otros tipos no son un día de calendario
    raise InvalidDateFormat(value)


LocalDate = Annotated[date, BeforeValidator(_coerce_local_date)]


# -------------------------------------------------------------------
# Objetos de respuesta simples / mensajes
# -------------------------------------------------------------------
class Msg(BaseModel):
    """Respuesta simple con mensaje plano (útil para deletes, acciones, etc.)."""
    detail: str


# -------------------------------------------------------------------
# Rango de fechas reutilizable, inclusivo en ambos extremos
# -------------------------------------------------------------------
class DateRange(BaseModel):
    inicio: Optional[LocalDate] = None
    fin: Optional[LocalDate] = None

    @model_validator(mode="after")
    def validate_range(self):
        if self.inicio and self.fin and self.inicio > self.fin:
            raise ValueError("inicio no puede ser mayor que fin")
        return self

    def contiene(self, dia: date) -> bool:
        if self.inicio is not None and dia < self.inicio:
            return False
        if self.fin is not None and dia > self.fin:
            return False
        return True


# -------------------------------------------------------------------
# Respuesta paginada genérica (útil para listas)
# -------------------------------------------------------------------
T = TypeVar("T")


class Paginated(BaseModel, Generic[T]):
    total: int
    page: int
    per_page: int
    items: Sequence[T]


class Rango(BaseModel):
    """Rango numérico; un extremo sin valor no acota."""
    min: Optional[float] = Field(None, ge=0)
    max: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def _check(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("min no puede ser mayor que max")
        return self
