from datetime import date
from typing import Optional

from pydantic import BaseModel

from microgreens.enums.enums import EventoTipoEnum, SiembraEstadoEnum


class EventoOut(BaseModel):
    id: str
    siembra_id: str
    tipo: EventoTipoEnum
    titulo: str
    fecha: date
    estado: SiembraEstadoEnum
    color: str
    ubicacion_bandeja: Optional[str] = None


class EtapaDiaOut(BaseModel):
    siembra_id: str
    tipo_microgreen: str
    etapa: EventoTipoEnum
    color: str
