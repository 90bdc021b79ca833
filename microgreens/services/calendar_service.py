# services/calendar_service.py
"""
Eventos de calendario por siembra: sembrado, cúpula, luz, cosecha esperada y
cosecha real. El color depende del tipo de evento; el estado se deriva con
el "hoy" recibido.
"""
from datetime import date
from typing import Any, Iterable, List, Optional

from microgreens.enums.enums import EventoTipoEnum
from microgreens.schemas.calendario import EtapaDiaOut, EventoOut
from microgreens.schemas.common import DateRange
from microgreens.services.lifecycle import estado_de, etapa_en_fecha

EVENTO_COLORES = {
    EventoTipoEnum.planted: "#10b981",
    EventoTipoEnum.dome: "#8b5cf6",
    EventoTipoEnum.light: "#3b82f6",
    EventoTipoEnum.harvest: "#f59e0b",
    EventoTipoEnum.harvested: "#6b7280",
}

EVENTO_TITULOS = {
    EventoTipoEnum.planted: "🌱 {nombre}",
    EventoTipoEnum.dome: "🏠 {nombre} (Cúpula)",
    EventoTipoEnum.light: "💡 {nombre} (Luz)",
    EventoTipoEnum.harvest: "🌾 {nombre} (Cosecha)",
    EventoTipoEnum.harvested: "✅ {nombre} (Cosechado)",
}


def _fechas_evento(siembra: Any) -> List[tuple[EventoTipoEnum, Optional[date]]]:
    return [
        (EventoTipoEnum.planted, siembra.fecha_siembra),
        (EventoTipoEnum.dome, siembra.fecha_cupula),
        (EventoTipoEnum.light, siembra.fecha_luz),
        (EventoTipoEnum.harvest, siembra.fecha_esperada_cosecha),
        (EventoTipoEnum.harvested, siembra.fecha_real_cosecha),
    ]


def eventos_de_siembra(siembra: Any, today: date, rango: Optional[DateRange] = None) -> List[EventoOut]:
    estado = estado_de(siembra, today)
    nombre = siembra.tipo_microgreen or "Sin nombre"
    eventos = []
    for tipo, fecha in _fechas_evento(siembra):
        if fecha is None:
            continue
        if rango is not None and not rango.contiene(fecha):
            continue
        eventos.append(EventoOut(
            id=f"{siembra.siembra_id}-{tipo.value}",
            siembra_id=siembra.siembra_id,
            tipo=tipo,
            titulo=EVENTO_TITULOS[tipo].format(nombre=nombre),
            fecha=fecha,
            estado=estado,
            color=EVENTO_COLORES[tipo],
            ubicacion_bandeja=siembra.ubicacion_bandeja,
        ))
    return eventos


def construir_eventos(siembras: Iterable[Any], today: date, rango: Optional[DateRange] = None) -> List[EventoOut]:
    eventos: List[EventoOut] = []
    for siembra in siembras:
        eventos.extend(eventos_de_siembra(siembra, today, rango))
    eventos.sort(key=lambda e: e.fecha)
    return eventos


def etapas_del_dia(siembras: Iterable[Any], dia: date) -> List[EtapaDiaOut]:
    """Siembras activas en un día con la etapa en la que se encuentran."""
    etapas = []
    for siembra in siembras:
        etapa = etapa_en_fecha(siembra, dia)
        if etapa is None:
            continue
        etapas.append(EtapaDiaOut(
            siembra_id=siembra.siembra_id,
            tipo_microgreen=siembra.tipo_microgreen,
            etapa=etapa,
            color=EVENTO_COLORES[etapa],
        ))
    return etapas
