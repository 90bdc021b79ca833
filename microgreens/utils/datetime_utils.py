"""
Utilidades centralizadas para manejo de fechas de calendario.

Toda fecha que cruza la frontera formulario/API viaja como ``YYYY-MM-DD`` y se
interpreta como **día de calendario local**. Nunca se reinterpreta pasando
por UTC: un selector de fecha que entrega la medianoche local no debe
terminar en el día anterior.

Convención del sistema:
- Un ``date`` es un día de calendario, sin hora ni zona.
- Un ``datetime`` **naive** se interpreta en su propia hora de pared.
- Un ``datetime`` **aware** aporta su propio día local (el de su tzinfo),
  salvo que se pida explícitamente convertirlo a otra zona.
- "Hoy" se calcula en ``settings.APP_TZ`` y solo lo usa la capa API; el
  núcleo de ciclo de vida siempre lo recibe como parámetro.
"""
import re
from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

from microgreens.config.settings import settings

DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class InvalidDateFormat(ValueError):
    """La cadena no tiene la forma YYYY-MM-DD o no es una fecha real."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid_date_format: se esperaba YYYY-MM-DD, se recibió {value!r}")


def app_tz() -> ZoneInfo:
    return ZoneInfo(settings.APP_TZ)


def today_local(tz: Optional[ZoneInfo] = None) -> date:
    """
    Retorna la fecha actual (date) en la zona horaria de la aplicación.
    """
    return datetime.now(tz or app_tz()).date()


def now_local() -> datetime:
    """
    Datetime actual en la zona de la aplicación, naive, para columnas DATETIME.
    """
    return datetime.now(app_tz()).replace(tzinfo=None, microsecond=0)


def to_local_date_string(value: Union[date, datetime]) -> str:
    """
    Convierte un date/datetime a ``YYYY-MM-DD`` usando sus componentes locales
    de año, mes y día (nunca los de UTC).
    """
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def from_local_date_string(value: str) -> date:
    """
    Convierte ``YYYY-MM-DD`` al día de calendario correspondiente.

    Raises:
        InvalidDateFormat: si la cadena no tiene la forma esperada o la fecha
        no existe (p. ej. ``2025-02-30``).
    """
    if not isinstance(value, str) or not DATE_RE.fullmatch(value):
        raise InvalidDateFormat(value)
    year, month, day = (int(part) for part in value.split("-"))
    try:
        return date(year, month, day)
    except ValueError:
        raise InvalidDateFormat(value) from None


def to_local_midnight(value: Union[str, date], tz: Optional[ZoneInfo] = None) -> datetime:
    """
    Medianoche local (aware) del día indicado en la zona ``tz``.
    Útil cuando un consumidor necesita un instante y no un día.
    """
    d = from_local_date_string(value) if isinstance(value, str) else value
    return datetime(d.year, d.month, d.day, tzinfo=tz or app_tz())


def iso_to_local_date_string(value: str, tz: Optional[ZoneInfo] = None) -> str:
    """
    Acepta ``YYYY-MM-DD`` (se devuelve tal cual si es válida) o un timestamp
    ISO completo. En el segundo caso extrae el día de calendario local:
    - timestamp aware → se convierte a ``tz`` (por defecto APP_TZ)
    - timestamp naive → se respeta su propio día
    """
    if not value or not isinstance(value, str):
        raise InvalidDateFormat(value)
    if len(value) == 10:
        return to_local_date_string(from_local_date_string(value))
    # Solo "YYYY-MM-DD" + separador T o espacio; fromisoformat aceptaría formas compactas
    if not DATE_RE.fullmatch(value[:10]) or value[10] not in "T ":
        raise InvalidDateFormat(value)
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidDateFormat(value) from None
    if dt.tzinfo is not None:
        dt = dt.astimezone(tz or app_tz())
    return to_local_date_string(dt)


def is_valid_date_string(value: Optional[str]) -> bool:
    if not value:
        return False
    try:
        from_local_date_string(value)
    except InvalidDateFormat:
        return False
    return True


def parse_date_filter(value: Optional[str]) -> Optional[date]:
    """
    Normaliza un parámetro de filtro opcional (o None).
    """
    if value is None or value == "":
        return None
    return from_local_date_string(iso_to_local_date_string(value))
