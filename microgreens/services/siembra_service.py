# services/siembra_service.py
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from fastapi import HTTPException

from microgreens.enums.enums import ESTADO_LABELS, SiembraEstadoEnum
from microgreens.models.cosecha import Cosecha
from microgreens.models.siembra import Siembra
from microgreens.models.user import Usuario
from microgreens.models.variedad import Variedad
from microgreens.repositories.base import Repository
from microgreens.schemas.siembra import SiembraCreate, SiembraUpdate
from microgreens.services import analytics_service
from microgreens.services.lifecycle import (
    ciclo_de_vida, fecha_esperada_por_defecto, fecha_luz_por_defecto,
)
from microgreens.services.variedad_service import find_by_nombre
from microgreens.utils.text import collate_key

logger = logging.getLogger(__name__)

# Columnas NOT NULL: un None explícito en un PATCH se ignora
_REQUIRED_FIELDS = ("tipo_microgreen", "fecha_siembra", "fecha_esperada_cosecha", "cantidad_sembrada")


def _get_or_404(repo: Repository[Siembra], siembra_id: str) -> Siembra:
    siembra = repo.get(siembra_id)
    if siembra is None:
        raise HTTPException(status_code=404, detail="siembra_not_found: La siembra no existe.")
    return siembra


# ---- Proyección de campos derivados con nombres “planos” ----
def _apply_derived_fields(obj: Siembra, today: date) -> Siembra:
    """
    Proyecta estado, estado_label, dias_desde_siembra, dias_para_cosecha,
    atrasada, eficiencia_pct y puede_cosecharse sobre el objeto para que
    Pydantic (SiembraOut) los serialice. Nada de esto se persiste.
    """
    ciclo = ciclo_de_vida(obj, today)
    obj.estado = ciclo.estado
    obj.estado_label = ESTADO_LABELS[ciclo.estado]
    obj.dias_desde_siembra = ciclo.dias_desde_siembra
    obj.dias_para_cosecha = ciclo.dias_para_cosecha
    obj.atrasada = ciclo.atrasada
    obj.eficiencia_pct = ciclo.eficiencia_pct
    obj.puede_cosecharse = ciclo.puede_cosecharse
    return obj


def _validar_fechas(fecha_siembra: date, fecha_esperada: date, fecha_real: Optional[date]) -> None:
    if fecha_esperada < fecha_siembra:
        raise HTTPException(
            status_code=422,
            detail="invalid_dates: fecha_esperada_cosecha no puede ser anterior a fecha_siembra.",
        )
    if fecha_real is not None and fecha_real < fecha_siembra:
        raise HTTPException(
            status_code=422,
            detail="harvest_before_sowing: La cosecha registrada es anterior a fecha_siembra.",
        )


def _resolver_variedad(
    variedad_repo: Repository[Variedad],
    variedad_id: Optional[str],
    tipo_microgreen: Optional[str],
) -> Optional[Variedad]:
    if variedad_id:
        variedad = variedad_repo.get(variedad_id)
        if variedad is None:
            raise HTTPException(status_code=404, detail="variety_not_found: La variedad no existe.")
        return variedad
    return find_by_nombre(variedad_repo, tipo_microgreen) if tipo_microgreen else None


# ------ List / Get ------

def list_siembras(
    repo: Repository[Siembra],
    today: date,
    page: int = 1,
    per_page: int = 50,
    estado: Optional[SiembraEstadoEnum] = None,
    tipo: Optional[str] = None,
    bandeja: Optional[str] = None,
    desde: Optional[date] = None,
    hasta: Optional[date] = None,
) -> Tuple[List[Siembra], int]:
    """
    Lista paginada, orden fecha_siembra desc. El estado es derivado, así que
    ese filtro se aplica después de cargar.
    """
    items = repo.list(ubicacion_bandeja=bandeja)
    if tipo:
        buscado = collate_key(tipo.strip())[0]
        items = [s for s in items if collate_key(s.tipo_microgreen)[0] == buscado]
    if desde:
        items = [s for s in items if s.fecha_siembra >= desde]
    if hasta:
        items = [s for s in items if s.fecha_siembra <= hasta]

    items = [_apply_derived_fields(s, today) for s in items]
    if estado:
        items = [s for s in items if s.estado == estado]

    total = len(items)
    offset = (page - 1) * per_page
    return items[offset: offset + per_page], total


def get_siembra(repo: Repository[Siembra], siembra_id: str, today: date) -> Siembra:
    return _apply_derived_fields(_get_or_404(repo, siembra_id), today)


# ------ Create ------

def create_siembra(
    repo: Repository[Siembra],
    variedad_repo: Repository[Variedad],
    user: Optional[Usuario],
    data: SiembraCreate,
    today: date,
) -> Siembra:
    """
    Completa los valores que falten a partir de la variedad (explícita o
    encontrada por nombre): tipo_microgreen, fecha_esperada_cosecha y fecha_luz.
    """
    variedad = _resolver_variedad(variedad_repo, data.variedad_id, data.tipo_microgreen)

    fecha_esperada = data.fecha_esperada_cosecha
    if fecha_esperada is None:
        if variedad is None:
            raise HTTPException(
                status_code=422,
                detail="expected_harvest_required: Indica fecha_esperada_cosecha o una variedad del catálogo.",
            )
        fecha_esperada = fecha_esperada_por_defecto(data.fecha_siembra, variedad.growth_days)

    fecha_luz = data.fecha_luz
    if fecha_luz is None and variedad is not None:
        fecha_luz = fecha_luz_por_defecto(data.fecha_siembra, variedad.dome_days)

    _validar_fechas(data.fecha_siembra, fecha_esperada, None)

    payload: Dict[str, Any] = {
        "tipo_microgreen": data.tipo_microgreen or variedad.nombre,
        "variedad_id": variedad.variedad_id if variedad is not None else None,
        "fecha_siembra": data.fecha_siembra,
        "fecha_cupula": data.fecha_cupula,
        "fecha_luz": fecha_luz,
        "fecha_esperada_cosecha": fecha_esperada,
        "cantidad_sembrada": data.cantidad_sembrada,
        "ubicacion_bandeja": data.ubicacion_bandeja,
        "notas": data.notas,
        "created_by": user.usuario_id if user is not None else None,
    }
    siembra = repo.create(payload)
    logger.info("Siembra creada: %s (%s)", siembra.siembra_id, siembra.tipo_microgreen)
    return _apply_derived_fields(siembra, today)


# ------ Update / Delete ------

def update_siembra(repo: Repository[Siembra], siembra_id: str, data: SiembraUpdate, today: date) -> Siembra:
    siembra = _get_or_404(repo, siembra_id)
    changes = data.model_dump(exclude_unset=True)
    for field in _REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            changes.pop(field)

    _validar_fechas(
        changes.get("fecha_siembra", siembra.fecha_siembra),
        changes.get("fecha_esperada_cosecha", siembra.fecha_esperada_cosecha),
        siembra.fecha_real_cosecha,
    )
    siembra = repo.update(siembra, changes)
    return _apply_derived_fields(siembra, today)


def delete_siembra(repo: Repository[Siembra], cosecha_repo: Repository[Cosecha], siembra_id: str) -> None:
    """Borrado definitivo; la cosecha asociada se elimina con la siembra."""
    siembra = _get_or_404(repo, siembra_id)
    for cosecha in cosecha_repo.list(siembra_id=siembra.siembra_id):
        cosecha_repo.delete(cosecha)
    repo.delete(siembra)
    logger.info("Siembra eliminada: %s", siembra_id)


# ------ Stats / Próximas ------

def siembra_stats(repo: Repository[Siembra], today: date) -> Dict[str, int]:
    return analytics_service.contar_por_estado(repo.list(), today)


def proximas_cosechas(repo: Repository[Siembra], today: date, dias: int) -> List[Siembra]:
    proximas = analytics_service.proximas_cosechas(repo.list(), today, dias)
    return [_apply_derived_fields(s, today) for s in proximas]
