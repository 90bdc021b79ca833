# api/siembras.py
"""
API de siembras.
Las respuestas incluyen los campos derivados del ciclo de vida (estado,
días, atraso, eficiencia), calculados con la fecha de hoy de la aplicación.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from microgreens.config.settings import settings
from microgreens.enums.enums import SiembraEstadoEnum
from microgreens.models.user import Usuario
from microgreens.repositories import SqlCosechaRepository, SqlSiembraRepository, SqlVariedadRepository
from microgreens.schemas.common import Paginated
from microgreens.schemas.siembra import SiembraCreate, SiembraOut, SiembraStatsOut, SiembraUpdate
from microgreens.services import siembra_service
from microgreens.utils.datetime_utils import parse_date_filter
from microgreens.utils.dependencies import (
    get_cosecha_repo, get_current_user, get_siembra_repo, get_today, get_variedad_repo,
)

router = APIRouter(prefix="/siembras", tags=["Siembras"])


@router.get(
    "",
    response_model=Paginated[SiembraOut],
    summary="Listar siembras",
    description=(
        "Lista paginada ordenada por fecha de siembra (más reciente primero).\n\n"
        "**Filtros:** `estado` (derivado), `tipo`, `bandeja`, `desde` / `hasta` (YYYY-MM-DD, inclusivos)."
    ),
)
def list_siembras(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=500),
    estado: Optional[SiembraEstadoEnum] = Query(None),
    tipo: Optional[str] = Query(None, max_length=80),
    bandeja: Optional[str] = Query(None, max_length=40),
    desde: Optional[str] = Query(None, description="YYYY-MM-DD"),
    hasta: Optional[str] = Query(None, description="YYYY-MM-DD"),
    repo: SqlSiembraRepository = Depends(get_siembra_repo),
    today: date = Depends(get_today),
    _user: Usuario = Depends(get_current_user),
):
    items, total = siembra_service.list_siembras(
        repo, today,
        page=page, per_page=per_page, estado=estado, tipo=tipo, bandeja=bandeja,
        desde=parse_date_filter(desde), hasta=parse_date_filter(hasta),
    )
    return {"total": total, "page": page, "per_page": per_page, "items": items}


@router.get("/stats", response_model=SiembraStatsOut, summary="Conteo de siembras por estado")
def siembra_stats(
    repo: SqlSiembraRepository = Depends(get_siembra_repo),
    today: date = Depends(get_today),
    _user: Usuario = Depends(get_current_user),
):
    return siembra_service.siembra_stats(repo, today)


@router.get(
    "/proximas",
    response_model=List[SiembraOut],
    summary="Próximas cosechas",
    description="Siembras sin cosechar cuya cosecha esperada cae entre hoy y hoy + `dias`.",
)
def proximas_cosechas(
    dias: Optional[int] = Query(None, ge=0, le=60, description="Por defecto UPCOMING_HARVEST_DAYS"),
    repo: SqlSiembraRepository = Depends(get_siembra_repo),
    today: date = Depends(get_today),
    _user: Usuario = Depends(get_current_user),
):
    return siembra_service.proximas_cosechas(
        repo, today, dias if dias is not None else settings.UPCOMING_HARVEST_DAYS
    )


@router.post(
    "",
    response_model=SiembraOut,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar siembra",
    description=(
        "Si no se envía `fecha_esperada_cosecha` se calcula con los `growth_days` de la variedad "
        "(por `variedad_id` o por nombre en `tipo_microgreen`). `fecha_luz` se completa con `dome_days`."
    ),
)
def create_siembra(
    body: SiembraCreate,
    repo: SqlSiembraRepository = Depends(get_siembra_repo),
    variedad_repo: SqlVariedadRepository = Depends(get_variedad_repo),
    today: date = Depends(get_today),
    user: Usuario = Depends(get_current_user),
):
    return siembra_service.create_siembra(repo, variedad_repo, user, body, today)


@router.get("/{siembra_id}", response_model=SiembraOut, summary="Obtener siembra")
def get_siembra(
    siembra_id: str = Path(..., min_length=1, max_length=36),
    repo: SqlSiembraRepository = Depends(get_siembra_repo),
    today: date = Depends(get_today),
    _user: Usuario = Depends(get_current_user),
):
    return siembra_service.get_siembra(repo, siembra_id, today)


@router.patch("/{siembra_id}", response_model=SiembraOut, summary="Actualizar siembra")
def update_siembra(
    body: SiembraUpdate,
    siembra_id: str = Path(..., min_length=1, max_length=36),
    repo: SqlSiembraRepository = Depends(get_siembra_repo),
    today: date = Depends(get_today),
    _user: Usuario = Depends(get_current_user),
):
    return siembra_service.update_siembra(repo, siembra_id, body, today)


@router.delete("/{siembra_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Eliminar siembra")
def delete_siembra(
    siembra_id: str = Path(..., min_length=1, max_length=36),
    repo: SqlSiembraRepository = Depends(get_siembra_repo),
    cosecha_repo: SqlCosechaRepository = Depends(get_cosecha_repo),
    _user: Usuario = Depends(get_current_user),
):
    siembra_service.delete_siembra(repo, cosecha_repo, siembra_id)
