# api/cosechas.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from microgreens.models.user import Usuario
from microgreens.repositories import SqlCosechaRepository, SqlSiembraRepository
from microgreens.schemas.cosecha import CosechaCreate, CosechaOut, CosechaStatsOut, CosechaUpdate
from microgreens.services import cosecha_service
from microgreens.utils.dependencies import get_cosecha_repo, get_current_user, get_siembra_repo, get_today

router = APIRouter(prefix="/cosechas", tags=["Cosechas"])


@router.get("", response_model=List[CosechaOut], summary="Listar cosechas")
def list_cosechas(
    siembra_id: Optional[str] = Query(None, max_length=36),
    calidad_min: Optional[int] = Query(None, ge=1, le=5),
    repo: SqlCosechaRepository = Depends(get_cosecha_repo),
    siembra_repo: SqlSiembraRepository = Depends(get_siembra_repo),
    _user: Usuario = Depends(get_current_user),
):
    return cosecha_service.list_cosechas(repo, siembra_repo, siembra_id=siembra_id, calidad_min=calidad_min)


@router.get(
    "/stats",
    response_model=CosechaStatsOut,
    summary="Estadísticas de cosechas",
    description="Peso total, calidad promedio, cosechas del mes y de los últimos 7 días, y desglose por tipo.",
)
def cosecha_stats(
    repo: SqlCosechaRepository = Depends(get_cosecha_repo),
    siembra_repo: SqlSiembraRepository = Depends(get_siembra_repo),
    today: date = Depends(get_today),
    _user: Usuario = Depends(get_current_user),
):
    return cosecha_service.cosecha_stats(repo, siembra_repo, today)


@router.post(
    "",
    response_model=CosechaOut,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar cosecha",
    description=(
        "Registra la cosecha de una siembra y fija su `fecha_real_cosecha`.\n\n"
        "**Errores:** 404 `siembra_not_found`, 409 `harvest_exists`, "
        "422 `harvest_before_sowing` / `harvest_in_future`."
    ),
)
def create_cosecha(
    body: CosechaCreate,
    repo: SqlCosechaRepository = Depends(get_cosecha_repo),
    siembra_repo: SqlSiembraRepository = Depends(get_siembra_repo),
    today: date = Depends(get_today),
    _user: Usuario = Depends(get_current_user),
):
    return cosecha_service.create_cosecha(repo, siembra_repo, body, today)


@router.get("/{cosecha_id}", response_model=CosechaOut, summary="Obtener cosecha")
def get_cosecha(
    cosecha_id: str = Path(..., min_length=1, max_length=36),
    repo: SqlCosechaRepository = Depends(get_cosecha_repo),
    siembra_repo: SqlSiembraRepository = Depends(get_siembra_repo),
    _user: Usuario = Depends(get_current_user),
):
    return cosecha_service.get_cosecha(repo, siembra_repo, cosecha_id)


@router.patch("/{cosecha_id}", response_model=CosechaOut, summary="Actualizar cosecha")
def update_cosecha(
    body: CosechaUpdate,
    cosecha_id: str = Path(..., min_length=1, max_length=36),
    repo: SqlCosechaRepository = Depends(get_cosecha_repo),
    siembra_repo: SqlSiembraRepository = Depends(get_siembra_repo),
    today: date = Depends(get_today),
    _user: Usuario = Depends(get_current_user),
):
    return cosecha_service.update_cosecha(repo, siembra_repo, cosecha_id, body, today)


@router.delete(
    "/{cosecha_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Eliminar cosecha",
    description="Limpia `fecha_real_cosecha` de la siembra; su estado vuelve a derivarse de las fechas.",
)
def delete_cosecha(
    cosecha_id: str = Path(..., min_length=1, max_length=36),
    repo: SqlCosechaRepository = Depends(get_cosecha_repo),
    siembra_repo: SqlSiembraRepository = Depends(get_siembra_repo),
    _user: Usuario = Depends(get_current_user),
):
    cosecha_service.delete_cosecha(repo, siembra_repo, cosecha_id)
