# api/calendario.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from microgreens.models.user import Usuario
from microgreens.repositories import SqlSiembraRepository
from microgreens.schemas.calendario import EtapaDiaOut, EventoOut
from microgreens.schemas.common import DateRange
from microgreens.services import calendar_service
from microgreens.utils.datetime_utils import from_local_date_string, iso_to_local_date_string, parse_date_filter
from microgreens.utils.dependencies import get_current_user, get_siembra_repo, get_today

router = APIRouter(prefix="/calendario", tags=["Calendario"])


@router.get(
    "",
    response_model=List[EventoOut],
    summary="Eventos del calendario",
    description=(
        "Un evento por fecha registrada de cada siembra: `planted`, `dome`, `light`, "
        "`harvest` (esperada) y `harvested` (real). `inicio` / `fin` en YYYY-MM-DD, inclusivos."
    ),
)
def eventos(
    inicio: Optional[str] = Query(None, description="YYYY-MM-DD"),
    fin: Optional[str] = Query(None, description="YYYY-MM-DD"),
    repo: SqlSiembraRepository = Depends(get_siembra_repo),
    today: date = Depends(get_today),
    _user: Usuario = Depends(get_current_user),
):
    desde, hasta = parse_date_filter(inicio), parse_date_filter(fin)
    if desde and hasta and desde > hasta:
        raise HTTPException(status_code=422, detail="invalid_range: inicio no puede ser mayor que fin.")
    rango = DateRange(inicio=desde, fin=hasta)
    return calendar_service.construir_eventos(repo.list(), today, rango)


@router.get("/dia", response_model=List[EtapaDiaOut], summary="Etapa de cada siembra en un día")
def etapas_del_dia(
    dia: str = Query(..., description="YYYY-MM-DD"),
    repo: SqlSiembraRepository = Depends(get_siembra_repo),
    _user: Usuario = Depends(get_current_user),
):
    return calendar_service.etapas_del_dia(repo.list(), from_local_date_string(iso_to_local_date_string(dia)))
