# api/variedades.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from microgreens.enums.enums import CategoriaVariedadEnum
from microgreens.models.user import Usuario
from microgreens.repositories import SqlSiembraRepository, SqlVariedadRepository
from microgreens.schemas.variedad import VariedadCreate, VariedadOut, VariedadUpdate
from microgreens.services import variedad_service
from microgreens.utils.dependencies import get_current_user, get_siembra_repo, get_variedad_repo

router = APIRouter(prefix="/variedades", tags=["Variedades"])


@router.get(
    "",
    response_model=List[VariedadOut],
    summary="Catálogo de variedades",
    description="Predefinidas primero. `q` busca en nombre, descripción y tags sin distinguir mayúsculas ni acentos.",
)
def list_variedades(
    categoria: Optional[CategoriaVariedadEnum] = Query(None),
    q: Optional[str] = Query(None, max_length=80),
    repo: SqlVariedadRepository = Depends(get_variedad_repo),
    _user: Usuario = Depends(get_current_user),
):
    return variedad_service.list_variedades(repo, categoria=categoria, q=q)


@router.post("", response_model=VariedadOut, status_code=status.HTTP_201_CREATED, summary="Crear variedad personalizada")
def create_variedad(
    body: VariedadCreate,
    repo: SqlVariedadRepository = Depends(get_variedad_repo),
    _user: Usuario = Depends(get_current_user),
):
    return variedad_service.create_custom(repo, body)


@router.get("/{variedad_id}", response_model=VariedadOut, summary="Obtener variedad")
def get_variedad(
    variedad_id: str = Path(..., min_length=1, max_length=36),
    repo: SqlVariedadRepository = Depends(get_variedad_repo),
    _user: Usuario = Depends(get_current_user),
):
    return variedad_service.get_variedad(repo, variedad_id)


@router.put(
    "/{variedad_id}",
    response_model=VariedadOut,
    summary="Actualizar variedad personalizada",
    description="Las variedades predefinidas son de solo lectura (403 `variety_readonly`).",
)
def update_variedad(
    body: VariedadUpdate,
    variedad_id: str = Path(..., min_length=1, max_length=36),
    repo: SqlVariedadRepository = Depends(get_variedad_repo),
    _user: Usuario = Depends(get_current_user),
):
    return variedad_service.update_custom(repo, variedad_id, body)


@router.delete("/{variedad_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Eliminar variedad personalizada")
def delete_variedad(
    variedad_id: str = Path(..., min_length=1, max_length=36),
    repo: SqlVariedadRepository = Depends(get_variedad_repo),
    siembra_repo: SqlSiembraRepository = Depends(get_siembra_repo),
    _user: Usuario = Depends(get_current_user),
):
    variedad_service.delete_custom(repo, variedad_id, siembra_repo)
