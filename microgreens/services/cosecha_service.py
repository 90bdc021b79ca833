# services/cosecha_service.py
"""
Registro de cosechas. Cada cosecha fija fecha_real_cosecha de su siembra
(transición a "cosechado"); eliminarla la limpia.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from microgreens.models.cosecha import Cosecha
from microgreens.models.siembra import Siembra
from microgreens.repositories.base import Repository
from microgreens.schemas.cosecha import CosechaCreate, CosechaUpdate
from microgreens.services.analytics_service import estadisticas_cosechas
from microgreens.services.lifecycle import ciclo_de_vida

logger = logging.getLogger(__name__)


def _get_or_404(repo: Repository[Cosecha], cosecha_id: str) -> Cosecha:
    cosecha = repo.get(cosecha_id)
    if cosecha is None:
        raise HTTPException(status_code=404, detail="harvest_not_found: La cosecha no existe.")
    return cosecha


def _ensure_siembra(siembra_repo: Repository[Siembra], siembra_id: str) -> Siembra:
    siembra = siembra_repo.get(siembra_id)
    if siembra is None:
        raise HTTPException(status_code=404, detail="siembra_not_found: La siembra no existe.")
    return siembra


def _ensure_cosechable(siembra: Siembra, today: date) -> None:
    if not ciclo_de_vida(siembra, today).puede_cosecharse:
        raise HTTPException(
            status_code=422,
            detail="not_harvestable: Solo se pueden cosechar siembras en estado creciendo o listo.",
        )


def _validar_fecha_cosecha(siembra: Siembra, fecha_cosecha: date, today: date) -> None:
    if fecha_cosecha < siembra.fecha_siembra:
        raise HTTPException(
            status_code=422,
            detail="harvest_before_sowing: fecha_cosecha no puede ser anterior a fecha_siembra.",
        )
    if fecha_cosecha > today:
        raise HTTPException(status_code=422, detail="harvest_in_future: fecha_cosecha no puede ser futura.")


def _apply_tipo(cosecha: Cosecha, siembra: Optional[Siembra]) -> Cosecha:
    """Proyecta tipo_microgreen de la siembra para CosechaOut."""
    cosecha.tipo_microgreen = siembra.tipo_microgreen if siembra is not None else None
    return cosecha


# ------ List / Get ------

def list_cosechas(
    repo: Repository[Cosecha],
    siembra_repo: Repository[Siembra],
    siembra_id: Optional[str] = None,
    calidad_min: Optional[int] = None,
) -> List[Cosecha]:
    items = repo.list(siembra_id=siembra_id)
    if calidad_min is not None:
        items = [c for c in items if c.calidad >= calidad_min]
    return [_apply_tipo(c, siembra_repo.get(c.siembra_id)) for c in items]


def get_cosecha(repo: Repository[Cosecha], siembra_repo: Repository[Siembra], cosecha_id: str) -> Cosecha:
    cosecha = _get_or_404(repo, cosecha_id)
    return _apply_tipo(cosecha, siembra_repo.get(cosecha.siembra_id))


# ------ Create / Update / Delete ------

def create_cosecha(
    repo: Repository[Cosecha],
    siembra_repo: Repository[Siembra],
    data: CosechaCreate,
    today: date,
) -> Cosecha:
    siembra = _ensure_siembra(siembra_repo, data.siembra_id)
    if repo.list(siembra_id=siembra.siembra_id):
        raise HTTPException(status_code=409, detail="harvest_exists: La siembra ya tiene una cosecha registrada.")
    _ensure_cosechable(siembra, today)
    _validar_fecha_cosecha(siembra, data.fecha_cosecha, today)

    cosecha = repo.create(data.model_dump())
    siembra_repo.update(siembra, {"fecha_real_cosecha": cosecha.fecha_cosecha})
    logger.info("Cosecha registrada: siembra=%s peso=%s", siembra.siembra_id, cosecha.peso_cosechado)
    return _apply_tipo(cosecha, siembra)


def update_cosecha(
    repo: Repository[Cosecha],
    siembra_repo: Repository[Siembra],
    cosecha_id: str,
    data: CosechaUpdate,
    today: date,
) -> Cosecha:
    cosecha = _get_or_404(repo, cosecha_id)
    siembra = _ensure_siembra(siembra_repo, cosecha.siembra_id)
    changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None or k == "notas"}

    if "fecha_cosecha" in changes:
        _validar_fecha_cosecha(siembra, changes["fecha_cosecha"], today)

    cosecha = repo.update(cosecha, changes)
    if siembra.fecha_real_cosecha != cosecha.fecha_cosecha:
        siembra_repo.update(siembra, {"fecha_real_cosecha": cosecha.fecha_cosecha})
    return _apply_tipo(cosecha, siembra)


def delete_cosecha(repo: Repository[Cosecha], siembra_repo: Repository[Siembra], cosecha_id: str) -> None:
    """La siembra vuelve a su estado derivado de fechas (edición explícita)."""
    cosecha = _get_or_404(repo, cosecha_id)
    siembra = siembra_repo.get(cosecha.siembra_id)
    repo.delete(cosecha)
    if siembra is not None:
        siembra_repo.update(siembra, {"fecha_real_cosecha": None})
    logger.info("Cosecha eliminada: %s", cosecha_id)


# ------ Stats ------

def cosecha_stats(repo: Repository[Cosecha], siembra_repo: Repository[Siembra], today: date) -> Dict[str, Any]:
    return estadisticas_cosechas(list_cosechas(repo, siembra_repo), today)
