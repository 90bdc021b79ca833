# services/variedad_service.py
"""
Catálogo de variedades: predefinidas (solo lectura) + personalizadas.
Las predefinidas se cargan al arrancar si no existen (idempotente).
"""
import logging
from typing import Dict, List, Optional

from fastapi import HTTPException

from microgreens.enums.enums import CategoriaVariedadEnum
from microgreens.models.variedad import Variedad
from microgreens.repositories.base import Repository
from microgreens.schemas.variedad import VariedadCreate, VariedadUpdate
from microgreens.utils.text import collate_key

logger = logging.getLogger(__name__)

PREDEFINED_VARIEDADES: List[Dict] = [
    {
        "nombre": "Brócoli",
        "categoria": "brassicas",
        "descripcion": "Microverdes de brócoli con sabor suave y textura crujiente. Ricos en vitaminas y antioxidantes.",
        "growth_days": 8, "dome_days": 3, "light_days": 5,
        "dificultad": "easy",
        "tags": ["fácil", "nutritivo", "popular"],
    },
    {
        "nombre": "Rúcula",
        "categoria": "brassicas",
        "descripcion": "Microverdes de rúcula con sabor picante distintivo. Excelente para ensaladas y platos gourmet.",
        "growth_days": 7, "dome_days": 2, "light_days": 5,
        "dificultad": "easy",
        "tags": ["picante", "gourmet", "rápido"],
    },
    {
        "nombre": "Guisantes",
        "categoria": "legumes",
        "descripcion": "Microverdes de guisantes dulces y crujientes. Perfectos para agregar frescura a cualquier plato.",
        "growth_days": 12, "dome_days": 4, "light_days": 8,
        "dificultad": "medium",
        "tags": ["dulce", "crujiente", "alto"],
    },
    {
        "nombre": "Rábano",
        "categoria": "brassicas",
        "descripcion": "Picante y lleno de antioxidantes. De los más rápidos en estar listos.",
        "growth_days": 5, "dome_days": 2, "light_days": 3,
        "dificultad": "easy",
        "tags": ["picante", "rápido"],
    },
    {
        "nombre": "Girasol",
        "categoria": "flowers",
        "descripcion": "Cremoso y rico en vitamina E. Requiere remojo previo de la semilla.",
        "growth_days": 8, "dome_days": 3, "light_days": 5,
        "dificultad": "medium",
        "tags": ["cremoso", "vitamina e"],
    },
    {
        "nombre": "Amaranto",
        "categoria": "grains",
        "descripcion": "Rico en lisina y calcio, con tallos de color intenso.",
        "growth_days": 9, "dome_days": 3, "light_days": 6,
        "dificultad": "medium",
        "tags": ["colorido", "delicado"],
    },
]


# ------ Helpers ------

def _get_or_404(repo: Repository[Variedad], variedad_id: str) -> Variedad:
    variedad = repo.get(variedad_id)
    if variedad is None:
        raise HTTPException(status_code=404, detail="variety_not_found: La variedad no existe.")
    return variedad


def _ensure_custom(variedad: Variedad) -> None:
    if not variedad.is_custom:
        raise HTTPException(
            status_code=403,
            detail="variety_readonly: No se pueden modificar variedades predefinidas.",
        )


def _ensure_nombre_libre(repo: Repository[Variedad], nombre: str, exclude_id: Optional[str] = None) -> None:
    existente = find_by_nombre(repo, nombre)
    if existente is not None and existente.variedad_id != exclude_id:
        raise HTTPException(status_code=409, detail="variety_exists: Ya existe una variedad con ese nombre.")


def _payload(data: VariedadCreate) -> Dict:
    payload = data.model_dump()
    payload["categoria"] = data.categoria.value
    payload["dificultad"] = data.dificultad.value
    return payload


# ------ Seed ------

def seed_predefined(repo: Repository[Variedad]) -> int:
    """Inserta las predefinidas que falten. Retorna cuántas se crearon."""
    creadas = 0
    for datos in PREDEFINED_VARIEDADES:
        if find_by_nombre(repo, datos["nombre"]) is not None:
            continue
        repo.create({**datos, "tags": list(datos["tags"]), "is_custom": False})
        creadas += 1
    if creadas:
        logger.info("Variedades predefinidas creadas: %d", creadas)
    return creadas


# ------ List / Get ------

def find_by_nombre(repo: Repository[Variedad], nombre: str) -> Optional[Variedad]:
    """Búsqueda exacta ignorando mayúsculas y acentos ("rucula" == "Rúcula")."""
    buscado = collate_key(nombre.strip())[0]
    for variedad in repo.list():
        if collate_key(variedad.nombre)[0] == buscado:
            return variedad
    return None


def _coincide(variedad: Variedad, termino: str) -> bool:
    if termino in collate_key(variedad.nombre)[0]:
        return True
    if termino in collate_key(variedad.descripcion or "")[0]:
        return True
    return any(termino in collate_key(tag)[0] for tag in (variedad.tags or []))


def list_variedades(
    repo: Repository[Variedad],
    categoria: Optional[CategoriaVariedadEnum] = None,
    q: Optional[str] = None,
) -> List[Variedad]:
    items = repo.list(categoria=categoria.value if categoria else None)
    termino = collate_key(q.strip())[0] if q else ""
    if termino:
        items = [v for v in items if _coincide(v, termino)]
    # Predefinidas primero, luego personalizadas
    return sorted(items, key=lambda v: v.is_custom)


def get_variedad(repo: Repository[Variedad], variedad_id: str) -> Variedad:
    return _get_or_404(repo, variedad_id)


# ------ Create / Update / Delete (solo personalizadas) ------

def create_custom(repo: Repository[Variedad], data: VariedadCreate) -> Variedad:
    _ensure_nombre_libre(repo, data.nombre)
    variedad = repo.create({**_payload(data), "is_custom": True})
    logger.info("Variedad personalizada creada: %s", variedad.nombre)
    return variedad


def update_custom(repo: Repository[Variedad], variedad_id: str, data: VariedadUpdate) -> Variedad:
    variedad = _get_or_404(repo, variedad_id)
    _ensure_custom(variedad)
    _ensure_nombre_libre(repo, data.nombre, exclude_id=variedad.variedad_id)
    return repo.update(variedad, _payload(data))


def delete_custom(repo: Repository[Variedad], variedad_id: str, siembra_repo: Repository) -> None:
    """Las siembras que la referencian conservan su tipo_microgreen y quedan sin variedad."""
    variedad = _get_or_404(repo, variedad_id)
    _ensure_custom(variedad)
    for siembra in siembra_repo.list(variedad_id=variedad.variedad_id):
        siembra_repo.update(siembra, {"variedad_id": None})
    repo.delete(variedad)
    logger.info("Variedad personalizada eliminada: %s", variedad_id)
