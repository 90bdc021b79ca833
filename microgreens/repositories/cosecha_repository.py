# repositories/cosecha_repository.py
from microgreens.models.cosecha import Cosecha
from microgreens.repositories.base import InMemoryRepository, SqlRepository

COSECHA_ORDER = (("fecha_cosecha", "desc"), ("created_at", "desc"))


class SqlCosechaRepository(SqlRepository[Cosecha]):
    model = Cosecha
    order_by = COSECHA_ORDER


class InMemoryCosechaRepository(InMemoryRepository[Cosecha]):
    model = Cosecha
    pk = "cosecha_id"
    order_by = COSECHA_ORDER
