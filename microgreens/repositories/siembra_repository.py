# repositories/siembra_repository.py
from microgreens.models.siembra import Siembra
from microgreens.repositories.base import InMemoryRepository, SqlRepository

SIEMBRA_ORDER = (("fecha_siembra", "desc"), ("created_at", "desc"))


class SqlSiembraRepository(SqlRepository[Siembra]):
    model = Siembra
    order_by = SIEMBRA_ORDER


class InMemorySiembraRepository(InMemoryRepository[Siembra]):
    model = Siembra
    pk = "siembra_id"
    order_by = SIEMBRA_ORDER
