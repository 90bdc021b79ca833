# repositories/variedad_repository.py
from microgreens.models.variedad import Variedad
from microgreens.repositories.base import InMemoryRepository, SqlRepository

VARIEDAD_ORDER = (("nombre", "asc"),)


class SqlVariedadRepository(SqlRepository[Variedad]):
    model = Variedad
    order_by = VARIEDAD_ORDER


class InMemoryVariedadRepository(InMemoryRepository[Variedad]):
    model = Variedad
    pk = "variedad_id"
    order_by = VARIEDAD_ORDER
