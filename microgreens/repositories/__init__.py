from .base import Repository, SqlRepository, InMemoryRepository
from .siembra_repository import SqlSiembraRepository, InMemorySiembraRepository
from .cosecha_repository import SqlCosechaRepository, InMemoryCosechaRepository
from .variedad_repository import SqlVariedadRepository, InMemoryVariedadRepository
