# repositories/base.py
"""
Interfaz de repositorio (list / get / create / update / delete) de la que
dependen los servicios. La implementación SQL usa la sesión de la petición;
la implementación en memoria sirve para pruebas y prototipos.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy.orm import Session

from microgreens.models.siembra import new_id
from microgreens.utils.datetime_utils import now_local

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    @abstractmethod
    def list(self, **filters: Any) -> List[T]:
        """Filtros por igualdad; un valor None no filtra."""

    @abstractmethod
    def get(self, obj_id: str) -> Optional[T]:
        ...

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> T:
        ...

    @abstractmethod
    def update(self, obj: T, changes: Dict[str, Any]) -> T:
        ...

    @abstractmethod
    def delete(self, obj: T) -> None:
        ...


class SqlRepository(Repository[T]):
    model: Type[T]
    # (columna, "asc" | "desc")
    order_by: Tuple[Tuple[str, str], ...] = ()

    def __init__(self, db: Session):
        self.db = db

    def list(self, **filters: Any) -> List[T]:
        q = self.db.query(self.model)
        for field, value in filters.items():
            if value is not None:
                q = q.filter(getattr(self.model, field) == value)
        for field, direction in self.order_by:
            col = getattr(self.model, field)
            q = q.order_by(col.asc() if direction == "asc" else col.desc())
        return q.all()

    def get(self, obj_id: str) -> Optional[T]:
        return self.db.get(self.model, obj_id)

    def create(self, data: Dict[str, Any]) -> T:
        obj = self.model(**data)
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def update(self, obj: T, changes: Dict[str, Any]) -> T:
        for k, v in changes.items():
            setattr(obj, k, v)
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj: T) -> None:
        self.db.delete(obj)
        self.db.commit()


class InMemoryRepository(Repository[T]):
    model: Type[T]
    pk: str
    order_by: Tuple[Tuple[str, str], ...] = ()

    def __init__(self):
        self._items: Dict[str, T] = {}

    def list(self, **filters: Any) -> List[T]:
        items = [
            obj for obj in self._items.values()
            if all(value is None or getattr(obj, field) == value for field, value in filters.items())
        ]
        # Orden estable aplicando las claves de la última a la primera
        for field, direction in reversed(self.order_by):
            items.sort(key=lambda o: getattr(o, field), reverse=direction == "desc")
        return items

    def get(self, obj_id: str) -> Optional[T]:
        return self._items.get(obj_id)

    def create(self, data: Dict[str, Any]) -> T:
        now = now_local()
        obj = self.model(**{self.pk: new_id(), "created_at": now, "updated_at": now, **data})
        self._items[getattr(obj, self.pk)] = obj
        return obj

    def update(self, obj: T, changes: Dict[str, Any]) -> T:
        for k, v in changes.items():
            setattr(obj, k, v)
        setattr(obj, "updated_at", now_local())
        return obj

    def delete(self, obj: T) -> None:
        self._items.pop(getattr(obj, self.pk), None)
