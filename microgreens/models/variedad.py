# models/variedad.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Text, Integer, Boolean, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from microgreens.utils.db import Base
from microgreens.utils.datetime_utils import now_local
from microgreens.models.siembra import new_id


class Variedad(Base):
    """Catálogo de variedades: predefinidas (solo lectura) y personalizadas."""
    __tablename__ = "variedad"

    variedad_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    nombre: Mapped[str] = mapped_column(String(80), unique=True, nullable=False)
    categoria: Mapped[str] = mapped_column(String(20), nullable=False)
    descripcion: Mapped[str] = mapped_column(Text, default="", nullable=False)
    growth_days: Mapped[int] = mapped_column(Integer, nullable=False)
    dome_days: Mapped[int | None] = mapped_column(Integer)
    light_days: Mapped[int | None] = mapped_column(Integer)
    dificultad: Mapped[str] = mapped_column(String(10), default="easy", nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    is_custom: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=now_local, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=now_local, onupdate=now_local,
                                                 nullable=False)

    siembras = relationship("Siembra", back_populates="variedad")
