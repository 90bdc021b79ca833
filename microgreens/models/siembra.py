# models/siembra.py
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, Text, DECIMAL, BigInteger, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from microgreens.utils.db import Base
from microgreens.utils.datetime_utils import now_local


def new_id() -> str:
    return str(uuid.uuid4())


class Siembra(Base):
    """
    Lote sembrado de microgreens. El estado NO se persiste: se deriva de las
    fechas en cada lectura (ver services/lifecycle.py).
    """
    __tablename__ = "siembra"

    siembra_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    tipo_microgreen: Mapped[str] = mapped_column(String(80), nullable=False)
    variedad_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("variedad.variedad_id", ondelete="SET NULL"))
    fecha_siembra: Mapped[date] = mapped_column(Date, nullable=False)
    fecha_cupula: Mapped[date | None] = mapped_column(Date)
    fecha_luz: Mapped[date | None] = mapped_column(Date)
    fecha_esperada_cosecha: Mapped[date] = mapped_column(Date, nullable=False)
    fecha_real_cosecha: Mapped[date | None] = mapped_column(Date)
    cantidad_sembrada: Mapped[Decimal] = mapped_column(DECIMAL(10, 2), nullable=False)
    ubicacion_bandeja: Mapped[str | None] = mapped_column(String(40))
    notas: Mapped[str | None] = mapped_column(Text)
    created_by: Mapped[int | None] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), ForeignKey("usuario.usuario_id")
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=now_local, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=now_local, onupdate=now_local,
                                                 nullable=False)

    variedad = relationship("Variedad", back_populates="siembras")
    cosecha = relationship("Cosecha", back_populates="siembra", uselist=False, cascade="all, delete-orphan")
