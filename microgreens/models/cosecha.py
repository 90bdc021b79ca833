# models/cosecha.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, Text, DECIMAL, SmallInteger, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from microgreens.utils.db import Base
from microgreens.utils.datetime_utils import now_local
from microgreens.models.siembra import new_id


class Cosecha(Base):
    __tablename__ = "cosecha"
    __table_args__ = (
        CheckConstraint("calidad BETWEEN 1 AND 5", name="calidad_rango"),
        CheckConstraint("peso_cosechado >= 0", name="peso_no_negativo"),
    )

    cosecha_id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    # Una siembra tiene a lo sumo una cosecha
    siembra_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("siembra.siembra_id", ondelete="CASCADE"), unique=True, nullable=False
    )
    fecha_cosecha: Mapped[date] = mapped_column(Date, nullable=False)
    peso_cosechado: Mapped[Decimal] = mapped_column(DECIMAL(10, 2), nullable=False)
    calidad: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    notas: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=now_local, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), default=now_local, onupdate=now_local,
                                                 nullable=False)

    siembra = relationship("Siembra", back_populates="cosecha")
