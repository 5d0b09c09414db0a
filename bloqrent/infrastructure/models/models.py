from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bloqrent.core.entities.locker import LockerStatus
from bloqrent.core.entities.rent import RentSize, RentStatus
from bloqrent.infrastructure.database import Base


class BloqModel(Base):
    __tablename__ = "bloqs"

    bloq_id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[str] = mapped_column(String, nullable=False)

    lockers = relationship("LockerModel", back_populates="bloq")


class LockerModel(Base):
    __tablename__ = "lockers"

    locker_id: Mapped[str] = mapped_column(String, primary_key=True)
    bloq_id: Mapped[str] = mapped_column(ForeignKey("bloqs.bloq_id"), nullable=False, index=True)
    status: Mapped[LockerStatus] = mapped_column(Enum(LockerStatus), nullable=False, default=LockerStatus.CLOSED)
    is_occupied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    bloq = relationship("BloqModel", back_populates="lockers")
    rents = relationship("RentModel", back_populates="locker", cascade="all, delete-orphan")


class RentModel(Base):
    __tablename__ = "rents"

    rent_id: Mapped[str] = mapped_column(String, primary_key=True)
    locker_id: Mapped[str] = mapped_column(ForeignKey("lockers.locker_id"), nullable=False, index=True)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    size: Mapped[RentSize] = mapped_column(Enum(RentSize), nullable=False)
    status: Mapped[RentStatus] = mapped_column(Enum(RentStatus), nullable=False, index=True)
    dropped_off_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    picked_up_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    locker = relationship("LockerModel", back_populates="rents")
