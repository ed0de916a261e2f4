from __future__ import annotations

import uuid
from decimal import Decimal
from sqlalchemy import Boolean, DateTime, Numeric, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class InternationalQuote(Base):
    __tablename__ = "international_quotes"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    origin_city: Mapped[str] = mapped_column(String(128), nullable=False)
    origin_port: Mapped[str] = mapped_column(String(128), nullable=False)
    destination_city: Mapped[str] = mapped_column(String(128), nullable=False)
    destination_country: Mapped[str] = mapped_column(String(128), nullable=False)
    destination_port: Mapped[str] = mapped_column(String(128), nullable=False)
    mode: Mapped[str] = mapped_column(String(32), nullable=False)
    volume_cbm: Mapped[str | None] = mapped_column(String(32))

    packing_charges: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False, default=0)
    handling_charges: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False, default=0)
    origin_charges_custom: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False, default=0)
    ocean_freight: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False, default=0)
    dthc: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False, default=0)
    destination_charges: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False, default=0)

    apply_vendor_gst: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
