from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any
from pydantic import BaseModel, Field, field_validator

from app.schemas.common import BaseSchema

ChargeText = str | float | None


class QuoteForm(BaseModel):
    customer_name: str = ""
    origin_city: str = ""
    origin_port: str = ""
    destination_city: str = ""
    destination_country: str = ""
    destination_port: str = ""
    mode: str = ""
    volume_cbm: ChargeText = None

    packing_charges: ChargeText = ""
    handling_charges: ChargeText = ""
    origin_charges_custom: ChargeText = ""
    ocean_freight: ChargeText = ""
    dthc: ChargeText = ""
    destination_charges: ChargeText = ""

    apply_vendor_gst: bool = True


class BreakdownResponse(BaseModel):
    margins: dict[str, dict[str, str]]
    is_complete: bool
    missing_fields: list[str] = Field(default_factory=list)


class QuoteRead(BaseSchema):
    id: uuid.UUID
    customer_name: str
    origin_city: str
    origin_port: str
    destination_city: str
    destination_country: str
    destination_port: str
    mode: str
    volume_cbm: str | None

    packing_charges: str
    handling_charges: str
    origin_charges_custom: str
    ocean_freight: str
    dthc: str
    destination_charges: str

    apply_vendor_gst: bool
    created_at: datetime | None = None

    @field_validator(
        "packing_charges",
        "handling_charges",
        "origin_charges_custom",
        "ocean_freight",
        "dthc",
        "destination_charges",
        mode="before",
    )
    @classmethod
    def charge_as_text(cls, value: Any):
        if isinstance(value, Decimal):
            return format(value.normalize(), "f")
        if value is None:
            return "0"
        return str(value)


class QuoteHistory(BaseModel):
    data: list[QuoteRead]


class QuoteDetail(BaseModel):
    quote: QuoteRead
    margins: dict[str, dict[str, str]]


class DocumentRowRead(BaseSchema):
    name: str
    values: dict[str, str]


class QuoteDocumentResponse(BaseSchema):
    header: dict[str, str]
    margins: list[str]
    parts: dict[str, list[DocumentRowRead]]
    part_f: list[DocumentRowRead]
    totals: list[str]
