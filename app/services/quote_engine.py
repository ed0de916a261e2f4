from __future__ import annotations

import re
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any, Iterator, Mapping

from app.models.enums import MarginRate

ORIGIN_VENDOR_GST_RATE = Decimal("0.18")
FREIGHT_VENDOR_GST_RATE = Decimal("0.05")
DESTINATION_VENDOR_GST_RATE = Decimal("0.18")
SERVICE_GST_RATE = Decimal("0.18")
SERVICE_FREIGHT_GST_RATE = Decimal("0.05")

ZERO = Decimal("0")
CENT = Decimal("0.01")

# form input is held to the Numeric(18, 4) columns it is saved in
CHARGE_SCALE = Decimal("0.0001")
MAX_CHARGE = Decimal("1e14")

CHARGE_FIELDS = (
    "packing_charges",
    "handling_charges",
    "origin_charges_custom",
    "ocean_freight",
    "dthc",
    "destination_charges",
)

REQUIRED_FIELDS = (
    "customer_name",
    "origin_city",
    "origin_port",
    "destination_city",
    "destination_country",
    "destination_port",
    "mode",
) + CHARGE_FIELDS

_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class ShipmentCharges:
    packing: Decimal = ZERO
    handling: Decimal = ZERO
    origin_custom: Decimal = ZERO
    ocean_freight: Decimal = ZERO
    dthc: Decimal = ZERO
    destination_charges: Decimal = ZERO
    apply_vendor_gst: bool = True

    def amounts(self) -> tuple[Decimal, ...]:
        return (
            self.packing,
            self.handling,
            self.origin_custom,
            self.ocean_freight,
            self.dthc,
            self.destination_charges,
        )


@dataclass(frozen=True)
class QuoteLine:
    packing: Decimal
    handling: Decimal
    origin: Decimal
    gst_origin: Decimal
    margin_origin: Decimal
    freight: Decimal
    gst_freight: Decimal
    margin_freight: Decimal
    dthc: Decimal
    destination: Decimal
    total_dest: Decimal
    gst_dest: Decimal
    margin_dest: Decimal
    net_total: Decimal
    leo_gst_all: Decimal
    leo_gst_freight: Decimal
    total_gst: Decimal
    total: Decimal
    input_credit: Decimal
    combined_margin: Decimal
    gst_to_pay: Decimal

    def as_strings(self) -> dict[str, str]:
        return {f.name: f"{getattr(self, f.name):.2f}" for f in fields(self)}


@dataclass(frozen=True)
class QuoteBreakdown:
    lines: dict[MarginRate, QuoteLine]

    def __getitem__(self, rate: MarginRate) -> QuoteLine:
        return self.lines[rate]

    def __iter__(self) -> Iterator[MarginRate]:
        return iter(self.lines)

    def items(self):
        return self.lines.items()

    def as_strings(self) -> dict[str, dict[str, str]]:
        return {rate.value: line.as_strings() for rate, line in self.lines.items()}


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _precision_for(charges: ShipmentCharges) -> int:
    # enough digits to carry the largest charge to the cent after summing
    finite = [amount for amount in charges.amounts() if amount.is_finite() and amount]
    largest = max((amount.adjusted() for amount in finite), default=0)
    return max(28, largest + 12)


def compute_line(charges: ShipmentCharges, rate: MarginRate) -> QuoteLine:
    """Cost, GST and margin figures for one margin rate.

    Margins are rounded to the cent before they enter any sum; every other
    field is rounded once from its unrounded value. Changing that order moves
    displayed totals by a cent here and there.
    """
    with localcontext() as ctx:
        ctx.prec = _precision_for(charges)
        return _compute_line(charges, rate)


def _compute_line(charges: ShipmentCharges, rate: MarginRate) -> QuoteLine:
    r = rate.fraction
    packing = charges.packing
    handling = charges.handling
    origin = charges.origin_custom
    freight = charges.ocean_freight
    dthc = charges.dthc
    destination = charges.destination_charges

    gst_origin = origin * ORIGIN_VENDOR_GST_RATE if charges.apply_vendor_gst else ZERO
    margin_origin = round2((origin + gst_origin) * r)

    gst_freight = freight * FREIGHT_VENDOR_GST_RATE if charges.apply_vendor_gst else ZERO
    margin_freight = round2((freight + gst_freight) * r)

    total_dest = dthc + destination
    gst_dest = total_dest * DESTINATION_VENDOR_GST_RATE if charges.apply_vendor_gst else ZERO
    margin_dest = round2((total_dest + gst_dest) * r)

    non_freight = (
        packing + handling + origin + gst_origin + margin_origin + total_dest + gst_dest + margin_dest
    )
    freight_related = freight + gst_freight + margin_freight
    net_total = non_freight + freight_related

    # service provider GST: 18% on everything except freight, 5% on freight
    leo_gst_all = non_freight * SERVICE_GST_RATE
    leo_gst_freight = freight_related * SERVICE_FREIGHT_GST_RATE
    total_gst = leo_gst_all + leo_gst_freight

    input_credit = gst_origin + gst_freight + gst_dest
    combined_margin = margin_origin + margin_freight + margin_dest

    return QuoteLine(
        packing=round2(packing),
        handling=round2(handling),
        origin=round2(origin),
        gst_origin=round2(gst_origin),
        margin_origin=margin_origin,
        freight=round2(freight),
        gst_freight=round2(gst_freight),
        margin_freight=margin_freight,
        dthc=round2(dthc),
        destination=round2(destination),
        total_dest=round2(total_dest),
        gst_dest=round2(gst_dest),
        margin_dest=margin_dest,
        net_total=round2(net_total),
        leo_gst_all=round2(leo_gst_all),
        leo_gst_freight=round2(leo_gst_freight),
        total_gst=round2(total_gst),
        total=round2(net_total + total_gst),
        input_credit=round2(input_credit),
        combined_margin=round2(combined_margin),
        gst_to_pay=round2(total_gst - input_credit),
    )


def compute_breakdown(charges: ShipmentCharges) -> QuoteBreakdown:
    return QuoteBreakdown(lines={rate: compute_line(charges, rate) for rate in MarginRate})


def parse_charge_or_zero(text: Any) -> Decimal:
    """Coerce a free-text form value to a Decimal.

    Reads the leading numeric literal and ignores anything after it, so
    ``"1200 INR"`` is 1200. Empty or unparseable text, ``None``, and amounts
    too large to be saved give 0. The result is rounded to four places, the
    scale it is stored at, so a saved quote recomputes to what was shown.
    """
    if text is None or isinstance(text, bool):
        return ZERO
    if isinstance(text, Decimal):
        value = text
    else:
        if isinstance(text, (int, float)):
            text = repr(text)
        match = _LEADING_NUMBER.match(str(text).strip())
        if not match:
            return ZERO
        try:
            value = Decimal(match.group(0))
        except InvalidOperation:
            return ZERO
    if not value.is_finite() or abs(value) >= MAX_CHARGE:
        return ZERO
    return value.quantize(CHARGE_SCALE, rounding=ROUND_HALF_UP)


def charges_from_form(form: Mapping[str, Any]) -> ShipmentCharges:
    return ShipmentCharges(
        packing=parse_charge_or_zero(form.get("packing_charges")),
        handling=parse_charge_or_zero(form.get("handling_charges")),
        origin_custom=parse_charge_or_zero(form.get("origin_charges_custom")),
        ocean_freight=parse_charge_or_zero(form.get("ocean_freight")),
        dthc=parse_charge_or_zero(form.get("dthc")),
        destination_charges=parse_charge_or_zero(form.get("destination_charges")),
        apply_vendor_gst=bool(form.get("apply_vendor_gst", True)),
    )


def missing_fields(form: Mapping[str, Any]) -> list[str]:
    missing = []
    for key in REQUIRED_FIELDS:
        value = form.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(key)
    return missing


def is_data_complete(form: Mapping[str, Any]) -> bool:
    return not missing_fields(form)
