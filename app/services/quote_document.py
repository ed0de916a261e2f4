from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from app.services.quote_engine import QuoteBreakdown

PART_ROWS: dict[str, list[tuple[str, str]]] = {
    "A": [
        ("Packing Charges", "packing"),
        ("Handling Charges", "handling"),
    ],
    "B": [
        ("Origin Charges", "origin"),
        ("GST on Origin Charges", "gst_origin"),
        ("Margin on Origin Charges", "margin_origin"),
    ],
    "C": [
        ("Ocean Freight", "freight"),
        ("GST on Freight", "gst_freight"),
        ("Margin on Freight", "margin_freight"),
    ],
    "D": [
        ("DTHC", "dthc"),
        ("Destination Charges", "destination"),
        ("Total Dest Charges", "total_dest"),
        ("GST on Dest Charges", "gst_dest"),
        ("Margin on Dest Charges", "margin_dest"),
    ],
    "E": [
        ("Net Total", "net_total"),
        ("GST on All (18%)", "leo_gst_all"),
        ("GST on Freight (5%)", "leo_gst_freight"),
        ("Total GST", "total_gst"),
        ("Total Amount", "total"),
    ],
}

REFERENCE_ROWS: list[tuple[str, str]] = [
    ("Input Credit", "input_credit"),
    ("Combined Margin", "combined_margin"),
    ("GST to be Paid", "gst_to_pay"),
]

HEADER_FIELDS = (
    "customer_name",
    "origin_city",
    "origin_port",
    "destination_city",
    "destination_country",
    "destination_port",
    "mode",
    "volume_cbm",
)


@dataclass
class DocumentRow:
    name: str
    values: dict[str, str]


@dataclass
class QuoteDocument:
    header: dict[str, str]
    margins: list[str]
    parts: dict[str, list[DocumentRow]] = field(default_factory=dict)
    part_f: list[DocumentRow] = field(default_factory=list)
    totals: list[str] = field(default_factory=list)


def _rows(table: dict[str, dict[str, str]], spec: list[tuple[str, str]]) -> list[DocumentRow]:
    return [
        DocumentRow(name=name, values={margin: values[key] for margin, values in table.items()})
        for name, key in spec
    ]


def build_document(breakdown: QuoteBreakdown, details: Mapping[str, Any] | None = None) -> QuoteDocument:
    """Lay out a breakdown the way the printed quote shows it.

    Parts A-E carry the cost build-up, Part F the accounting reference
    figures, and ``totals`` the grand-total row, one entry per margin rate.
    """
    table = breakdown.as_strings()
    details = details or {}
    header = {key: "" if details.get(key) is None else str(details.get(key)) for key in HEADER_FIELDS}
    return QuoteDocument(
        header=header,
        margins=list(table),
        parts={part: _rows(table, spec) for part, spec in PART_ROWS.items()},
        part_f=_rows(table, REFERENCE_ROWS),
        totals=[values["total"] for values in table.values()],
    )
