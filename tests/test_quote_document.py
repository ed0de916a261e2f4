from decimal import Decimal

from app.services.quote_document import PART_ROWS, build_document
from app.services.quote_engine import ShipmentCharges, compute_breakdown


def test_document_sections_follow_printed_layout():
    breakdown = compute_breakdown(
        ShipmentCharges(
            packing=Decimal("1000"),
            handling=Decimal("500"),
            origin_custom=Decimal("2000"),
            ocean_freight=Decimal("5000"),
            dthc=Decimal("800"),
            destination_charges=Decimal("700"),
        )
    )
    document = build_document(breakdown, {"customer_name": "Asha Traders", "mode": "FCL", "volume_cbm": 12})

    assert document.margins == ["10%", "20%", "25%", "30%"]
    assert list(document.parts) == ["A", "B", "C", "D", "E"]
    assert [row.name for row in document.parts["A"]] == ["Packing Charges", "Handling Charges"]
    assert [row.name for row in document.parts["E"]][-1] == "Total Amount"
    assert [row.name for row in document.part_f] == ["Input Credit", "Combined Margin", "GST to be Paid"]

    origin_gst = document.parts["B"][1]
    assert origin_gst.name == "GST on Origin Charges"
    assert origin_gst.values["10%"] == "360.00"

    net_total = document.parts["E"][0]
    assert net_total.values["10%"] == "11818.00"

    assert document.part_f[2].values["10%"] == "496.49"
    assert document.header["customer_name"] == "Asha Traders"
    assert document.header["volume_cbm"] == "12"
    assert document.header["origin_port"] == ""


def test_grand_total_row_matches_total_per_rate():
    breakdown = compute_breakdown(ShipmentCharges(ocean_freight=Decimal("999.99"), apply_vendor_gst=False))
    document = build_document(breakdown)
    expected = [line.as_strings()["total"] for line in breakdown.lines.values()]
    assert document.totals == expected
    assert document.parts["E"][-1].values == dict(zip(document.margins, expected))


def test_every_row_has_a_value_for_every_margin():
    document = build_document(compute_breakdown(ShipmentCharges()))
    rows = [row for part in document.parts.values() for row in part] + document.part_f
    assert len(rows) == sum(len(spec) for spec in PART_ROWS.values()) + 3
    for row in rows:
        assert list(row.values) == document.margins
        assert set(row.values.values()) == {"0.00"}
