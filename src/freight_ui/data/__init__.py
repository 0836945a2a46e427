"""
Static and demo data for the freight list screens.

Builds deterministic consignments and trip sheets used by DemoSearchService
for development and demonstrations without a backend.
"""

from datetime import date, timedelta

from freight_ui.models.records import Consignment, TripSheet

PLACES = ["Chennai", "Coimbatore", "Madurai", "Salem", "Tiruppur", "Erode", "Trichy"]
CONSIGNORS = [
    ("C001", "Sri Murugan Textiles"),
    ("C002", "Kaveri Agro Foods"),
    ("C003", "Lakshmi Hardware"),
    ("C004", "Anand Spinning Mills"),
    ("C005", "Royal Electricals"),
]
CONSIGNEES = [
    ("E001", "Balaji Traders"),
    ("E002", "Ganesh Stores"),
    ("E003", "Vijay Distributors"),
    ("E004", "Saravana Enterprises"),
    ("E005", "Meenakshi Agencies"),
    ("E006", "Karthik & Co"),
]
PACKINGS = ["BALES", "BAGS", "BOXES", "BUNDLES", "CARTONS"]
CONTENTS = ["Cotton Yarn", "Rice", "Hardware", "Fabric", "Electrical Goods"]

_BASE_DATE = date(2024, 6, 1)


def build_consignments(count: int = 240) -> list[Consignment]:
    """Return count consignments spread over places, parties and dates."""
    consignments = []
    for index in range(count):
        consignor_id, consignor_name = CONSIGNORS[index % len(CONSIGNORS)]
        consignee_id, consignee_name = CONSIGNEES[(index * 7) % len(CONSIGNEES)]
        consignments.append(
            Consignment(
                gc_no=f"{1001 + index}",
                gc_date=_BASE_DATE + timedelta(days=index // 4),
                from_place="Tiruppur" if index % 3 else "Erode",
                destination=PLACES[index % len(PLACES)],
                consignor_id=consignor_id,
                consignor_name=consignor_name,
                consignee_id=consignee_id,
                consignee_name=consignee_name,
                quantity=float(1 + index % 40),
                packing=PACKINGS[index % len(PACKINGS)],
                contents=CONTENTS[(index * 3) % len(CONTENTS)],
                freight=round(450.0 + (index % 17) * 112.5, 2),
                invoice_no=f"INV-{5000 + index}",
            )
        )
    return consignments


def build_trip_sheets(
    consignments: list[Consignment], per_sheet: int = 4
) -> list[TripSheet]:
    """Group consignments into trip sheets by destination."""
    by_destination: dict[str, list[Consignment]] = {}
    for gc in consignments:
        by_destination.setdefault(gc.destination, []).append(gc)

    sheets = []
    for destination, gcs in sorted(by_destination.items()):
        for start in range(0, len(gcs), per_sheet):
            group = gcs[start : start + per_sheet]
            first = group[0]
            sheets.append(
                TripSheet(
                    mf_no=f"MF{len(sheets) + 1:04d}",
                    ts_date=max(gc.gc_date for gc in group),
                    from_place=first.from_place,
                    to_place=destination,
                    total_amount=sum(gc.freight for gc in group),
                    driver_name=f"Driver {len(sheets) % 9 + 1}",
                    lorry_no=f"TN {33 + len(sheets) % 5} AB {4100 + len(sheets)}",
                    consignor_id=first.consignor_id,
                    consignee_id=first.consignee_id,
                    gc_nos=[gc.gc_no for gc in group],
                )
            )
    return sheets


DEMO_CONSIGNMENTS = build_consignments()
DEMO_TRIP_SHEETS = build_trip_sheets(DEMO_CONSIGNMENTS)
