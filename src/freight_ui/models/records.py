"""
Freight record models and the list resources that serve them.

Records mirror the JSON returned by the operations backend:

    Consignment (GC entry)      keyed by gcNo
    TripSheet (manifest)        keyed by mfNo

Each list screen is bound to a ListResource describing its endpoint, the
identifier field used for selection, and the key the bulk print endpoint
expects for explicit identifier lists.

Payloads are read with python-benedict keypaths so missing or null nested
values fall back to defaults instead of raising KeyError.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, List, Mapping

from benedict import benedict

from freight_ui.utils import format_currency, parse_date


def _text(b: benedict, keypath: str) -> str:
    value = b.get(keypath)
    return "" if value is None else str(value).strip()


def _number(b: benedict, keypath: str) -> float:
    try:
        return float(b.get(keypath) or 0)
    except (TypeError, ValueError):
        return 0.0


def _format_date(value: date | None) -> str:
    return value.strftime("%d/%m/%Y") if value else "N/A"


@dataclass(slots=True)
class Consignment:
    """A consignment note (GC entry)."""

    gc_no: str
    gc_date: date | None
    from_place: str
    destination: str
    consignor_id: str
    consignor_name: str
    consignee_id: str
    consignee_name: str
    quantity: float = 0
    packing: str = ""
    contents: str = ""
    freight: float = 0.0
    invoice_no: str = ""

    @property
    def record_id(self) -> str:
        return self.gc_no

    @property
    def record_date(self) -> date | None:
        return self.gc_date

    def searchable_terms(self) -> List[str]:
        """Return the terms that should be matched when filtering."""
        terms = [
            self.gc_no,
            self.from_place,
            self.destination,
            self.consignor_name,
            self.consignee_name,
            self.contents,
            self.packing,
            self.invoice_no,
        ]
        return [value.lower() for value in terms if value]

    def to_row(self) -> dict[str, str]:
        """Display strings for the list table."""
        return {
            "id": self.gc_no,
            "number": self.gc_no,
            "date": _format_date(self.gc_date),
            "route": f"{self.from_place} -> {self.destination}",
            "party": f"{self.consignor_name} / {self.consignee_name}",
            "detail": f"{self.quantity:g} {self.packing} {self.contents}".strip(),
            "amount": format_currency(self.freight),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Consignment":
        b = benedict(dict(payload), keypath_separator=".")
        return cls(
            gc_no=_text(b, "gcNo") or _text(b, "id"),
            gc_date=parse_date(_text(b, "gcDate") or _text(b, "date")),
            from_place=_text(b, "from"),
            destination=_text(b, "destination"),
            consignor_id=_text(b, "consignorId"),
            consignor_name=_text(b, "consignor.name") or _text(b, "consignorName"),
            consignee_id=_text(b, "consigneeId"),
            consignee_name=_text(b, "consignee.name") or _text(b, "consigneeName"),
            quantity=_number(b, "quantity"),
            packing=_text(b, "packing"),
            contents=_text(b, "contents"),
            freight=_number(b, "freight"),
            invoice_no=_text(b, "invoiceNo"),
        )


@dataclass(slots=True)
class TripSheet:
    """A trip sheet (loading manifest) carrying several consignments."""

    mf_no: str
    ts_date: date | None
    from_place: str
    to_place: str
    total_amount: float = 0.0
    driver_name: str = ""
    lorry_no: str = ""
    consignor_id: str = ""
    consignee_id: str = ""
    gc_nos: List[str] = field(default_factory=list)

    @property
    def record_id(self) -> str:
        return self.mf_no

    @property
    def record_date(self) -> date | None:
        return self.ts_date

    # Trip sheets filter on to_place; expose it under the shared name.
    @property
    def destination(self) -> str:
        return self.to_place

    def searchable_terms(self) -> List[str]:
        """Return the terms that should be matched when filtering."""
        terms = [
            self.mf_no,
            self.from_place,
            self.to_place,
            self.driver_name,
            self.lorry_no,
            *self.gc_nos,
        ]
        return [value.lower() for value in terms if value]

    def to_row(self) -> dict[str, str]:
        """Display strings for the list table."""
        return {
            "id": self.mf_no,
            "number": self.mf_no,
            "date": _format_date(self.ts_date),
            "route": f"{self.from_place} -> {self.to_place}",
            "party": " ".join(p for p in (self.driver_name, self.lorry_no) if p),
            "detail": f"{len(self.gc_nos)} GC",
            "amount": format_currency(self.total_amount),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TripSheet":
        b = benedict(dict(payload), keypath_separator=".")
        return cls(
            mf_no=_text(b, "mfNo") or _text(b, "id"),
            ts_date=parse_date(_text(b, "tsDate")),
            from_place=_text(b, "fromPlace"),
            to_place=_text(b, "toPlace"),
            total_amount=_number(b, "totalAmount"),
            driver_name=_text(b, "driverName"),
            lorry_no=_text(b, "lorryNo"),
            consignor_id=_text(b, "consignorid"),
            consignee_id=_text(b, "consigneeid"),
            gc_nos=[
                str(item.get("gcNo"))
                for item in b.get("items") or []
                if isinstance(item, Mapping) and item.get("gcNo")
            ],
        )


Record = Consignment | TripSheet


@dataclass(frozen=True)
class ListResource:
    """
    Describes one list screen's backend resource.

    Attributes:
        name: Short key used for lookup and logging.
        title: Screen heading.
        path: Paged search endpoint.
        id_field: Identifier field in payloads and for selection.
        ids_key: Key holding explicit identifier lists in bulk requests.
        parse: Converts a payload dictionary into a record.
    """

    name: str
    title: str
    path: str
    id_field: str
    ids_key: str
    parse: Callable[[Mapping[str, Any]], Record]

    @property
    def bulk_path(self) -> str:
        return f"{self.path}/print-data"

    def item_path(self, record_id: str) -> str:
        return f"{self.path}/{record_id}"


RESOURCES: dict[str, ListResource] = {
    "gc": ListResource(
        name="gc",
        title="GC Entries",
        path="/operations/gc",
        id_field="gcNo",
        ids_key="gcNos",
        parse=Consignment.from_payload,
    ),
    "loading": ListResource(
        name="loading",
        title="Loading Sheet",
        path="/operations/loading-sheet",
        id_field="gcNo",
        ids_key="gcNos",
        parse=Consignment.from_payload,
    ),
    "tripsheet": ListResource(
        name="tripsheet",
        title="Trip Sheets",
        path="/operations/tripsheet",
        id_field="mfNo",
        ids_key="mfNos",
        parse=TripSheet.from_payload,
    ),
}


def get_resource(name: str) -> ListResource:
    """Return the list resource registered under name."""
    try:
        return RESOURCES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown list resource: {name}") from exc
