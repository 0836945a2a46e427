"""
Filter criteria for the freight list screens.

FilterCriteria is the immutable record of every active filter dimension on a
list screen: free-text search, an inclusive date range (with the preset that
produced it), and the categorical destination/consignor/consignee filters.
Values compare structurally, so two screens (or a screen and a select-all
snapshot) holding equal criteria are interchangeable.

Only non-default dimensions are sent to the backend; a FilterCriteria with
every field at its default matches the entire result universe.
"""

from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Any, Iterable, Mapping

from freight_ui.lib import objects
from freight_ui.utils import parse_date

DATE_PRESETS = ("all", "today", "yesterday", "week", "custom")


def _normalize_values(values: Iterable[str] | str | None) -> tuple[str, ...]:
    if not values:
        return ()
    if isinstance(values, str):
        values = [values]
    return tuple(sorted({v.strip() for v in values if v and v.strip()}))


@dataclass(frozen=True)
class FilterCriteria:
    """
    Immutable, serializable set of active filter dimensions.

    Attributes:
        search: Free-text search.
        date_filter: Date preset that produced the range (see DATE_PRESETS).
        start_date: Inclusive lower bound of the date range.
        end_date: Inclusive upper bound of the date range.
        destination: Destination equality filter.
        consignor: Consignor id equality filter.
        consignees: Consignee id membership filter (order-insensitive).
    """

    search: str = ""
    date_filter: str = "all"
    start_date: date | None = None
    end_date: date | None = None
    destination: str = ""
    consignor: str = ""
    consignees: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.date_filter not in DATE_PRESETS:
            raise ValueError(f"Unknown date filter: {self.date_filter}")
        object.__setattr__(self, "consignees", _normalize_values(self.consignees))
        object.__setattr__(self, "start_date", parse_date(self.start_date))
        object.__setattr__(self, "end_date", parse_date(self.end_date))

    @property
    def normalized_search(self) -> str:
        """Search text with whitespace collapsed."""
        return " ".join(self.search.split())

    def is_active(self) -> bool:
        """Return True when any filter dimension is set to a non-default value."""
        return bool(
            self.normalized_search
            or self.date_filter != "all"
            or self.start_date
            or self.end_date
            or self.destination
            or self.consignor
            or self.consignees
        )

    def active_dimension_label(self) -> str | None:
        """Return the label of the first non-default categorical dimension."""
        if self.consignor:
            return "Consignor"
        if self.destination:
            return "Destination"
        if self.consignees:
            return "Consignee"
        if self.normalized_search:
            return "Search"
        if self.date_filter != "all" or self.start_date or self.end_date:
            return "Date"
        return None

    def to_params(self) -> dict[str, Any]:
        """
        Build the outgoing query parameters.

        Dimensions at their default value are omitted rather than sent as
        explicit "match everything" values. The consignee filter is a list
        and is rendered as a repeated parameter by the HTTP client.
        """
        params: dict[str, Any] = {}
        if self.normalized_search:
            params["search"] = self.normalized_search
        if self.date_filter != "all":
            params["filterType"] = self.date_filter
        if self.start_date:
            params["startDate"] = self.start_date.isoformat()
        if self.end_date:
            params["endDate"] = self.end_date.isoformat()
        if self.destination:
            params["destination"] = self.destination
        if self.consignor:
            params["consignor"] = self.consignor
        if self.consignees:
            params["consignee"] = list(self.consignees)
        return params

    def replace(self, **changes: Any) -> "FilterCriteria":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    def with_date_preset(
        self, kind: str, today: date | None = None
    ) -> "FilterCriteria":
        """
        Return a copy with the date range computed from a preset.

        Args:
            kind: One of all, today, yesterday, week.
            today: Reference day, defaults to date.today().
        """
        today = today or date.today()
        if kind == "all":
            start, end = None, None
        elif kind == "today":
            start, end = today, today
        elif kind == "yesterday":
            start = end = today - timedelta(days=1)
        elif kind == "week":
            start, end = today - timedelta(days=7), today
        else:
            raise ValueError(f"Unknown date preset: {kind}")
        return replace(self, date_filter=kind, start_date=start, end_date=end)

    def with_custom_range(
        self, start: date | str | None, end: date | str | None
    ) -> "FilterCriteria":
        """Return a copy with an explicit inclusive date range."""
        return replace(self, date_filter="custom", start_date=start, end_date=end)

    def key(self) -> str:
        """Stable digest of the criteria, used in log lines."""
        return objects.hash(self.to_dict()).hexdigest()[:12]

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dictionary."""
        return {
            "search": self.search,
            "date_filter": self.date_filter,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "destination": self.destination,
            "consignor": self.consignor,
            "consignees": list(self.consignees),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "FilterCriteria":
        """Deserialize from dictionary."""
        if not data:
            return cls()
        return cls(
            search=data.get("search", "") or "",
            date_filter=data.get("date_filter", "all") or "all",
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            destination=data.get("destination", "") or "",
            consignor=data.get("consignor", "") or "",
            consignees=data.get("consignees") or (),
        )
