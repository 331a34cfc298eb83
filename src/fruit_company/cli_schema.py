"""Schema describing important fields for CLI table rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Row = Mapping[str, Any]
ValueExtractor = Callable[[Row], Any]
ValueFormatter = Callable[[Any], str]
SortKey = Callable[[Row], Any]


@dataclass(frozen=True)
class Column:
    """Describe how to pull and format a column for Rich tables."""

    header: str
    keys: tuple[str, ...] = ()
    extractor: ValueExtractor | None = None
    formatter: ValueFormatter | None = None
    justify: str = "left"

    def render(self, row: Row) -> str:
        value: Any | None = None
        if self.keys:
            for key in self.keys:
                if key in row:
                    value = row.get(key)
                    if value is not None:
                        break
        if value is None and self.extractor:
            value = self.extractor(row)
        if value is None:
            return ""
        if self.formatter:
            formatted = self.formatter(value)
            return "" if formatted is None else str(formatted)
        return str(value)


@dataclass(frozen=True)
class TableView:
    """Describe a Rich table for a CLI command."""

    title: str
    columns: tuple[Column, ...]
    sort_key: SortKey | None = None


def _coordinate_formatter(*, precision: int = 5) -> ValueFormatter:
    def _formatter(value: Any) -> str:
        if isinstance(value, (int, float)):
            return f"{value:.{precision}f}"
        return str(value)

    return _formatter


def _lines_formatter(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(line) for line in value)
    return str(value)


def _duration_formatter(value: Any) -> str:
    if not isinstance(value, (int, float)):
        return ""
    seconds = int(value) // 1000
    return f"{seconds // 60}:{seconds % 60:02d}"


def _attribute(name: str) -> ValueExtractor:
    def _extractor(row: Row) -> Any:
        attributes = row.get("attributes")
        if isinstance(attributes, Mapping):
            return attributes.get(name)
        return None

    return _extractor


CLI_TABLE_VIEWS: dict[str, TableView] = {
    "places": TableView(
        title="Places",
        columns=(
            Column("Name", keys=("name",)),
            Column("Address", keys=("formattedAddressLines",), formatter=_lines_formatter),
            Column("Country", keys=("countryCode", "country")),
            Column("Latitude", keys=("latitude",), formatter=_coordinate_formatter(), justify="right"),
            Column("Longitude", keys=("longitude",), formatter=_coordinate_formatter(), justify="right"),
        ),
    ),
    "songs": TableView(
        title="Songs",
        columns=(
            Column("Name", extractor=_attribute("name")),
            Column("Artist", extractor=_attribute("artistName")),
            Column("Album", extractor=_attribute("albumName")),
            Column(
                "Length",
                extractor=_attribute("durationInMillis"),
                formatter=_duration_formatter,
                justify="right",
            ),
            Column("ID", keys=("id",)),
        ),
    ),
}
