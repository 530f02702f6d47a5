"""Filterable text view over a package report."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from packaging.version import InvalidVersion, Version

from .models import PackageRecord
from .report import escape_surrogates, load_report


FilterCallback = Callable[[list[PackageRecord]], None]

SORT_KEYS = ("name", "dependencies", "version")

QUIT_COMMAND = ":q"


def _parsed_version(record: PackageRecord) -> Version | None:
    try:
        return Version(record.version)
    except InvalidVersion:
        return None


def sort_records(records: Iterable[PackageRecord], sort_key: str) -> list[PackageRecord]:
    """Order records for display.

    ``name`` keeps report order, ``dependencies`` puts the packages with the
    most dependencies first, ``version`` puts the newest versions first with
    unparsable versions at the end.
    """
    items = list(records)
    if sort_key == "name":
        return items
    if sort_key == "dependencies":
        return sorted(items, key=lambda r: r.num_dependencies, reverse=True)
    if sort_key == "version":
        keyed = [(_parsed_version(r), r) for r in items]
        newest = sorted((p for p in keyed if p[0] is not None), key=lambda p: p[0], reverse=True)
        return [r for _, r in newest] + [r for v, r in keyed if v is None]
    raise ValueError(f"Unknown sort key: {sort_key!r} (expected one of {', '.join(SORT_KEYS)})")


def matches(record: PackageRecord, search_term: str) -> bool:
    return search_term.lower() in record.name.lower()


class PackageListView:
    """Holds a report and the current name filter.

    ``on_filtered`` is called with the filtered records every time the
    search term changes.
    """

    def __init__(
        self,
        records: Sequence[PackageRecord],
        on_filtered: FilterCallback | None = None,
        sort_key: str = "name",
    ) -> None:
        if sort_key not in SORT_KEYS:
            raise ValueError(
                f"Unknown sort key: {sort_key!r} (expected one of {', '.join(SORT_KEYS)})"
            )
        self._records = list(records)
        self._on_filtered = on_filtered
        self._search_term = ""
        self.sort_key = sort_key

    @classmethod
    def from_path(
        cls,
        path: Path,
        on_filtered: FilterCallback | None = None,
        sort_key: str = "name",
    ) -> PackageListView:
        return cls(load_report(path), on_filtered=on_filtered, sort_key=sort_key)

    @property
    def records(self) -> list[PackageRecord]:
        return list(self._records)

    @property
    def search_term(self) -> str:
        return self._search_term

    def set_search_term(self, text: str) -> None:
        if text == self._search_term:
            return
        self._search_term = text
        if self._on_filtered is not None:
            self._on_filtered(self.filtered)

    @property
    def filtered(self) -> list[PackageRecord]:
        selected = [r for r in self._records if matches(r, self._search_term)]
        return sort_records(selected, self.sort_key)

    def render(self) -> str:
        lines: list[str] = []
        for record in self.filtered:
            lines.append(f"{record.name}: {record.num_dependencies}")
            details = {
                "dependencies": record.dependencies,
                "devDependencies": record.dev_dependencies,
                "version": record.version,
            }
            lines.append(escape_surrogates(json.dumps(details, indent=1, ensure_ascii=False)))
            lines.append("")
        return "\n".join(lines)


def run_interactive(
    view: PackageListView,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """Prompt for search terms until EOF or ``:q``, rendering each result."""
    write(view.render())
    while True:
        try:
            text = read("search> ")
        except EOFError:
            break
        if text.strip() == QUIT_COMMAND:
            break
        view.set_search_term(text.strip())
        write(view.render() or f"No packages match {view.search_term!r}")
