# SPDX-FileCopyrightText: 2026 Christian-Hauke Poensgen
# SPDX-FileCopyrightText: 2026 Maximilian Dolling
# SPDX-FileContributor: AUTHORS.md
#
# SPDX-License-Identifier: BSD-3-Clause

"""In-memory filtering, sorting and pagination of entity listings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from servicebus_console.shared.schemas.requests import ListQuery

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

__all__ = ["ListQuery", "Page", "apply_query", "sort_items"]


@dataclass(slots=True)
class Page:
    """One page of a filtered listing plus the filtered total."""

    items: list[Mapping[str, Any]]
    total: int

    def as_dict(self) -> dict[str, object]:
        """Return the wire representation."""
        return {"items": self.items, "total": self.total}


def _matches(row: Mapping[str, Any], field: str | None, needle: str) -> bool:
    if not needle or field is None:
        return True
    value = row.get(field)
    return needle in str(value if value is not None else "").lower()


def _sort_group(value: object) -> tuple[int, object]:
    if isinstance(value, bool | int | float):
        return 0, value
    if isinstance(value, str):
        return 1, value
    if isinstance(value, datetime):
        return 2, value.timestamp()
    return 3, str(value)


def sort_items(items: Sequence[Mapping[str, Any]], key: str, order: str) -> list[Mapping[str, Any]]:
    """Sort rows on a field; strings compare lexicographically and missing values go last."""
    present = [row for row in items if row.get(key) is not None]
    missing = [row for row in items if row.get(key) is None]
    present.sort(key=lambda row: _sort_group(row[key]), reverse=order == "desc")
    return present + missing


def apply_query(
    items: Sequence[Mapping[str, Any]],
    query: ListQuery,
    *,
    name_field: str = "name",
    secondary_field: str | None = None,
) -> Page:
    """Filter, sort and paginate rows according to ``query``."""
    name_needle = query.name_filter.strip().lower()
    secondary_needle = query.secondary_filter.strip().lower()
    filtered = [
        row
        for row in items
        if _matches(row, name_field, name_needle) and _matches(row, secondary_field, secondary_needle)
    ]
    if query.order_by:
        filtered = sort_items(filtered, query.order_by, query.order)
    window = filtered[query.skip : query.skip + query.top]
    return Page(items=list(window), total=len(filtered))
