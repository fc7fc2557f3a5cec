"""Query parameter records.

Each parameter record states its own canonical key/value pairs through
``query_items()``. The pydantic base class derives them from the declared
fields and their aliases; records with unusual encodings override it.
"""

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


@runtime_checkable
class SupportsQueryItems(Protocol):
    """Anything that can render itself as query string pairs."""

    def query_items(self) -> list[tuple[str, str]]: ...


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class QueryOptions(BaseModel):
    """Base class for list/search options sent as URL query parameters.

    Fields set to None are omitted. List values repeat the key once per
    element. Field aliases become the query keys.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def query_items(self) -> list[tuple[str, str]]:
        items: list[tuple[str, str]] = []
        for key, value in self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
        ).items():
            if isinstance(value, list):
                items.extend((key, _render(element)) for element in value)
            else:
                items.append((key, _render(value)))
        return items
