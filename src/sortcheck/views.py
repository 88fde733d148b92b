"""Read-only ordered views over caller-owned mappings and sets.

The diagnosers only ever talk to a collection through ``OrderedMapView`` or
``OrderedSetView``. The adapters here hold the caller's object by reference
and derive ordering on demand, so they never copy or mutate it.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from sortcheck.errors import OrderingError

SortKey = Callable[[Any], Any]


def natural(value: Any) -> Any:
    return value


def nulls_first(key: SortKey | None = None) -> SortKey:
    """Rank ``None`` before every other value, then order by ``key``."""
    inner = key or natural

    def _rank(value: Any) -> tuple[bool, Any]:
        if value is None:
            return (False, None)
        return (True, inner(value))

    return _rank


def nulls_last(key: SortKey | None = None) -> SortKey:
    """Rank ``None`` after every other value, then order by ``key``."""
    inner = key or natural

    def _rank(value: Any) -> tuple[bool, Any]:
        if value is None:
            return (True, None)
        return (False, inner(value))

    return _rank


def render(value: Any) -> str:
    return str(value)


def render_entry(key: Any, value: Any) -> str:
    return f"{render(key)}={render(value)}"


def render_list(values: Iterable[Any]) -> str:
    return "[" + ", ".join(render(v) for v in values) + "]"


@runtime_checkable
class OrderedMapView(Protocol):
    """Lookup and ordered iteration over a key-sorted mapping."""

    @property
    def actual(self) -> Any: ...

    def is_empty(self) -> bool: ...

    def first_key(self) -> Any: ...

    def last_key(self) -> Any: ...

    def contains_key(self, key: Any) -> bool: ...

    def get(self, key: Any) -> Any: ...

    def keys_for_value(self, value: Any) -> list[Any]: ...

    def render(self) -> str: ...


@runtime_checkable
class OrderedSetView(Protocol):
    """Membership and ordered iteration over a sorted set."""

    @property
    def actual(self) -> Any: ...

    def is_empty(self) -> bool: ...

    def first(self) -> Any: ...

    def last(self) -> Any: ...

    def contains(self, element: Any) -> bool: ...

    def render(self) -> str: ...


class _Ordered:
    """Shared ordering helpers for the adapters below."""

    def __init__(self, key: SortKey | None, reverse: bool) -> None:
        self._key = key or natural
        self._reverse = reverse

    def _sorted(self, values: Iterable[Any]) -> list[Any]:
        try:
            return sorted(values, key=self._key, reverse=self._reverse)
        except TypeError as exc:
            raise OrderingError(f"collection cannot be ordered: {exc}") from exc

    def _require_comparable(self, probe: Any, anchors: Iterable[Any]) -> None:
        """Raise OrderingError unless ``probe`` ranks against every anchor."""
        try:
            ranked = self._key(probe)
            for anchor in anchors:
                ranked < self._key(anchor)  # noqa: B015
        except TypeError as exc:
            raise OrderingError(
                f"{render(probe)} cannot be ordered against the collection: {exc}"
            ) from exc


class SortedMapView(_Ordered):
    """Present a plain ``Mapping`` as a key-sorted mapping.

    Args:
        mapping: The caller's mapping; kept by reference.
        key: Sort key applied to mapping keys (as in ``sorted``). Defaults to
            natural ordering.
        reverse: Order keys descending instead of ascending.
    """

    def __init__(
        self,
        mapping: Mapping[Any, Any],
        key: SortKey | None = None,
        reverse: bool = False,
    ) -> None:
        super().__init__(key, reverse)
        self._mapping = mapping

    @property
    def actual(self) -> Mapping[Any, Any]:
        return self._mapping

    def keys(self) -> list[Any]:
        return self._sorted(self._mapping.keys())

    def is_empty(self) -> bool:
        return len(self._mapping) == 0

    def first_key(self) -> Any:
        return self.keys()[0]

    def last_key(self) -> Any:
        return self.keys()[-1]

    def contains_key(self, key: Any) -> bool:
        if self.is_empty():
            return False
        self._require_comparable(key, self._mapping.keys())
        return key in self._mapping

    def get(self, key: Any) -> Any:
        return self._mapping[key]

    def keys_for_value(self, value: Any) -> list[Any]:
        return [k for k in self.keys() if self._mapping[k] == value]

    def render(self) -> str:
        return "{" + ", ".join(render_entry(k, self._mapping[k]) for k in self.keys()) + "}"

    def __repr__(self) -> str:
        return f"SortedMapView({self.render()})"


class SortedSetView(_Ordered):
    """Present a collection of unique elements as a sorted set."""

    def __init__(
        self,
        elements: Collection[Any],
        key: SortKey | None = None,
        reverse: bool = False,
    ) -> None:
        super().__init__(key, reverse)
        self._elements = elements

    @property
    def actual(self) -> Collection[Any]:
        return self._elements

    def elements(self) -> list[Any]:
        return self._sorted(self._elements)

    def is_empty(self) -> bool:
        return len(self._elements) == 0

    def first(self) -> Any:
        return self.elements()[0]

    def last(self) -> Any:
        return self.elements()[-1]

    def contains(self, element: Any) -> bool:
        if self.is_empty():
            return False
        self._require_comparable(element, self._elements)
        return element in self._elements

    def render(self) -> str:
        return render_list(self.elements())

    def __repr__(self) -> str:
        return f"SortedSetView({self.render()})"


def as_map_view(subject: OrderedMapView | Mapping[Any, Any]) -> OrderedMapView:
    if isinstance(subject, OrderedMapView):
        return subject
    if isinstance(subject, Mapping):
        return SortedMapView(subject)
    raise TypeError(f"expected a mapping or OrderedMapView, got {type(subject).__name__}")


def as_set_view(subject: OrderedSetView | Collection[Any]) -> OrderedSetView:
    if isinstance(subject, OrderedSetView):
        return subject
    if isinstance(subject, Collection) and not isinstance(subject, (Mapping, str, bytes)):
        return SortedSetView(subject)
    raise TypeError(f"expected a set or OrderedSetView, got {type(subject).__name__}")
