from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from sortcheck.errors import OrderingError
from sortcheck.views import SortedMapView, SortedSetView, SortKey, nulls_first, nulls_last


class SubjectKind(str, Enum):
    MAP = "map"
    SET = "set"


class OrderType(str, Enum):
    NATURAL = "natural"
    NULLS_FIRST = "nulls_first"
    NULLS_LAST = "nulls_last"


class SubjectConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: SubjectKind
    entries: list[tuple[Any, Any]] = []
    elements: list[Any] = []
    order: OrderType = OrderType.NATURAL
    reverse: bool = False

    @model_validator(mode="after")
    def validate_contents(self) -> "SubjectConfig":
        if self.kind is SubjectKind.MAP:
            if self.elements:
                raise ValueError("map subjects take 'entries', not 'elements'")
            keys = [k for k, _ in self.entries]
            _require_unique(keys, "map keys")
        else:
            if self.entries:
                raise ValueError("set subjects take 'elements', not 'entries'")
            _require_unique(self.elements, "set elements")
        try:
            self.build_view().render()
        except OrderingError as exc:
            raise ValueError(f"{self.kind.value} subject cannot be ordered: {exc}") from exc
        return self

    def sort_key(self) -> SortKey | None:
        if self.order is OrderType.NULLS_FIRST:
            return nulls_first()
        if self.order is OrderType.NULLS_LAST:
            return nulls_last()
        return None

    def build_view(self) -> SortedMapView | SortedSetView:
        """Materialise the declared collection behind a read-only ordered view."""
        if self.kind is SubjectKind.MAP:
            return SortedMapView(dict(self.entries), key=self.sort_key(), reverse=self.reverse)
        return SortedSetView(set(self.elements), key=self.sort_key(), reverse=self.reverse)


def _require_unique(values: list[Any], label: str) -> None:
    try:
        distinct = set(values)
    except TypeError as exc:
        raise ValueError(f"{label} must be hashable: {exc}") from exc
    if len(distinct) != len(values):
        raise ValueError(f"{label} must be unique")


class EntrySpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    key: Any
    value: Any


class FirstKeyAssertion(BaseModel):
    model_config = ConfigDict(extra="forbid")
    first_key: Any
    weight: float = 1.0


class LastKeyAssertion(BaseModel):
    model_config = ConfigDict(extra="forbid")
    last_key: Any
    weight: float = 1.0


class FirstEntryAssertion(BaseModel):
    model_config = ConfigDict(extra="forbid")
    first_entry: EntrySpec
    weight: float = 1.0


class LastEntryAssertion(BaseModel):
    model_config = ConfigDict(extra="forbid")
    last_entry: EntrySpec
    weight: float = 1.0


class FirstElementAssertion(BaseModel):
    model_config = ConfigDict(extra="forbid")
    first_element: Any
    weight: float = 1.0


class LastElementAssertion(BaseModel):
    model_config = ConfigDict(extra="forbid")
    last_element: Any
    weight: float = 1.0


Assertion = (
    FirstKeyAssertion
    | LastKeyAssertion
    | FirstEntryAssertion
    | LastEntryAssertion
    | FirstElementAssertion
    | LastElementAssertion
)

_MAP_ASSERTIONS = (FirstKeyAssertion, LastKeyAssertion, FirstEntryAssertion, LastEntryAssertion)


def assertion_type(assertion: BaseModel) -> str:
    """Return the assertion's type key, e.g. ``first_entry``."""
    return next(name for name in type(assertion).model_fields if name != "weight")


class CheckConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    subject: str
    assertions: list[Assertion]

    @field_validator("assertions")
    @classmethod
    def assertions_must_not_be_empty(cls, v: list[Assertion]) -> list[Assertion]:
        if not v:
            raise ValueError("assertions must not be empty")
        return v


class SuiteConfig(BaseModel):
    subjects: dict[str, SubjectConfig]
    checks: list[CheckConfig]

    @field_validator("checks")
    @classmethod
    def no_commas_in_check_names(cls, v: list[CheckConfig]) -> list[CheckConfig]:
        for check in v:
            if "," in check.name:
                raise ValueError(f"Check name '{check.name}' must not contain a comma")
        return v

    @model_validator(mode="after")
    def collections_must_not_be_empty(self) -> SuiteConfig:
        if not self.subjects:
            raise ValueError("subjects must not be empty")
        if not self.checks:
            raise ValueError("checks must not be empty")
        return self

    @model_validator(mode="after")
    def checks_must_match_subjects(self) -> SuiteConfig:
        for check in self.checks:
            subject = self.subjects.get(check.subject)
            if subject is None:
                raise ValueError(
                    f"Check '{check.name}' refers to unknown subject '{check.subject}'"
                )
            for assertion in check.assertions:
                is_map_assertion = isinstance(assertion, _MAP_ASSERTIONS)
                if is_map_assertion != (subject.kind is SubjectKind.MAP):
                    raise ValueError(
                        f"Check '{check.name}': '{assertion_type(assertion)}' cannot be "
                        f"applied to {subject.kind.value} subject '{check.subject}'"
                    )
        return self


def load_config(path: Path) -> SuiteConfig:
    """Load and validate a check suite from a YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    return SuiteConfig(**raw)
