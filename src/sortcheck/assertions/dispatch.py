"""Route assertion definitions to the boundary checks."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from sortcheck.assertions.base import AssertionResult
from sortcheck.assertions.sorted_map import (
    has_first_entry,
    has_first_key,
    has_last_entry,
    has_last_key,
)
from sortcheck.assertions.sorted_set import has_first_element, has_last_element


def evaluate_assertion(
    subject: Any,
    assertion_dict: dict[str, Any] | BaseModel,
    *,
    logger: logging.Logger | None = None,
) -> AssertionResult:
    """Dispatch an assertion dict to the appropriate check.

    Supported formats:
        {"first_key": 1}
        {"last_key": "b"}
        {"first_entry": {"key": 1, "value": 0}}
        {"last_entry": {"key": 2, "value": 0}}
        {"first_element": 0}
        {"last_element": 2}

    All assertion types support an optional ``weight`` field (default 1.0)
    that controls relative importance in weighted grade computation.

    Raises ValueError for unknown assertion types.
    """
    if not assertion_dict:
        raise ValueError("Empty assertion dict")

    if isinstance(assertion_dict, BaseModel):
        assertion_dict = assertion_dict.model_dump()

    if logger is None:
        logger = logging.getLogger(__name__)

    # Extract weight before dispatching (not part of assertion logic)
    weight = assertion_dict.get("weight", 1.0)

    atype = next((k for k in assertion_dict if k != "weight"), None)
    if atype is None:
        raise ValueError("Empty assertion dict")
    value = assertion_dict[atype]

    if atype == "first_key":
        result = has_first_key(subject, value, logger=logger)
    elif atype == "last_key":
        result = has_last_key(subject, value, logger=logger)
    elif atype == "first_entry":
        result = has_first_entry(subject, value["key"], value["value"], logger=logger)
    elif atype == "last_entry":
        result = has_last_entry(subject, value["key"], value["value"], logger=logger)
    elif atype == "first_element":
        result = has_first_element(subject, value, logger=logger)
    elif atype == "last_element":
        result = has_last_element(subject, value, logger=logger)
    else:
        raise ValueError(f"Unknown assertion type: '{atype}'")

    result.weight = weight
    return result
