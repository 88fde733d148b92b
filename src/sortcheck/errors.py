from __future__ import annotations


class OrderingError(TypeError):
    """An expected key or element cannot be ranked under the collection's order."""
