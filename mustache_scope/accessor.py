"""Data tree access for template resolution.

This module provides the narrow capability interface the resolver uses to
read a data tree, supporting:
- Keyed child lookup on map nodes
- Indexed, counted access on array nodes
- Truthiness tests for section suppression
- Stringification for output

The resolver never inspects node types directly; everything goes through
an accessor, so any hierarchical store can be rendered by providing one.
"""

import json
from typing import Any
from collections.abc import Mapping, Sequence


class _Missing:
    """Sentinel type for "not found" results."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return 'MISSING'

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


class DataAccessor:
    """Base class for data tree accessors.

    Subclasses implement every method for their node type. A lookup that
    finds nothing returns ``MISSING`` rather than raising.
    """

    def is_map(self, node: Any) -> bool:
        """Return True if node supports keyed child lookup."""
        raise NotImplementedError

    def is_array(self, node: Any) -> bool:
        """Return True if node supports indexed, counted iteration."""
        raise NotImplementedError

    def is_falsey(self, node: Any) -> bool:
        """Return True if node should suppress a section."""
        raise NotImplementedError

    def get_child(self, node: Any, key: str) -> Any:
        """Return the child of a map node, or MISSING.

        Raises:
            TypeError: If node is not a map
        """
        raise NotImplementedError

    def array_len(self, node: Any) -> int:
        """Return the number of elements of an array node."""
        raise NotImplementedError

    def array_get(self, node: Any, index: int) -> Any:
        """Return the element at index, or MISSING when out of range."""
        raise NotImplementedError

    def stringify(self, node: Any) -> str:
        """Return the textual representation of a node."""
        raise NotImplementedError


class PythonAccessor(DataAccessor):
    """Accessor for plain Python data (dicts, lists, scalars).

    Any ``Mapping`` is a map and any ``Sequence`` other than text or bytes
    is an array. ``False`` and ``None`` are falsey; empty strings and empty
    maps are not. Lookups never modify the data, even for mappings with a
    ``__missing__`` hook such as ``defaultdict`` or ``Counter``.

    Examples:
        >>> accessor = PythonAccessor()
        >>> accessor.get_child({'name': 'Alice'}, 'name')
        'Alice'
        >>> accessor.get_child({'name': 'Alice'}, 'age')
        MISSING
        >>> accessor.array_len(['a', 'b'])
        2
        >>> accessor.stringify(True)
        'true'
        >>> accessor.stringify({'a': [1, 2]})
        '{"a":[1,2]}'
    """

    _TEXT_TYPES = (str, bytes, bytearray)

    def is_map(self, node: Any) -> bool:
        return isinstance(node, Mapping)

    def is_array(self, node: Any) -> bool:
        return isinstance(node, Sequence) and not isinstance(node, self._TEXT_TYPES)

    def is_falsey(self, node: Any) -> bool:
        return node is MISSING or node is None or node is False

    def get_child(self, node: Any, key: str) -> Any:
        if not self.is_map(node):
            raise TypeError(f"Cannot look up {key!r} in {type(node).__name__}")
        # Membership test first: __missing__ hooks must not run or insert keys
        if key in node:
            return node[key]
        return MISSING

    def array_len(self, node: Any) -> int:
        return len(node)

    def array_get(self, node: Any, index: int) -> Any:
        if 0 <= index < len(node):
            return node[index]
        return MISSING

    def stringify(self, node: Any) -> str:
        if node is MISSING or node is None:
            return ''
        if isinstance(node, bool):
            return 'true' if node else 'false'
        if isinstance(node, str):
            return node
        if isinstance(node, (bytes, bytearray)):
            return bytes(node).decode('utf-8', errors='replace')
        if self.is_map(node) or self.is_array(node):
            container = dict(node) if self.is_map(node) else list(node)
            try:
                return json.dumps(container, separators=(',', ':'), default=str)
            except (TypeError, ValueError):
                # Non-string keys or circular references
                return str(node)
        return str(node)


# Shared default; accessors hold no state
DEFAULT_ACCESSOR = PythonAccessor()


def get_accessor(accessor: DataAccessor = None) -> DataAccessor:
    """Return the given accessor, or the default PythonAccessor.

    Examples:
        >>> get_accessor() is DEFAULT_ACCESSOR
        True
    """
    return DEFAULT_ACCESSOR if accessor is None else accessor
