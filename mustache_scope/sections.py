"""Section expansion: repeat counts and per-iteration focus.

A section renders zero, one, or many times depending on the value its name
resolves to. This module only reports counts and focus nodes; the
rendering engine decides what to do with them (inverted sections render
when the count is zero).
"""

from typing import Any

from mustache_scope.accessor import MISSING, DataAccessor, get_accessor


class RenderError(Exception):
    """Base class for errors that abort a render pass."""
    pass


class SectionResolutionError(RenderError):
    """Raised when a section is entered but its name resolves to nothing.

    Attributes:
        name: The section name that failed to resolve
        depth: Depth of the context the section was entered from
    """

    def __init__(self, name: str, depth: int = 0):
        self.name = name
        self.depth = depth
        super().__init__(
            f"Section '{name}' could not be resolved (depth {depth})"
        )


def section_count(node: Any, accessor: DataAccessor = None) -> int:
    """Compute how many times a section renders for a resolved node.

    Args:
        node: Resolved node (or MISSING)
        accessor: Data accessor (defaults to PythonAccessor)

    Returns:
        0 for MISSING, falsey nodes and empty arrays; the array length for
        arrays; 1 for any other value

    Examples:
        >>> section_count(['a', 'b', 'c'])
        3
        >>> section_count({'key': 'value'})
        1
        >>> section_count(MISSING), section_count(False), section_count([])
        (0, 0, 0)
        >>> section_count('')
        1
    """
    accessor = get_accessor(accessor)
    if node is MISSING or accessor.is_falsey(node):
        return 0
    if accessor.is_array(node):
        return accessor.array_len(node)
    return 1


def section_focus(node: Any, index: int, accessor: DataAccessor = None) -> Any:
    """Return the focus node for one iteration of a section.

    Args:
        node: Resolved section node
        index: Zero-based iteration index
        accessor: Data accessor (defaults to PythonAccessor)

    Returns:
        The array element at ``index`` for arrays, otherwise the node itself

    Examples:
        >>> section_focus([{'id': 0}, {'id': 1}], 1)
        {'id': 1}
        >>> section_focus({'id': 7}, 0)
        {'id': 7}
    """
    accessor = get_accessor(accessor)
    if accessor.is_array(node):
        return accessor.array_get(node, index)
    return node
