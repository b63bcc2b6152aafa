"""Name resolution against a scope chain.

This module resolves template names (``user``, ``user.address.city``) to
data nodes:
- Undotted names are searched in every context of the scope chain,
  innermost first.
- Dotted names resolve their first segment through the scope chain and
  descend from there by direct child lookup only.

A name that cannot be resolved yields ``MISSING``; lookups never raise.
"""

import logging
from typing import Any

from mustache_scope.accessor import MISSING, DataAccessor, get_accessor
from mustache_scope.context import SectionContext

logger = logging.getLogger(__name__)


def find_in_scope(
    context: SectionContext,
    key: str,
    accessor: DataAccessor = None
) -> Any:
    """Look up a single key through the scope chain.

    The walk starts at ``context`` and follows parent links to the root,
    returning the value from the first context whose focus is a map
    containing ``key``. Contexts focused on non-map nodes are skipped.

    Args:
        context: Innermost context of the scope chain
        key: Key to look up (dots are not interpreted)
        accessor: Data accessor (defaults to PythonAccessor)

    Returns:
        The value found, or MISSING

    Examples:
        >>> root = SectionContext({'name': 'root', 'title': 'T'})
        >>> inner = root.child({'name': 'inner'})
        >>> find_in_scope(inner, 'name')
        'inner'
        >>> find_in_scope(inner, 'title')
        'T'
        >>> find_in_scope(inner.child(['not', 'a', 'map']), 'title')
        'T'
        >>> find_in_scope(inner, 'absent')
        MISSING
    """
    accessor = get_accessor(accessor)
    for ctx in context.chain():
        if not accessor.is_map(ctx.focus):
            continue
        value = accessor.get_child(ctx.focus, key)
        if value is not MISSING:
            return value
    return MISSING


def _descend(node: Any, path: str, accessor: DataAccessor) -> Any:
    """Follow a dotted path from node by direct child lookup.

    At each level the whole remaining path is tried as a literal key before
    it is split, so map keys that contain dots stay reachable.
    """
    while True:
        if not accessor.is_map(node):
            return MISSING
        value = accessor.get_child(node, path)
        if value is not MISSING:
            return value
        segment, dot, path = path.partition('.')
        if not dot:
            return MISSING
        node = accessor.get_child(node, segment)
        if node is MISSING:
            return MISSING


def resolve(
    context: SectionContext,
    name: str,
    accessor: DataAccessor = None
) -> Any:
    """Resolve a (possibly dotted) template name.

    Resolution happens in two phases:
    1. The whole name is looked up as one key through the scope chain.
    2. Otherwise, for a dotted name, the part before the first dot is looked
       up through the scope chain and the rest is followed by structural
       descent. Ancestor contexts are never consulted after the first segment.

    Args:
        context: Innermost context of the scope chain
        name: Template name, e.g. ``'id'`` or ``'nested.item'``
        accessor: Data accessor (defaults to PythonAccessor)

    Returns:
        The resolved node, or MISSING

    Examples:
        >>> data = {'user': {'address': {'city': 'NYC'}}, 'city': 'LA'}
        >>> root = SectionContext(data)
        >>> resolve(root, 'user.address.city')
        'NYC'
        >>> resolve(root.child({'name': 'Bob'}), 'city')
        'LA'
        >>> resolve(root, 'user.city')
        MISSING
    """
    accessor = get_accessor(accessor)

    value = find_in_scope(context, name, accessor)
    if value is not MISSING:
        return value

    prefix, dot, rest = name.partition('.')
    if not dot:
        logger.debug(f"Name '{name}' not found in scope chain")
        return MISSING

    head = find_in_scope(context, prefix, accessor)
    if head is MISSING:
        logger.debug(f"Prefix '{prefix}' of '{name}' not found in scope chain")
        return MISSING

    value = _descend(head, rest, accessor)
    if value is MISSING:
        logger.debug(f"Path '{rest}' not found under '{prefix}'")
    return value
