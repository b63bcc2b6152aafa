"""Resolve mustache template names and sections against nested data.

This package provides the resolution layer of a logic-less template
renderer, supporting:
- Scope-chain lookup (innermost section wins, falling back to ancestors)
- Dotted names (``nested.item``) with structural descent
- Section repeat counts for arrays, maps, scalars and falsey values
- Inverted sections
- Pluggable data accessors and escaping

Basic usage:
    >>> from mustache_scope import build, Section, Text, Variable
    >>> instructions = [
    ...     Section('users', [Variable('id'), Text('. '), Variable('name', escape=False), Text('\\n')]),
    ... ]
    >>> print(build(instructions, {'users': [{'id': 0, 'name': 'User 0'}]}), end='')
    0. User 0

Driving the callbacks directly:
    >>> import io
    >>> from mustache_scope import MustacheCallbacks, SectionContext
    >>> callbacks = MustacheCallbacks()
    >>> root = SectionContext({'title': 'Hi there'}, dest=io.StringIO())
    >>> callbacks.on_arg(root, 'title', escape=True)
    >>> root.dest.getvalue()
    'Hi&#32;there'
"""

from mustache_scope.accessor import (
    MISSING,
    DataAccessor,
    PythonAccessor,
    get_accessor,
)

from mustache_scope.context import SectionContext

from mustache_scope.resolver import (
    find_in_scope,
    resolve,
)

from mustache_scope.sections import (
    section_count,
    section_focus,
    RenderError,
    SectionResolutionError,
)

from mustache_scope.callbacks import (
    MustacheCallbacks,
    escape_html,
)

from mustache_scope.engine import (
    Text,
    Variable,
    Section,
    RenderEngine,
    build,
    build_into,
)

__version__ = "0.1.0"  # Keep in sync with package version

__all__ = [
    # Data access
    "MISSING",
    "DataAccessor",
    "PythonAccessor",
    "get_accessor",
    # Scope chain
    "SectionContext",
    # Resolution
    "find_in_scope",
    "resolve",
    # Sections
    "section_count",
    "section_focus",
    # Callbacks
    "MustacheCallbacks",
    "escape_html",
    # Rendering
    "Text",
    "Variable",
    "Section",
    "RenderEngine",
    "build",
    "build_into",
    # Exceptions
    "RenderError",
    "SectionResolutionError",
]
