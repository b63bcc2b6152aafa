"""Callbacks invoked by a rendering engine while it walks a template.

``MustacheCallbacks`` is the contract between a template walker and the
data tree:
- ``on_text``: literal template text
- ``on_arg``: variable references (escaped or raw)
- ``on_section_test``: how many times a section renders
- ``on_section_start``: the context for one iteration of a section
- ``on_formatting_error``: cleanup after a failed render
"""

import logging
from typing import Callable

from mustache_scope.accessor import MISSING, DataAccessor, get_accessor
from mustache_scope.context import SectionContext
from mustache_scope.resolver import resolve
from mustache_scope.sections import (
    SectionResolutionError,
    section_count,
    section_focus,
)

logger = logging.getLogger(__name__)


_ESCAPED_CHARS = '&<>"\'/\\`= '
_ESCAPE_TABLE = {ord(c): f'&#{ord(c)};' for c in _ESCAPED_CHARS}


def escape_html(text: str) -> str:
    """Escape text for safe inclusion in HTML using numeric references.

    Examples:
        >>> escape_html('User 0')
        'User&#32;0'
        >>> escape_html('<b>')
        '&#60;b&#62;'
    """
    return text.translate(_ESCAPE_TABLE)


class MustacheCallbacks:
    """Resolution callbacks for a mustache-style rendering engine.

    Examples:
        >>> import io
        >>> callbacks = MustacheCallbacks()
        >>> ctx = SectionContext({'users': [{'name': 'Ann'}]}, dest=io.StringIO())
        >>> callbacks.on_section_test(ctx, 'users')
        1
        >>> inner = callbacks.on_section_start(ctx, 'users', 0)
        >>> callbacks.on_arg(inner, 'name')
        >>> ctx.dest.getvalue()
        'Ann'
    """

    def __init__(
        self,
        accessor: DataAccessor = None,
        escape: Callable[[str], str] = escape_html,
        strict_sections: bool = True
    ):
        """Initialize the callbacks.

        Args:
            accessor: Data accessor (defaults to PythonAccessor)
            escape: Transform applied to escaped variable output
            strict_sections: If True, entering a section whose name does not
                resolve raises SectionResolutionError. If False, the section
                is entered with an empty focus instead.
        """
        self.accessor = get_accessor(accessor)
        self.escape = escape
        self.strict_sections = strict_sections

    def on_text(self, context: SectionContext, text: str) -> None:
        """Append literal template text to the destination."""
        context.dest.write(text)

    def on_arg(self, context: SectionContext, name: str, escape: bool = True) -> None:
        """Resolve a variable reference and write its value.

        Missing names and values that stringify to nothing write nothing.
        """
        value = resolve(context, name, self.accessor)
        if value is MISSING:
            logger.debug(f"Variable '{name}' is missing; writing nothing")
            return
        text = self.accessor.stringify(value)
        if not text:
            return
        if escape and self.escape is not None:
            text = self.escape(text)
        context.dest.write(text)

    def on_section_test(
        self,
        context: SectionContext,
        name: str,
        inverted: bool = False
    ) -> int:
        """Return how many times the named section renders.

        Inverted sections get the same count; the engine renders them when
        it is zero.
        """
        return section_count(resolve(context, name, self.accessor), self.accessor)

    def on_section_start(
        self,
        context: SectionContext,
        name: str,
        index: int
    ) -> SectionContext:
        """Build the context for iteration ``index`` of the named section.

        Args:
            context: Context the section is entered from
            name: Section name
            index: Zero-based iteration index

        Returns:
            New child context focused on the iteration's node

        Raises:
            SectionResolutionError: If the name does not resolve and
                strict_sections is True
        """
        node = resolve(context, name, self.accessor)
        if node is MISSING:
            if self.strict_sections:
                logger.warning(f"Section '{name}' could not be resolved")
                raise SectionResolutionError(name, context.depth)
            logger.warning(f"Section '{name}' could not be resolved; entering with empty focus")
            return context.child(MISSING)
        return context.child(section_focus(node, index, self.accessor))

    def on_formatting_error(self, context: SectionContext) -> None:
        """Clean up after a render pass was aborted.

        Nothing is held between calls, so this only records the abort.
        """
        logger.debug(f"Render aborted at depth {context.depth}")
