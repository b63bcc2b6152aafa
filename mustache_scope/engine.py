"""Render compiled instructions against a data tree.

This module provides a small reference walker that drives
``MustacheCallbacks``:
- ``Text``, ``Variable`` and ``Section`` instruction nodes, the compiled
  form of a template handed over by a template compiler
- ``RenderEngine``, which walks instructions and recurses into sections
- ``build`` and ``build_into``, convenience entry points

Parsing template source into instructions is left to the compiler.
"""

import io
import logging
from typing import Any, Iterable, List, Optional
from collections.abc import Mapping

from mustache_scope.callbacks import MustacheCallbacks
from mustache_scope.context import SectionContext

logger = logging.getLogger(__name__)


class Text:
    """Literal template text, written verbatim."""

    def __init__(self, text: str):
        self.text = text

    def __repr__(self) -> str:
        return f"Text({self.text!r})"


class Variable:
    """A variable reference, escaped unless ``escape`` is False."""

    def __init__(self, name: str, escape: bool = True):
        self.name = name
        self.escape = escape

    def __repr__(self) -> str:
        return f"Variable({self.name!r}, escape={self.escape})"


class Section:
    """A section guarding a list of child instructions.

    A normal section renders its children once per repetition, each time in
    a new child context. An inverted section renders its children once, in
    the current context, when the repeat count is zero.
    """

    def __init__(self, name: str, children: List[Any] = None, inverted: bool = False):
        self.name = name
        self.children = children or []
        self.inverted = inverted

    def __repr__(self) -> str:
        return (
            f"Section({self.name!r}, {self.children!r}, inverted={self.inverted})"
        )


class RenderEngine:
    """Recursive walker over compiled instructions.

    Examples:
        >>> engine = RenderEngine()
        >>> instructions = [
        ...     Text('Hello '),
        ...     Section('people', [Variable('name'), Text(';')]),
        ... ]
        >>> engine.render(instructions, {'people': [{'name': 'Ann'}, {'name': 'Bo'}]})
        'Hello Ann;Bo;'
    """

    def __init__(self, callbacks: MustacheCallbacks = None, **callback_config):
        """Initialize a RenderEngine.

        Args:
            callbacks: Callbacks to drive. Built from ``callback_config`` when
                not given.
            **callback_config: Options for MustacheCallbacks (accessor,
                escape, strict_sections)

        Raises:
            TypeError: If both ``callbacks`` and callback options are given
        """
        if callbacks is None:
            callbacks = MustacheCallbacks(**callback_config)
        elif callback_config:
            raise TypeError(
                f"Options {sorted(callback_config)} cannot be combined with callbacks"
            )
        self.callbacks = callbacks

    def render(self, instructions: Iterable[Any], data: Any) -> str:
        """Render instructions into a new string."""
        dest = io.StringIO()
        self.render_into(dest, instructions, data)
        return dest.getvalue()

    def render_into(self, dest: Any, instructions: Iterable[Any], data: Any) -> Any:
        """Render instructions, appending to an existing destination.

        Args:
            dest: Destination with a ``write(str)`` method
            instructions: Compiled instruction nodes
            data: Root of the data tree

        Returns:
            The destination

        Raises:
            RenderError: If rendering is aborted. ``dest`` keeps the output
                written before the failure. Errors raised by the accessor or
                the escape transform propagate unchanged; the cleanup hook
                runs for every failure.
        """
        context = SectionContext(data, dest=dest)
        logger.debug("Rendering template")
        try:
            self._walk(instructions, context)
        except Exception as e:
            logger.debug(f"Rendering aborted: {e}")
            self.callbacks.on_formatting_error(context)
            raise
        return dest

    def _walk(self, instructions: Iterable[Any], context: SectionContext) -> None:
        for node in instructions:
            if isinstance(node, Text):
                self.callbacks.on_text(context, node.text)
            elif isinstance(node, Variable):
                self.callbacks.on_arg(context, node.name, node.escape)
            elif isinstance(node, Section):
                self._visit_section(node, context)
            else:
                raise TypeError(f"Unknown instruction: {node!r}")

    def _visit_section(self, section: Section, context: SectionContext) -> None:
        count = self.callbacks.on_section_test(context, section.name, section.inverted)
        if section.inverted:
            if count == 0:
                self._walk(section.children, context)
            return
        for index in range(count):
            child = self.callbacks.on_section_start(context, section.name, index)
            self._walk(section.children, child)


_CONFIG_KEYS = {'accessor', 'escape', 'strict_sections', 'callbacks'}


def _split_config(data: Any, kwargs: dict):
    """Separate engine options from extra data in keyword arguments.

    Raises:
        TypeError: If extra data is given for a root that is not a mapping
    """
    config = {k: v for k, v in kwargs.items() if k in _CONFIG_KEYS}
    extra = {k: v for k, v in kwargs.items() if k not in _CONFIG_KEYS}
    if data is None:
        data = extra
    elif extra:
        if not isinstance(data, Mapping):
            raise TypeError(
                f"Cannot add {sorted(extra)} to a {type(data).__name__} data root"
            )
        data = {**data, **extra}
    return data, config


def build_into(
    dest: Any,
    instructions: Iterable[Any],
    data: Any = None,
    **kwargs
) -> Any:
    """Render instructions, appending the output to ``dest``.

    Args:
        dest: Destination with a ``write(str)`` method
        instructions: Compiled instruction nodes
        data: Root of the data tree
        **kwargs: Engine options (accessor, escape, strict_sections,
            callbacks) or extra top-level data

    Returns:
        The destination

    Examples:
        >>> import io
        >>> dest = io.StringIO('> ')
        >>> _ = dest.seek(0, io.SEEK_END)
        >>> build_into(dest, [Variable('greeting')], greeting='hi').getvalue()
        '> hi'
    """
    data, config = _split_config(data, kwargs)
    return RenderEngine(**config).render_into(dest, instructions, data)


def build(
    instructions: Optional[Iterable[Any]],
    data: Any = None,
    **kwargs
) -> Optional[str]:
    """Render instructions into a new string.

    Returns None when there are no instructions to render.

    Examples:
        >>> build([Text('Nested: '), Variable('nested.item', escape=False)],
        ...       {'nested': {'item': 'dot notation success'}})
        'Nested: dot notation success'
        >>> build([Section('admin', [Text('!')], inverted=True)], admin=False)
        '!'
        >>> build(None, {}) is None
        True
    """
    if instructions is None:
        return None
    dest = io.StringIO()
    build_into(dest, instructions, data, **kwargs)
    return dest.getvalue()
