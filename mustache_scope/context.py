"""Section contexts: the scope chain used for name resolution.

Each ``SectionContext`` is one level of template nesting. Contexts form an
immutable, singly-linked chain from the innermost open section back to the
document root; the rendering engine builds a new link when it enters a
section and simply drops it on exit.
"""

from typing import Any, Iterator, Optional


class SectionContext:
    """One level of template nesting during a render pass.

    A context holds the data node currently in focus, a reference to the
    enclosing context, and the destination buffer shared by the whole
    render pass. Contexts are never mutated once built.

    Examples:
        >>> import io
        >>> root = SectionContext({'title': 'Users'}, dest=io.StringIO())
        >>> inner = root.child({'name': 'Alice'})
        >>> inner.focus
        {'name': 'Alice'}
        >>> inner.parent is root
        True
        >>> inner.depth
        1
        >>> [ctx.focus for ctx in inner.chain()]
        [{'name': 'Alice'}, {'title': 'Users'}]
    """

    __slots__ = ('_focus', '_parent', '_dest')

    def __init__(
        self,
        focus: Any,
        parent: Optional['SectionContext'] = None,
        dest: Any = None
    ):
        """Initialize a SectionContext.

        Args:
            focus: Data node in scope at this nesting level
            parent: Enclosing context (None at the root)
            dest: Destination buffer (anything with a ``write(str)`` method).
                Defaults to the parent's destination.
        """
        if dest is None and parent is not None:
            dest = parent.dest
        self._focus = focus
        self._parent = parent
        self._dest = dest

    @property
    def focus(self) -> Any:
        return self._focus

    @property
    def parent(self) -> Optional['SectionContext']:
        return self._parent

    @property
    def dest(self) -> Any:
        return self._dest

    @property
    def depth(self) -> int:
        """Number of enclosing contexts (0 at the root)."""
        depth = 0
        ctx = self._parent
        while ctx is not None:
            depth += 1
            ctx = ctx._parent
        return depth

    @property
    def root(self) -> 'SectionContext':
        """The outermost context of the chain."""
        ctx = self
        while ctx._parent is not None:
            ctx = ctx._parent
        return ctx

    def chain(self) -> Iterator['SectionContext']:
        """Iterate from this context up to the root (innermost first)."""
        ctx = self
        while ctx is not None:
            yield ctx
            ctx = ctx._parent

    def child(self, focus: Any) -> 'SectionContext':
        """Create a nested context with this context as parent.

        Args:
            focus: Data node in scope for the nested section

        Returns:
            New SectionContext sharing this context's destination
        """
        return SectionContext(focus, parent=self, dest=self._dest)

    def __repr__(self) -> str:
        return f"SectionContext(focus={self._focus!r}, depth={self.depth})"
