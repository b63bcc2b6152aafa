"""Tests for section counts and iteration focus."""

import pytest
from mustache_scope import (
    section_count,
    section_focus,
    SectionResolutionError,
    RenderError,
    MISSING,
)


def test_array_count():
    """Test arrays repeat once per element."""
    assert section_count([1, 2, 3, 4]) == 4
    assert section_count(('a',)) == 1


def test_zero_counts():
    """Test MISSING, false, None and empty arrays all count zero."""
    assert section_count(MISSING) == 0
    assert section_count(False) == 0
    assert section_count(None) == 0
    assert section_count([]) == 0


def test_single_counts():
    """Test maps, scalars and true count one."""
    assert section_count({'a': 1}) == 1
    assert section_count({}) == 1
    assert section_count('text') == 1
    assert section_count(0) == 1
    assert section_count(True) == 1


def test_strings_are_not_arrays():
    """Test strings count once instead of per character."""
    assert section_count('abc') == 1
    assert section_count(b'abc') == 1


def test_array_focus():
    """Test array iterations focus on the indexed element."""
    users = [{'id': str(i)} for i in range(4)]
    for i in range(len(users)):
        assert section_focus(users, i) is users[i]


def test_array_focus_out_of_range():
    """Test an out-of-range index focuses on MISSING."""
    assert section_focus(['a'], 5) is MISSING


def test_non_array_focus():
    """Test non-array sections focus on the node itself."""
    node = {'name': 'x'}
    assert section_focus(node, 0) is node
    assert section_focus(True, 0) is True


def test_section_resolution_error():
    """Test the error carries name and depth and is a RenderError."""
    error = SectionResolutionError('users', depth=2)
    assert error.name == 'users'
    assert error.depth == 2
    assert isinstance(error, RenderError)
    with pytest.raises(RenderError, match='users'):
        raise error


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
