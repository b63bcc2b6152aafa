"""Basic tests for mustache_scope functionality."""

import io

import pytest
from mustache_scope import (
    build,
    build_into,
    Section,
    Text,
    Variable,
    SectionContext,
    MustacheCallbacks,
    MISSING,
)


def test_simple_variable():
    """Test rendering a single variable."""
    result = build([Text('Hello '), Variable('name')], {'name': 'Alice'})
    assert result == 'Hello Alice'


def test_escaped_and_raw_variables():
    """Test escaped and raw output of the same value."""
    instructions = [Variable('name'), Text('|'), Variable('name', escape=False)]
    result = build(instructions, {'name': 'A & B'})
    assert result == 'A&#32;&#38;&#32;B|A & B'


def test_missing_variable_renders_nothing():
    """Test that a missing variable writes nothing and does not fail."""
    result = build([Text('['), Variable('nope'), Text(']')], {})
    assert result == '[]'


def test_array_section():
    """Test that an array section renders once per element."""
    instructions = [Section('items', [Variable('n'), Text(',')])]
    result = build(instructions, {'items': [{'n': 1}, {'n': 2}, {'n': 3}]})
    assert result == '1,2,3,'


def test_map_section_changes_focus():
    """Test that a map section renders once with the map in focus."""
    instructions = [Section('user', [Variable('name')])]
    result = build(instructions, {'user': {'name': 'Bob'}, 'name': 'root'})
    assert result == 'Bob'


def test_scalar_section_renders_once():
    """Test that a truthy scalar section renders once."""
    instructions = [Section('flag', [Text('on')])]
    assert build(instructions, {'flag': True}) == 'on'
    assert build(instructions, {'flag': 'yes'}) == 'on'


def test_falsey_sections_render_nothing():
    """Test that false, None, empty arrays and missing names render nothing."""
    instructions = [Section('value', [Text('shown')])]
    for data in ({'value': False}, {'value': None}, {'value': []}, {}):
        assert build(instructions, data) == ''


def test_inverted_section():
    """Test inverted sections render only for absent or falsey values."""
    instructions = [Section('items', [Text('empty')], inverted=True)]
    assert build(instructions, {'items': []}) == 'empty'
    assert build(instructions, {}) == 'empty'
    assert build(instructions, {'items': [1]}) == ''


def test_parent_scope_fallback():
    """Test names fall back to enclosing sections."""
    instructions = [Section('users', [Variable('name'), Text('@'), Variable('site')])]
    data = {'site': 'example', 'users': [{'name': 'a'}, {'name': 'b'}]}
    assert build(instructions, data) == 'a@exampleb@example'


def test_kwargs_data():
    """Test passing data as kwargs."""
    result = build([Variable('x'), Variable('y')], x=1, y=2)
    assert result == '12'


def test_kwargs_data_needs_mapping_root():
    """Test extra kwargs data is rejected for a non-mapping root."""
    with pytest.raises(TypeError):
        build([Variable('x')], ['list-root'], x='1')
    # engine options alone are fine with any root
    assert build([Text('ok')], ['list-root'], strict_sections=False) == 'ok'


def test_build_into_appends():
    """Test rendering into an existing destination."""
    dest = io.StringIO()
    dest.write('prefix:')
    build_into(dest, [Variable('v')], {'v': 'value'})
    assert dest.getvalue() == 'prefix:value'


def test_build_without_instructions():
    """Test that build returns None when there is nothing to render."""
    assert build(None, {'a': 1}) is None


def test_callbacks_directly():
    """Test driving the callbacks without the engine."""
    callbacks = MustacheCallbacks()
    root = SectionContext({'list': ['x', 'y']}, dest=io.StringIO())
    assert callbacks.on_section_test(root, 'list') == 2
    child = callbacks.on_section_start(root, 'list', 1)
    assert child.focus == 'y'
    assert child.parent is root


def test_missing_sentinel():
    """Test the MISSING sentinel is falsy and distinct from None."""
    assert not MISSING
    assert MISSING is not None
    assert repr(MISSING) == 'MISSING'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
