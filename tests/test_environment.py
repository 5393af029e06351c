import pytest
from clarice.environment import Environment, DURABLE, TRANSIENT
from clarice.errors import ClariceError


def test_bind_and_lookup():
    env = Environment()
    env.bind('x', 1)
    assert env.lookup('x') == 1
    assert env.durability['x'] == DURABLE


def test_lookup_missing_name():
    with pytest.raises(ClariceError) as excinfo:
        Environment().lookup('nope')
    assert excinfo.value.name == 'NameError'


def test_redeclaring_in_the_same_scope_fails():
    env = Environment()
    env.bind('x', 1)
    with pytest.raises(ClariceError) as excinfo:
        env.bind('x', 2)
    assert excinfo.value.name == 'NameError'


def test_child_scope_may_shadow():
    outer = Environment()
    outer.bind('x', 1)
    inner = outer.push()
    inner.bind('x', 2, TRANSIENT)
    assert inner.lookup('x') == 2
    assert inner.pop() is outer
    assert outer.lookup('x') == 1


def test_rebind_updates_the_declaring_scope():
    outer = Environment()
    outer.bind('x', 1)
    inner = outer.push()
    inner.rebind('x', 5)
    assert outer.lookup('x') == 5
    assert 'x' not in inner.values


def test_rebind_undeclared_name():
    with pytest.raises(ClariceError) as excinfo:
        Environment().push().rebind('y', 1)
    assert excinfo.value.name == 'NameError'


def test_pop_drops_bindings():
    scope = Environment().push()
    scope.bind('tmp', 'value', TRANSIENT)
    scope.pop()
    assert scope.values == {}
    assert scope.durability == {}


def test_names_lists_visible_bindings():
    outer = Environment()
    outer.bind('b', 1)
    inner = outer.push()
    inner.bind('a', 2)
    inner.bind('b', 3)
    assert inner.names() == ['a', 'b']
