import dataclasses

import pytest

from regex2nfa.models import EPSILON, State, Transition, connect


def test_connect_registers_same_instance_on_both_ends():
    a, b = State(), State()
    t = connect(a, b, "x")
    assert a.outgoing == [t]
    assert b.incoming == [t]
    assert a.outgoing[0] is b.incoming[0]
    assert t.source is a and t.target is b and t.symbol == "x"


def test_transition_is_immutable_and_compared_by_identity():
    a, b = State(), State()
    t1 = Transition(a, b, "x")
    t2 = Transition(a, b, "x")
    assert t1 != t2
    assert t1 == t1
    assert len({t1, t2}) == 2
    with pytest.raises(dataclasses.FrozenInstanceError):
        t1.symbol = "y"


def test_epsilon_and_self_loop_flags():
    a, b = State(), State()
    assert connect(a, b, EPSILON).is_epsilon
    assert not connect(a, b, "x").is_epsilon
    assert connect(a, a, "x").is_self_loop


def test_accepting_flag():
    s = State()
    assert not s.is_accepting()
    s.set_accepting()
    assert s.is_accepting()
    s.set_accepting(False)
    assert not s.is_accepting()


def test_add_is_append_only_without_dedup():
    a, b = State(), State()
    t = Transition(a, b, "x")
    a.add_outgoing(t)
    a.add_outgoing(t)
    assert a.outgoing == [t, t]


def test_has_outgoing_symbol():
    a, b = State(), State()
    connect(a, b, "x")
    assert a.has_outgoing_symbol("x")
    assert not a.has_outgoing_symbol("y")
    assert not b.has_outgoing_symbol("x")


def test_outgoing_target_returns_first_match():
    a, b, c = State(), State(), State()
    connect(a, b, "x")
    connect(a, c, "x")
    assert a.outgoing_target("x") is b
    assert a.outgoing_target("x", prefer=c) is c


def test_lookup_miss_returns_none_without_allocating():
    a, b = State(), State()
    connect(a, b, "x")
    assert a.outgoing_target("y") is None
    assert b.incoming_source("y") is None
    assert len(a.outgoing) == 1 and len(b.incoming) == 1


def test_lookups_skip_self_loops():
    a, b = State(), State()
    connect(b, b, "x")
    connect(a, b, "x")
    assert b.incoming_source("x") is a
    assert b.outgoing_target("x") is None


def test_incoming_source():
    a, b = State(), State()
    connect(a, b, "x")
    assert b.incoming_source("x") is a


def test_delete_unhooks_neighbours():
    a, b, c = State(), State(), State()
    t_in = connect(a, b, "x")
    t_out = connect(b, c, "y")
    connect(b, b, "z")
    keep = connect(a, c, "w")

    b.delete()

    assert b.incoming == [] and b.outgoing == []
    assert a.outgoing == [keep]
    assert c.incoming == [keep]
    assert t_in not in a.outgoing
    assert t_out not in c.incoming
