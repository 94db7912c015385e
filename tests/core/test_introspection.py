"""Tests for slot discovery and construction-free allocation."""

import types
from collections import OrderedDict

import pytest

from graphclone.core.introspection import CONTENT_BASES, SlotKind, TypeIntrospector
from graphclone.errors import InstantiationError


class Plain:
    def __init__(self, a, b):
        self.a = a
        self.b = b


class SlotBase:
    __slots__ = ("x",)


class SlotChild(SlotBase):
    __slots__ = ("y",)


class Shadowing(SlotBase):
    __slots__ = ("x",)


class Mixed(SlotChild):
    """Slotted ancestors plus an instance dict."""


class Stack(list):
    pass


class History(OrderedDict):
    pass


class Exploding:
    def __init__(self):
        raise RuntimeError("constructor must not run")


class CustomNew:
    def __new__(cls, *args, **kwargs):
        raise RuntimeError("__new__ must not run")


class CustomNewList(list):
    def __new__(cls, *args, **kwargs):
        raise RuntimeError("__new__ must not run")


class Cached:
    __clone_transient__ = ("cache",)


class CachedWithToken(Cached):
    __clone_transient__ = ("token",)


@pytest.fixture
def introspector():
    return TypeIntrospector()


def test_member_slots_walk_most_derived_first(introspector):
    slots = introspector.slots_of(SlotChild)

    assert [(s.owner, s.name) for s in slots] == [(SlotChild, "y"), (SlotBase, "x")]
    assert all(s.kind is SlotKind.MEMBER for s in slots)


def test_shadowed_members_are_two_physical_slots(introspector):
    """A redeclared slot name shadows, but does not replace, the ancestor's storage."""
    slots = introspector.slots_of(Shadowing)

    assert [s.name for s in slots] == ["x", "x"]
    assert slots[0].descriptor is not slots[1].descriptor
    assert [s.owner for s in slots] == [Shadowing, SlotBase]


def test_instance_dict_slot_follows_members(introspector):
    slots = introspector.slots_of(Mixed)

    assert [s.kind for s in slots] == [SlotKind.MEMBER, SlotKind.MEMBER, SlotKind.INSTANCE_DICT]
    assert slots[-1].name == "__dict__"


def test_plain_class_has_only_instance_dict(introspector):
    slots = introspector.slots_of(Plain)

    assert len(slots) == 1
    assert slots[0].kind is SlotKind.INSTANCE_DICT
    assert slots[0].owner is Plain


def test_universal_root_is_excluded(introspector):
    for cls in (Plain, SlotChild, Mixed, Stack):
        assert all(s.owner is not object for s in introspector.slots_of(cls))


def test_builtin_container_subclass_gets_contents_slot(introspector):
    slots = introspector.slots_of(Stack)

    assert slots[-1].kind is SlotKind.CONTENTS
    assert slots[-1].owner is list


def test_contents_slot_uses_most_specific_base(introspector):
    slots = introspector.slots_of(History)

    assert slots[-1].owner is OrderedDict
    assert OrderedDict in CONTENT_BASES


def test_exception_state_slots_come_first(introspector):
    slots = introspector.slots_of(KeyError)

    native = [s.name for s in slots if s.kind is SlotKind.NATIVE]
    assert native == ["args", "__cause__", "__context__", "__traceback__"]
    assert slots[:4] == tuple(s for s in slots if s.kind is SlotKind.NATIVE)
    assert "__suppress_context__" in [s.name for s in slots if s.kind is SlotKind.MEMBER]
    assert slots[-1].kind is SlotKind.INSTANCE_DICT


def test_slots_are_cached(introspector):
    first = introspector.slots_of(Mixed)
    second = introspector.slots_of(Mixed)

    assert first is second


def test_slot_read_and_write_use_descriptors(introspector):
    obj = SlotChild()
    x_slot = next(s for s in introspector.slots_of(SlotChild) if s.name == "x")

    x_slot.write(obj, 42)

    assert obj.x == 42
    assert x_slot.read(obj) == 42


def test_unset_member_read_raises_attribute_error(introspector):
    slot = introspector.slots_of(SlotBase)[0]

    with pytest.raises(AttributeError):
        slot.read(SlotBase())


def test_transient_names_are_collected_across_mro(introspector):
    assert introspector.transient_names(Cached) == frozenset({"cache"})
    assert introspector.transient_names(CachedWithToken) == frozenset({"cache", "token"})
    assert introspector.transient_names(Plain) == frozenset()


def test_allocate_does_not_run_init(introspector):
    obj = introspector.allocate(Exploding)

    assert type(obj) is Exploding
    assert vars(obj) == {}


def test_allocate_skips_python_new(introspector):
    assert introspector.allocation_base(CustomNew) is object
    assert type(introspector.allocate(CustomNew)) is CustomNew


def test_allocate_builtin_subclass_uses_native_base(introspector):
    assert introspector.allocation_base(CustomNewList) is list

    obj = introspector.allocate(CustomNewList)

    assert type(obj) is CustomNewList
    assert len(obj) == 0


def test_allocate_unconstructible_type_raises(introspector):
    generator_type = type(i for i in range(3))

    with pytest.raises(InstantiationError) as excinfo:
        introspector.allocate(generator_type)

    assert excinfo.value.cls is types.GeneratorType
    assert "generator" in str(excinfo.value)
