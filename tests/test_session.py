# tests/test_session.py
"""
Tests for marking host values through a ConcolicSession.
"""

import pytest

from pychef import values
from pychef.errors import (
    EngineInactive,
    InvalidSize,
    NameTooLong,
    NullValue,
    OutOfMemory,
    RangeViolation,
    UnsupportedType,
)
from pychef.layout import Layout
from pychef.session import ConcolicSession
from tests.conftest import RecordingEngine


NATIVE = Layout.native()


class TestMakeSymbolicInt:

    def test_ranged_int(self, session, engine):
        assert session.make_symbolic_int(5, "x", 10, 0) == 5
        assert engine.tracked == [("x.i#value", NATIVE.pack_int(5))]
        assert engine.assumptions == [("x.i#value", ">=", 0), ("x.i#value", "<=", 10)]

    def test_unranged_int(self, session, engine):
        assert session.make_symbolic_int(-42, "x") == -42
        assert len(engine.tracked) == 1
        assert engine.assumptions == []

    def test_out_of_range(self, session, engine):
        with pytest.raises(RangeViolation):
            session.make_symbolic_int(11, "x", 10, 0)
        assert engine.calls == []

    def test_range_violation_is_value_error(self, session):
        with pytest.raises(ValueError):
            session.make_symbolic_int(-1, "x", 10, 0)

    def test_does_not_fit_integer_slot(self, session, engine):
        with pytest.raises(RangeViolation):
            session.make_symbolic_int(2 ** 40, "x")
        assert engine.calls == []

    @pytest.mark.parametrize("max_value,min_value", [
        (2 ** 40, 0),
        (10, -2 ** 40),
        (2 ** 31, -2 ** 31),
        (2 ** 31 - 1, -2 ** 31 - 1),
    ])
    def test_bounds_wider_than_integer_slot(self, session, engine, max_value, min_value):
        with pytest.raises(RangeViolation):
            session.make_symbolic_int(5, "x", max_value, min_value)
        assert engine.calls == []

    def test_bounds_at_integer_slot_limits(self, session, engine):
        assert session.make_symbolic_int(5, "x", 2 ** 31 - 1, -2 ** 31) == 5
        assert engine.assumptions == [("x.i#value", ">=", -2 ** 31), ("x.i#value", "<=", 2 ** 31 - 1)]

    def test_rejects_non_int(self, session):
        with pytest.raises(UnsupportedType):
            session.make_symbolic_int("5", "x")
        with pytest.raises(TypeError):
            session.make_symbolic_int(True, "x")

    def test_engine_rewrites_value(self):

        class RewritingEngine(RecordingEngine):
            def track_buffer(self, buf, name):
                buf[:] = NATIVE.pack_int(7)
                return super().track_buffer(buf, name)

        session = ConcolicSession(RewritingEngine())
        assert session.make_symbolic_int(5, "x") == 7


class TestEngineInactive:

    def test_int(self, inactive_engine):
        session = ConcolicSession(inactive_engine)
        with pytest.raises(EngineInactive):
            session.make_symbolic_int(5, "x", 10, 0)
        assert inactive_engine.calls == []

    @pytest.mark.parametrize("value", [b"abc", "abc", [1], {1: 2}, (1,), None, 3])
    def test_sequence(self, inactive_engine, value):
        session = ConcolicSession(inactive_engine)
        with pytest.raises(EngineInactive):
            session.make_symbolic_sequence(value, "s", 5, -1)
        assert inactive_engine.calls == []

    def test_is_runtime_error(self, inactive_engine):
        with pytest.raises(RuntimeError):
            ConcolicSession(inactive_engine).make_symbolic_sequence(b"", "s")


class TestByteString:

    def test_bound_violation(self, session, engine):
        with pytest.raises(RangeViolation):
            session.make_symbolic_sequence(b"abcdefghij", "s", 5, 1)
        assert engine.calls == []

    def test_bounded(self, session, engine):
        target = b"abc"
        result = session.make_symbolic_sequence(target, "s", 5, 1)

        assert result == b"abc"
        assert isinstance(result, bytes)
        assert engine.tracked == [
            ("s.s#value", b"abc"),
            ("s.l#size", NATIVE.pack_size(3)),
        ]
        assert engine.assumptions == [("s.l#size", "<=", 5), ("s.l#size", ">=", 1)]

    def test_fixed_size(self, session, engine):
        assert session.make_symbolic_sequence(b"abc", "s") == b"abc"
        assert engine.tracked == [("s.s#value", b"abc")]
        assert engine.assumptions == []

    def test_lower_bound_only(self, session, engine):
        session.make_symbolic_sequence(b"abc", "s", 0, 2)
        assert [name for name, _ in engine.tracked] == ["s.s#value", "s.l#size"]
        assert engine.assumptions == [("s.l#size", ">=", 2)]

    def test_lower_bound_violation(self, session, engine):
        with pytest.raises(RangeViolation):
            session.make_symbolic_sequence(b"a", "s", 0, 2)
        assert engine.calls == []

    def test_empty(self, session, engine):
        assert session.make_symbolic_sequence(b"", "s", 4) == b""
        assert engine.tracked[0] == ("s.s#value", b"")

    def test_name_too_long(self, session, engine):
        with pytest.raises(NameTooLong):
            session.make_symbolic_sequence(b"abc", "n" * 300, 5, 1)
        assert engine.calls == []


class TestWideString:

    def test_bounded(self, session, engine):
        result = session.make_symbolic_sequence("héllo", "u", 10, 1)

        assert result == "héllo"
        assert engine.tracked == [
            ("u.u#value", NATIVE.pack_wide("héllo")),
            ("u.l#size", NATIVE.pack_size(5)),
        ]
        assert len(engine.tracked[0][1]) == 5 * NATIVE.wchar_size
        assert engine.assumptions == [("u.l#size", "<=", 10), ("u.l#size", ">=", 1)]

    def test_bound_counts_characters(self, session):
        with pytest.raises(RangeViolation):
            session.make_symbolic_sequence("abcdef", "u", 5, 0)


class TestOutOfMemory:

    @staticmethod
    def exhausted(*args):
        raise MemoryError()

    def test_copy_fails(self, monkeypatch, session, engine):
        monkeypatch.setattr(values, "bytearray", self.exhausted, raising=False)
        with pytest.raises(OutOfMemory):
            session.make_symbolic_sequence(b"abc", "s", 5, 1)
        assert engine.calls == []

    def test_is_memory_error(self, monkeypatch, session):
        monkeypatch.setattr(values, "bytearray", self.exhausted, raising=False)
        with pytest.raises(MemoryError):
            session.make_symbolic_sequence("abc", "u", 5, 1)

    def test_rebuild_fails(self, monkeypatch, session, engine):
        monkeypatch.setattr(values.ByteStringStorage, "with_new_storage", self.exhausted)
        with pytest.raises(OutOfMemory):
            session.make_symbolic_sequence(b"abc", "s", 5, 1)
        # the size word of a string that was never built is not tracked
        assert engine.tracked == [("s.s#value", b"abc")]
        assert engine.assumptions == []


class TestList:

    def test_only_size_is_tracked(self, session, engine):
        target = [1, 2, 3]
        result = session.make_symbolic_sequence(target, "l", 5, 1)

        assert result is target
        assert engine.tracked == [("l.l#size", NATIVE.pack_size(3))]
        assert engine.assumptions == [("l.l#size", "<=", 5), ("l.l#size", ">=", 1)]

    def test_fixed_size_list_is_untouched(self, session, engine):
        target = [1]
        assert session.make_symbolic_sequence(target, "l") is target
        assert engine.calls == []

    def test_bound_violation(self, session, engine):
        with pytest.raises(RangeViolation):
            session.make_symbolic_sequence([1, 2, 3], "l", 2, 0)
        assert engine.calls == []


class TestStructures:

    def test_tuple(self, session, engine):
        target = (1, 2, 3)
        assert session.make_symbolic_sequence(target, "t") is target
        assert engine.tracked == [("t.l#size", NATIVE.pack_size(3))]
        assert engine.assumptions == [("t.l#size", ">=", 0), ("t.l#size", "<", 1000)]

    def test_dict_ignores_bounds(self, session, engine):
        target = {"a": 1}
        assert session.make_symbolic_sequence(target, "d", 0, 5) is target
        assert engine.assumptions == [("d.l#size", ">=", 0), ("d.l#size", "<", 1000)]

    def test_explicit_ceiling(self, engine):
        session = ConcolicSession(engine, max_symbolic_size=16)
        session.make_symbolic_sequence((), "t")
        assert engine.assumptions[-1] == ("t.l#size", "<", 16)


class TestSequenceErrors:

    def test_negative_min(self, session, engine):
        with pytest.raises(InvalidSize):
            session.make_symbolic_sequence(b"abc", "s", 5, -1)
        assert engine.calls == []

    def test_none(self, session, engine):
        with pytest.raises(NullValue):
            session.make_symbolic_sequence(None, "n")
        assert engine.calls == []

    @pytest.mark.parametrize("value", [3, 1.5, bytearray(b"x"), {1, 2}, object()])
    def test_unsupported(self, session, engine, value):
        with pytest.raises(UnsupportedType):
            session.make_symbolic_sequence(value, "v")
        assert engine.calls == []


class TestSessionConfig:

    def test_ceiling_read_once(self, engine):
        session = ConcolicSession(engine)
        engine.max_size = 5
        assert session.max_symbolic_size == 1000

    def test_atomic_region_nests(self, session, engine):
        with session.atomic():
            with session.atomic():
                session.make_symbolic_int(1, "a")
            session.make_symbolic_int(2, "b")
        assert engine.atomic_events == ["begin", "end"]

    def test_end_atomic_is_idempotent(self, engine):
        engine.end_atomic()
        engine.begin_atomic()
        engine.end_atomic()
        engine.end_atomic()
        assert engine.atomic_events == ["begin", "end"]
