"""
values.py

    Per-type conversion of host values into tracked buffers.

    Strings get a private copy of their content tracked by the engine and
    are rebuilt from it. Lists, dicts and tuples are treated shallowly:
    only their element count becomes symbolic, the elements themselves
    stay concrete. Making individual elements symbolic is left to the
    caller, one make_symbolic_* call per element.

"""
import logging

import pychef.consts as consts
import pychef.names as names
import pychef.policy as policy
from pychef.errors import NullValue, OutOfMemory, RangeViolation, UnsupportedType


class Storage:
    """
    capability view over the backing storage of a host value.
    `tag` is the type tag the content is published under, None for
    containers whose elements are never copied.
    """

    tag = None

    def __init__(self, value, layout):
        self.value = value
        self.layout = layout

    @property
    def length(self):
        """ the count field the engine may make symbolic """
        return len(self.value)

    def raw_bytes(self):
        raise NotImplementedError

    def with_new_storage(self, data):
        raise NotImplementedError


class ByteStringStorage(Storage):

    tag = consts.TAG_STRING

    def raw_bytes(self):
        return self.value

    def with_new_storage(self, data):
        return bytes(data)


class WideStringStorage(Storage):

    tag = consts.TAG_UNICODE

    @property
    def length(self):
        return self.layout.wide_length(self.value)

    def raw_bytes(self):
        return self.layout.pack_wide(self.value)

    def with_new_storage(self, data):
        return self.layout.unpack_wide(data)


class ContainerStorage(Storage):
    """ lists, dicts and tuples keep their own storage """

    def raw_bytes(self):
        raise UnsupportedType(f"Elements of {type(self.value).__name__} are not copied")

    def with_new_storage(self, data):
        return self.value


class ListStorage(ContainerStorage):
    pass


class DictStorage(ContainerStorage):
    pass


class TupleStorage(ContainerStorage):
    pass


_STORAGES = [
    (bytes, ByteStringStorage),
    (str, WideStringStorage),
    (list, ListStorage),
    (dict, DictStorage),
    (tuple, TupleStorage),
]


def storage_for(value, layout):
    """
    pick the storage view for a host value by its dynamic type

    :param value: host value
    :param layout: Layout used to pack wide strings
    :rtype: Storage
    """

    if value is None:
        raise NullValue("Cannot make symbolic None")

    for kind, storage in _STORAGES:
        if isinstance(value, kind):
            return storage(value, layout)

    raise UnsupportedType(f"Unsupported type {type(value).__name__}")


def _copy(data):
    try:
        return bytearray(data)
    except MemoryError as e:
        raise OutOfMemory(f"Cannot copy {len(data)} bytes for tracking") from e


class ValueConverter:
    """
    produces tracked buffers for each supported value shape and hands
    back the (possibly new) host value
    """

    def __init__(self, engine, layout, max_symbolic_size):
        self.engine = engine
        self.layout = layout
        self.max_symbolic_size = max_symbolic_size

    def track(self, buf, name, qualifier, tag):
        obj_name = names.encode(name, qualifier, tag)
        logging.debug(f"Making {len(buf)} bytes concolic as {obj_name}")
        return self.engine.track_buffer(buf, obj_name)

    def track_size(self, length, name):
        buf = bytearray(self.layout.pack_size(length))
        symbol = self.track(buf, name, consts.SIZE_QUALIFIER, consts.TAG_SIZE)
        return symbol

    def make_int(self, value, name, max_value, min_value):
        ranged = max_value >= min_value
        if ranged and not min_value <= value <= max_value:
            raise RangeViolation("Incompatible value constraints")

        # bounds are compared against the 32-bit slot, wider ones would wrap
        if ranged and (min_value < consts.INT_MIN or max_value > consts.INT_MAX):
            raise RangeViolation(f"Value bounds [{min_value}, {max_value}] exceed the {consts.INT_SIZE}-byte integer slot")

        try:
            buf = bytearray(self.layout.pack_int(value))
        except OverflowError as e:
            raise RangeViolation(str(e)) from e

        symbol = self.track(buf, name, consts.VALUE_QUALIFIER, consts.TAG_INT)
        if ranged:
            for constraint in policy.range_constraints(symbol, min_value, max_value):
                self.engine.assume(constraint)

        return self.layout.unpack_int(bytes(buf))

    def make_string(self, storage, name, max_size, min_size):
        """
        track a private copy of a byte or wide string and rebuild the
        string from it. The copy belongs to the converter until the new
        value exists and is dropped right after.
        """

        if not policy.check(storage.length, max_size, min_size):
            raise RangeViolation("Incompatible size constraints")

        data = _copy(storage.raw_bytes())
        self.track(data, name, consts.VALUE_QUALIFIER, storage.tag)
        try:
            result = storage.with_new_storage(data)
        except MemoryError as e:
            raise OutOfMemory(f"Cannot rebuild {type(storage.value).__name__} of {len(data)} bytes") from e
        finally:
            del data

        if max_size >= 0:
            symbol = self.track_size(type(storage)(result, self.layout).length, name)
            policy.constrain(self.engine, symbol, max_size, min_size)

        return result

    def make_list(self, storage, name, max_size, min_size):
        if not policy.check(storage.length, max_size, min_size):
            raise RangeViolation("Incompatible size constraints")

        if max_size >= 0:
            symbol = self.track_size(storage.length, name)
            policy.constrain(self.engine, symbol, max_size, min_size)

        return storage.value

    def make_structure(self, storage, name):
        """ dicts and tuples: count bounded by the session-wide ceiling """
        symbol = self.track_size(storage.length, name)
        self.engine.assume(policy.Constraint(symbol, ">=", 0))
        self.engine.assume(policy.Constraint(symbol, "<", self.max_symbolic_size))
        return storage.value

    def convert(self, value, name, max_size, min_size):
        """ dispatch a sequence-like value to its conversion path """
        storage = storage_for(value, self.layout)

        if isinstance(storage, (ByteStringStorage, WideStringStorage)):
            return self.make_string(storage, name, max_size, min_size)
        elif isinstance(storage, ListStorage):
            return self.make_list(storage, name, max_size, min_size)
        else:
            return self.make_structure(storage, name)
