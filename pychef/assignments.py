"""
assignments.py

    Decoding of engine assignments. The engine reports each resolved
    symbolic variable as a flat name plus the raw bytes it solved for;
    the name says which value and field the bytes belong to and how to
    reinterpret them. Decoded values accumulate in a two-level tree,
    tree[key][field], that the caller owns across decode calls.

"""
import collections
import logging

import pychef.consts as consts
import pychef.names as names
from pychef.errors import MalformedValue, UnknownTypeTag
from pychef.layout import Layout


_KINDS = {
    consts.TAG_INT: "Integer",
    consts.TAG_SIZE: "SizeWord",
    consts.TAG_STRING: "ByteString",
    consts.TAG_UNICODE: "WideString",
    consts.TAG_BYTEARRAY: "ByteArray",
}


class TypedValue(collections.namedtuple("TypedValue", "tag value")):

    __slots__ = ()

    @property
    def kind(self):
        return _KINDS[self.tag]


def convert_buffer_value(raw, tag, layout=None):
    """
    rebuild a typed value from raw engine bytes. Fixed-width tags
    never reinterpret a buffer of the wrong size.

    :param raw: bytes solved by the engine
    :param tag: type tag taken from the variable name
    :param layout: Layout of the platform the bytes come from
    :rtype: TypedValue
    """
    layout = layout or Layout.native()

    if tag == consts.TAG_INT:
        value = layout.unpack_int(raw)
    elif tag == consts.TAG_SIZE:
        value = layout.unpack_size(raw)
    elif tag == consts.TAG_STRING:
        value = bytes(raw)
    elif tag == consts.TAG_UNICODE:
        value = layout.unpack_wide(raw)
    elif tag == consts.TAG_BYTEARRAY:
        value = bytearray(raw)
    else:
        raise UnknownTypeTag(tag)

    return TypedValue(tag, value)


def decode_assignment(tree, name, raw, layout=None):
    """
    decode one (name, bytes) pair into `tree`, overwriting any value
    already stored for the same key and field

    :param tree: mutable mapping of key -> {field: TypedValue}
    :param name: full variable name reported by the engine
    :param raw: bytes solved by the engine
    """
    key, field, tag = names.decode(name)
    value = convert_buffer_value(raw, tag, layout)

    if key not in tree:
        tree[key] = {}
    tree[key][field] = value
    return value


def parse_assignment_line(line):
    """
    parse a `<name> <hex bytes>` record. The name is everything up to
    the last run of whitespace, so names containing spaces still parse.

    :rtype: (str, bytes) or None for blank and comment lines
    """
    line = line.strip()
    if not line or line.startswith('#'):
        return None

    parts = line.rsplit(None, 1)
    if len(parts) == 1:
        # a bare name with no bytes solves to an empty buffer
        parts.append("")
    name, hexdata = parts
    try:
        return name, bytes.fromhex(hexdata)
    except ValueError as e:
        raise MalformedValue(f"Invalid hex content for {name!r}: {e}") from e


class AssignmentDecoder:
    """
    accumulates decoded assignments over a reporting session
    """

    def __init__(self, layout=None, tree=None):
        self.layout = layout or Layout.native()
        self.tree = tree if tree is not None else {}

    def decode(self, name, raw):
        value = decode_assignment(self.tree, name, raw, self.layout)
        logging.debug(f"Decoded {name} as {value.kind}: {value.value!r}")
        return value

    def decode_all(self, pairs):
        for name, raw in pairs:
            self.decode(name, raw)
        return self.tree

    def concrete(self):
        """ plain nested dicts of decoded values, usable for replay """
        return {key: {field: typed.value for field, typed in fields.items()}
                for key, fields in self.tree.items()}
