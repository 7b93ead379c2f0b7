"""
layout.py

    Byte layout of the platform the tracked buffers live on: integer and
    size word widths, wide character width and byte order. Tracked
    buffers are packed with the layout of the running interpreter, while
    engine output may come from a different target (see utils.binary_layout).

"""
import collections
import struct
import sys

import pychef.consts as consts
from pychef.errors import MalformedValue, SizeMismatch


_WIDE_CODECS = {
    (2, "little"): "utf-16-le",
    (2, "big"): "utf-16-be",
    (4, "little"): "utf-32-le",
    (4, "big"): "utf-32-be",
}

_WORD_FORMATS = {4: "i", 8: "q"}


class Layout(collections.namedtuple("Layout", "byteorder word_size wchar_size")):

    __slots__ = ()

    @classmethod
    def native(cls):
        # Py_UNICODE was UCS4 on the Linux guests this layer targets
        return cls(sys.byteorder, struct.calcsize("n"), 4)

    @property
    def int_size(self):
        return consts.INT_SIZE

    @property
    def _prefix(self):
        return "<" if self.byteorder == "little" else ">"

    @property
    def wide_codec(self):
        try:
            return _WIDE_CODECS[(self.wchar_size, self.byteorder)]
        except KeyError:
            raise ValueError(f"Unsupported wide character width {self.wchar_size}")

    def pack_int(self, value):
        try:
            return struct.pack(self._prefix + "i", value)
        except struct.error as e:
            raise OverflowError(f"{value} does not fit a {self.int_size}-byte integer") from e

    def unpack_int(self, data):
        if len(data) != self.int_size:
            raise SizeMismatch(consts.TAG_INT, self.int_size, len(data))
        return struct.unpack(self._prefix + "i", data)[0]

    def pack_size(self, value):
        return struct.pack(self._prefix + _WORD_FORMATS[self.word_size], value)

    def unpack_size(self, data):
        if len(data) != self.word_size:
            raise SizeMismatch(consts.TAG_SIZE, self.word_size, len(data))
        return struct.unpack(self._prefix + _WORD_FORMATS[self.word_size], data)[0]

    def pack_wide(self, text):
        return text.encode(self.wide_codec, "surrogatepass")

    def unpack_wide(self, data):
        if len(data) % self.wchar_size:
            raise SizeMismatch(consts.TAG_UNICODE, f"a multiple of {self.wchar_size}", len(data))
        try:
            return bytes(data).decode(self.wide_codec, "surrogatepass")
        except UnicodeDecodeError as e:
            raise MalformedValue(f"Invalid wide string content: {e.reason}") from e

    def wide_length(self, text):
        """ number of code units `text` occupies in a wide buffer """
        return len(self.pack_wide(text)) // self.wchar_size
