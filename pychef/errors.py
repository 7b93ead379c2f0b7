"""
errors.py

    Failure kinds raised by the marshaling layer. Each one also derives
    from the builtin exception a host program would expect, so callers
    can catch either.

"""


class ConcolicError(Exception):
    """ base class for every failure raised by pychef """


class EngineInactive(ConcolicError, RuntimeError):
    """ marking requested while the engine is not running """

    def __init__(self, msg="Not in symbolic mode"):
        super().__init__(msg)


class RangeViolation(ConcolicError, ValueError):
    """ concrete value or size falls outside the requested bounds """


class InvalidSize(ConcolicError, ValueError):
    pass


class NullValue(ConcolicError, ValueError):
    pass


class UnsupportedType(ConcolicError, TypeError):
    pass


class OutOfMemory(ConcolicError, MemoryError):
    pass


class DecodeError(ConcolicError, ValueError):
    """ base class for malformed engine output """


class MalformedName(DecodeError):
    pass


class NameTooLong(MalformedName):

    def __init__(self, name, limit):
        self.name = name
        self.limit = limit
        super().__init__(f"Symbolic name exceeds {limit} bytes: {name[:32]}...")


class UnknownTypeTag(DecodeError):

    def __init__(self, tag):
        self.tag = tag
        super().__init__(f"Invalid assignment type {tag!r}")


class SizeMismatch(DecodeError):

    def __init__(self, tag, expected, actual):
        self.tag = tag
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid content size for {tag!r}: expected {expected} bytes, got {actual}")


class MalformedValue(DecodeError):
    pass
