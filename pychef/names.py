"""
names.py

    Composite naming scheme for tracked buffers. A tracked buffer is
    published to the engine as "<base>.<T>#<qualifier>", where T is the
    type tag used to rebuild the value once the engine returns it. The
    base may contain dots itself, so decoding always splits on the last one.

"""
import collections

import pychef.consts as consts
from pychef.errors import MalformedName, NameTooLong


class SymbolicName(collections.namedtuple("SymbolicName", "key field tag")):
    """
    decoded form of an engine-facing name: `key` is the base path
    chosen by the caller, `field` the qualifier and `tag` the type tag.
    """

    __slots__ = ()

    def encode(self, limit=consts.NAME_LIMIT):
        return encode(self.key, self.field, self.tag, limit)


def encode(base_path, qualifier, tag, limit=consts.NAME_LIMIT):
    """
    build the engine-facing identifier for a tracked buffer

    :param base_path: name supplied by the caller of the session
    :param qualifier: "value" or "size"
    :param tag: single-character type tag
    :param limit: largest accepted encoded length in bytes
    :rtype: str
    """

    if not base_path:
        raise MalformedName("Symbolic name cannot be empty")
    if tag not in consts.TYPE_TAGS:
        raise MalformedName(f"Unknown type tag {tag!r}")
    if not qualifier or consts.NAME_SEP in qualifier:
        raise MalformedName(f"Invalid qualifier {qualifier!r}")

    name = f"{base_path}{consts.NAME_SEP}{tag}{consts.TAG_SEP}{qualifier}"

    # the engine copies names into a fixed buffer; refuse rather than truncate
    if len(name.encode("utf-8")) > limit:
        raise NameTooLong(name, limit)
    return name


def decode(full_name):
    """
    split an engine-facing name back into key, field and type tag.
    Names that do not follow the convention resolve to the default
    byte array tag with the whole remainder as the field.

    :param full_name: name reported by the engine
    :rtype: SymbolicName
    """

    key, sep, remainder = full_name.rpartition(consts.NAME_SEP)
    if not sep:
        return SymbolicName(full_name, "", consts.DEFAULT_TAG)

    if len(remainder) >= 2 and remainder[1] == consts.TAG_SEP:
        if len(remainder) <= 2:
            raise MalformedName(f"Invalid value encoding in {full_name!r}")
        return SymbolicName(key, remainder[2:], remainder[0])

    return SymbolicName(key, remainder, consts.DEFAULT_TAG)
