"""
consts.py

    Type tags, name encoding limits and default bounds shared by
    the marshaling layer.

"""

# type tags identifying how a tracked buffer is reinterpreted when the
# engine hands its content back
TAG_INT = 'i'           # 32-bit signed integer
TAG_SIZE = 'l'          # platform size word (Py_ssize_t)
TAG_STRING = 's'        # byte string
TAG_UNICODE = 'u'       # wide string
TAG_BYTEARRAY = 'b'     # raw byte array, used for untagged names

TYPE_TAGS = (TAG_INT, TAG_SIZE, TAG_STRING, TAG_UNICODE, TAG_BYTEARRAY)
DEFAULT_TAG = TAG_BYTEARRAY

# qualifiers appended to the base name of a tracked value
VALUE_QUALIFIER = "value"
SIZE_QUALIFIER = "size"

# separators of the composite "<base>.<tag>#<qualifier>" name
NAME_SEP = '.'
TAG_SEP = '#'

# engine identifier buffer, terminator included
NAME_BUFFER_SIZE = 256
NAME_LIMIT = NAME_BUFFER_SIZE - 1

# width of the scalar integer slot
INT_SIZE = 4
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

# default ceiling on the element count of dicts and tuples when
# the engine does not configure one
MAX_SYMBOLIC_SIZE = 1024
