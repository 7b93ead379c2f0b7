"""
utils.py

    Helpers for introspecting the target binary whose engine output
    is being decoded.

"""
from elftools.elf.elffile import ELFFile

from pychef.layout import Layout


def binary_layout(binary):
    """
    helper method deriving the size word width and byte order of
    the platform a binary was built for. Wide characters are 4 bytes
    wide on every ELF target.

    :param binary: str for binary to introspect.
    :rtype Layout:
    """

    with open(binary, 'rb') as f:
        elffile = ELFFile(f)
        byteorder = "little" if elffile.little_endian else "big"
        return Layout(byteorder, elffile.elfclass // 8, 4)
