from bencode3 import bencode

from value import to_builtin

"""Canonical bencode encoding.

bencode3 writes dictionary keys in ascending order, so once keys are raw
bytes the output is the same byte sequence any conforming encoder produces.
The info hash of a torrent depends on this.
"""


def encode(value):
    """Return the canonical bencoding of a decoded value, or of the
    equivalent plain Python data, as bytes."""
    return bencode(to_builtin(value))
