import json
from enum import Enum

import constants

"""Generic values produced by the bencode decoder.

Every variant subclasses the builtin it wraps, so a decoded value compares
equal to plain Python data: ``List([ByteString(b'a'), Integer(1)]) == [b'a', 1]``.
"""


class ValueKind(Enum):
    BYTE_STRING = 's'
    INTEGER = 'i'
    LIST = 'l'
    DICTIONARY = 'd'


class ByteString(bytes):
    """Raw octets. Not guaranteed to be valid text."""
    kind = ValueKind.BYTE_STRING

    def __repr__(self):
        return 'ByteString({})'.format(bytes.__repr__(self))


class Integer(int):
    """A 64-bit signed integer."""
    kind = ValueKind.INTEGER

    def __new__(cls, value=0):
        if isinstance(value, bool):
            raise TypeError('Integer does not accept bool')
        value = int.__new__(cls, value)
        if not constants.INT_MIN <= value <= constants.INT_MAX:
            raise ValueError('Integer Out Of 64-bit Range | {}'.format(int(value)))
        return value

    def __repr__(self):
        return 'Integer({})'.format(int(self))

    __str__ = int.__repr__


class List(list):
    """Ordered sequence of values. Decoded lists are not meant to be changed."""
    kind = ValueKind.LIST

    def __repr__(self):
        return 'List({})'.format(list.__repr__(self))

    __str__ = list.__repr__


class Dictionary(dict):
    """Mapping of ByteString keys to values.

    Keys are stored in ascending byte order no matter what order they were
    given in, which is the order canonical bencode requires when the
    dictionary is encoded again. Later duplicates replace earlier ones.
    A Dictionary cannot be modified after it is built.
    """
    kind = ValueKind.DICTIONARY

    def __init__(self, items=()):
        if isinstance(items, dict):
            items = items.items()
        merged = {}
        for key, val in items:
            if not isinstance(key, (bytes, bytearray)):
                raise TypeError('Dictionary keys must be bytes, not {}'.format(type(key).__name__))
            merged[ByteString(key)] = val
        super().__init__(sorted(merged.items()))

    def _read_only(self, *args, **kwargs):
        raise TypeError('Dictionary is read only, build a new one to change its keys')

    __setitem__ = __delitem__ = _read_only
    setdefault = update = pop = popitem = clear = __ior__ = _read_only

    def __repr__(self):
        return 'Dictionary({})'.format(dict.__repr__(self))

    __str__ = dict.__repr__


def kind_of(obj):
    """Return the ValueKind of a decoded value."""
    try:
        return obj.kind
    except AttributeError:
        raise TypeError('Not a bencode value: {!r}'.format(obj)) from None


def to_builtin(obj):
    """Plain bytes/int/list/dict copy of obj, with str keys encoded as UTF-8.

    bencode3 picks its encoder by exact type, so decoded values and tuples
    are converted first.
    """
    if isinstance(obj, bool) or obj is None:
        raise TypeError('Cannot bencode {!r}'.format(obj))
    elif isinstance(obj, int):
        return int(obj)
    elif isinstance(obj, (bytes, bytearray)):
        return bytes(obj)
    elif isinstance(obj, str):
        return str(obj)
    elif isinstance(obj, (list, tuple)):
        return [to_builtin(item) for item in obj]
    elif isinstance(obj, dict):
        return {_builtin_key(key): to_builtin(val) for key, val in obj.items()}
    raise TypeError('Cannot bencode object of type {}'.format(type(obj).__name__))


def _builtin_key(key):
    if isinstance(key, str):
        return key.encode('utf-8')
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise TypeError('Dictionary keys must be bytes or str, not {}'.format(type(key).__name__))


def to_json(value):
    """Turn a value into data the json module can serialize.

    Byte strings become text when they are valid UTF-8 and a list of byte
    values otherwise.
    """
    kind = kind_of(value)
    if kind is ValueKind.BYTE_STRING:
        try:
            return value.decode('utf-8')
        except UnicodeDecodeError:
            return list(value)
    if kind is ValueKind.INTEGER:
        return int(value)
    if kind is ValueKind.LIST:
        return [to_json(item) for item in value]
    return {key.decode('utf-8', 'backslashreplace'): to_json(val) for key, val in value.items()}


def render(value):
    """Compact JSON text for a value."""
    return json.dumps(to_json(value), separators=(',', ':'), ensure_ascii=False)
