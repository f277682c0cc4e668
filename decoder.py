import re

import constants
from value import ByteString, Integer, List, Dictionary, ValueKind, kind_of, render

"""Decode bencoded bytes into generic values.

The decoder walks a single immutable buffer with an integer cursor. Each
step returns the decoded value together with the position just past it, so
sibling values are parsed without re-scanning or copying the input.
"""

_INTEGER = re.compile(r'-?(0|[1-9][0-9]*)')
_INT_DIGITS = len(str(constants.INT_MIN))


class BencodeError(Exception):
    pass


class UnknownValueError(BencodeError):
    """The leading byte does not start any bencode value."""
    def __init__(self, byte):
        self.byte = byte
        super().__init__('Data type error: unknown or unhandled bencode data type `{}`'.format(_show_byte(byte)))


class UnexpectedEndError(BencodeError):
    def __init__(self):
        super().__init__('Unexpected end of bencoded input data')


class DataFormatError(BencodeError):
    """Malformed input: bad lengths, bad integers, missing delimiters..."""
    def __init__(self, detail):
        self.detail = detail
        super().__init__('Data format error: {}'.format(detail))


def decode(buffer, strict=False, max_depth=constants.MAX_DEPTH):
    """Decode the first bencoded value in buffer and return it with the
    bytes that follow it. strict rejects unsorted or duplicate dictionary
    keys and zero padded string lengths."""
    data = _as_bytes(buffer)
    parser = _Parser(data, strict, max_depth)
    try:
        value, position = parser.parse_value(0, 0)
    except RecursionError:
        raise DataFormatError('bencoded value is nested too deeply to decode.') from None
    return value, data[position:]


def decode_all(buffer, strict=False, max_depth=constants.MAX_DEPTH):
    """Decode a buffer that must hold exactly one bencoded value."""
    value, remaining = decode(buffer, strict, max_depth)
    if remaining:
        raise DataFormatError('unexpected trailing data of length `{}` after bencoded value.'.format(len(remaining)))
    return value


class _Parser:
    def __init__(self, data, strict, max_depth):
        self.data = data
        self.strict = strict
        self.max_depth = max_depth

    def parse_value(self, position, depth):
        """Dispatch on the byte at position."""
        if position >= len(self.data):
            raise UnexpectedEndError()

        lead = self.data[position:position + 1]
        if lead.isdigit():
            return self._parse_string(position)
        elif lead == constants.INT_START:
            return self._parse_int(position)
        elif lead == constants.LIST_START:
            return self._parse_list(position, depth + 1)
        elif lead == constants.DICT_START:
            return self._parse_dict(position, depth + 1)
        else:
            raise UnknownValueError(lead[0])

    def _parse_string(self, position):
        """<length>:<bytes>"""
        colon = self.data.find(constants.LENGTH_DELIMITER, position)
        if colon == -1:
            raise DataFormatError('missing length `:` delimiter for bencoded string value.')

        token = self.data[position:colon]
        if not token.isdigit():
            raise DataFormatError('invalid length value `{}` provided for bencoded string value.'.format(
                _show_token(token)))
        if self.strict and len(token) > 1 and token.startswith(b'0'):
            raise DataFormatError('zero padded length value `{}` provided for bencoded string value.'.format(
                _show_token(token)))

        digits = token.lstrip(b'0') or b'0'
        if len(digits) > _INT_DIGITS:
            raise DataFormatError('invalid length value `{}...` provided for bencoded string value.'.format(
                _show_token(token[:_INT_DIGITS])))

        length = int(digits)
        start = colon + 1
        available = len(self.data) - start
        if available < length:
            raise DataFormatError("provided string value's length `{}` exceeds remaining input length `{}`.".format(
                length, available))

        return ByteString(self.data[start:start + length]), start + length

    def _parse_int(self, position):
        """i<integer>e"""
        end = self.data.find(constants.END, position + 1)
        if end == -1:
            raise DataFormatError('missing ending `e` delimiter for bencoded integer value.')

        token = _show_token(self.data[position + 1:end])
        if token == '-0':
            raise DataFormatError(
                'invalid bencoded value `-0` found when parsing to integer value, expects valid `i64` value.')
        if (not _INTEGER.fullmatch(token) or len(token) > _INT_DIGITS
                or not constants.INT_MIN <= int(token) <= constants.INT_MAX):
            raise DataFormatError(
                'expected valid `i64` value when parsing bencoded data to integer value, received `{}`.'.format(token))

        return Integer(int(token)), end + 1

    def _parse_list(self, position, depth):
        """l<value>...e"""
        self._check_depth(depth)
        items = List()
        position += 1
        while self._more(position):
            item, position = self.parse_value(position, depth)
            items.append(item)

        if position >= len(self.data):
            raise DataFormatError('missing ending `e` delimiter for bencoded list.')
        return items, position + 1

    def _parse_dict(self, position, depth):
        """d<key><value>...e"""
        self._check_depth(depth)
        entries = []
        previous = None
        position += 1
        while self._more(position):
            key, position = self.parse_value(position, depth)
            if kind_of(key) is not ValueKind.BYTE_STRING:
                raise DataFormatError(
                    'bencoded dictionary must contain valid `string` data type for `key` value, '
                    'received `{}`.'.format(render(key)))
            if self.strict and previous is not None and key <= previous:
                raise DataFormatError('bencoded dictionary key `{}` is duplicated or out of order.'.format(
                    _show_token(key)))
            if position >= len(self.data):
                raise DataFormatError('missing value for bencoded dictionary key `{}`.'.format(_show_token(key)))

            val, position = self.parse_value(position, depth)
            entries.append((key, val))
            previous = key

        if position >= len(self.data):
            raise DataFormatError('missing ending `e` delimiter for bencoded dictionary.')
        return Dictionary(entries), position + 1

    def _more(self, position):
        """True while there is input left and it is not a closing `e`."""
        return position < len(self.data) and self.data[position:position + 1] != constants.END

    def _check_depth(self, depth):
        if depth > self.max_depth:
            raise DataFormatError('bencoded value nesting exceeds the maximum depth `{}`.'.format(self.max_depth))


def _as_bytes(buffer):
    if isinstance(buffer, bytes):
        return buffer
    if isinstance(buffer, (bytearray, memoryview)):
        return bytes(buffer)
    raise TypeError('Can only decode bytes-like objects, not {}'.format(type(buffer).__name__))


def _show_token(token):
    return token.decode('ascii', 'backslashreplace')


def _show_byte(byte):
    if 0x20 <= byte < 0x7f:
        return chr(byte)
    return '\\x{:02x}'.format(byte)
