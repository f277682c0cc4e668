import unittest

from decoder import (BencodeError, DataFormatError, UnexpectedEndError, UnknownValueError,
                     decode, decode_all)
from value import ValueKind, kind_of


class StringTests(unittest.TestCase):
    def test_valid_string(self):
        value, rest = decode(b'7:testing')
        self.assertEqual(value, b'testing')
        self.assertIs(kind_of(value), ValueKind.BYTE_STRING)
        self.assertEqual(rest, b'')

    def test_remainder_is_returned(self):
        value, rest = decode(b'4:spami42e')
        self.assertEqual(value, b'spam')
        self.assertEqual(rest, b'i42e')

    def test_empty_string(self):
        self.assertEqual(decode(b'0:'), (b'', b''))

    def test_raw_bytes_are_kept(self):
        value, _ = decode(b'3:\xff\xfe\x00')
        self.assertEqual(value, b'\xff\xfe\x00')

    def test_no_length_delimiter(self):
        with self.assertRaises(DataFormatError) as cm:
            decode(b'7testing')
        self.assertIn('missing length `:` delimiter', str(cm.exception))

    def test_invalid_length_value(self):
        with self.assertRaises(DataFormatError) as cm:
            decode(b'7a:testing')
        self.assertIn('`7a`', str(cm.exception))

    def test_length_greater_than_input(self):
        with self.assertRaises(DataFormatError) as cm:
            decode(b'7:test')
        message = str(cm.exception)
        self.assertIn('`7`', message)
        self.assertIn('`4`', message)

    def test_oversized_length(self):
        with self.assertRaises(DataFormatError) as cm:
            decode(b'9' * 5000 + b':abc')
        self.assertIn('invalid length value', str(cm.exception))
        self.assertEqual(decode(b'0' * 5000 + b'3:abc')[0], b'abc')

    def test_zero_padded_length(self):
        self.assertEqual(decode(b'04:spam')[0], b'spam')
        with self.assertRaises(DataFormatError):
            decode(b'04:spam', strict=True)


class IntegerTests(unittest.TestCase):
    def test_valid_integers(self):
        self.assertEqual(decode(b'i-53e'), (-53, b''))
        self.assertEqual(decode(b'i0e')[0], 0)
        self.assertEqual(decode(b'i42e')[0], 42)
        self.assertIs(kind_of(decode(b'i42e')[0]), ValueKind.INTEGER)

    def test_negative_zero_rejected(self):
        with self.assertRaises(DataFormatError) as cm:
            decode(b'i-0e')
        self.assertIn('`-0`', str(cm.exception))

    def test_invalid_integer_token(self):
        with self.assertRaises(DataFormatError) as cm:
            decode(b'i-53ae')
        self.assertIn('received `-53a`', str(cm.exception))

    def test_malformed_tokens(self):
        for encoded in (b'i03e', b'i-03e', b'ie', b'i-e', b'i+5e', b'i 5e', b'i1_000e'):
            with self.assertRaises(DataFormatError, msg=encoded):
                decode(encoded)

    def test_missing_delimiter(self):
        with self.assertRaises(DataFormatError) as cm:
            decode(b'i-53')
        self.assertIn('missing ending `e` delimiter for bencoded integer', str(cm.exception))

    def test_64_bit_bounds(self):
        self.assertEqual(decode(b'i9223372036854775807e')[0], 2 ** 63 - 1)
        self.assertEqual(decode(b'i-9223372036854775808e')[0], -2 ** 63)
        with self.assertRaises(DataFormatError):
            decode(b'i9223372036854775808e')
        with self.assertRaises(DataFormatError):
            decode(b'i' + b'9' * 5000 + b'e')
        with self.assertRaises(DataFormatError):
            decode(b'99999999999999999999999:abc')


class ListTests(unittest.TestCase):
    def test_string_and_int_values(self):
        value, rest = decode(b'l7:testingi-53e4:teste')
        self.assertEqual(value, [b'testing', -53, b'test'])
        self.assertIs(kind_of(value), ValueKind.LIST)
        self.assertEqual(rest, b'')

    def test_nested_list(self):
        value, _ = decode(b'll7:testingi-53ee4:teste')
        self.assertEqual(value, [[b'testing', -53], b'test'])

    def test_empty_list(self):
        self.assertEqual(decode(b'lei1e'), ([], b'i1e'))

    def test_missing_delimiter(self):
        with self.assertRaises(DataFormatError) as cm:
            decode(b'l7:testingi-53e4:test')
        self.assertIn('missing ending `e` delimiter for bencoded list', str(cm.exception))

    def test_truncated_lists_never_succeed(self):
        for encoded in (b'l', b'll', b'lle', b'li1', b'l1', b'l4:spa'):
            with self.assertRaises(DataFormatError, msg=encoded):
                decode(encoded)


class DictionaryTests(unittest.TestCase):
    def test_keys_are_sorted(self):
        value, _ = decode(b'd3:fooi1e3:bari2ee')
        self.assertEqual(value, {b'bar': 2, b'foo': 1})
        self.assertEqual(list(value), [b'bar', b'foo'])
        self.assertIs(kind_of(value), ValueKind.DICTIONARY)

    def test_key_values(self):
        value, _ = decode(b'd7:testingi-53e4:test7:testing9:list-testlee')
        self.assertEqual(value, {b'testing': -53, b'test': b'testing', b'list-test': []})
        self.assertEqual(list(value), [b'list-test', b'test', b'testing'])

    def test_nested_dictionary(self):
        value, _ = decode(b'd7:testingd4:testi-53eee')
        self.assertEqual(value, {b'testing': {b'test': -53}})

    def test_missing_delimiter(self):
        with self.assertRaises(DataFormatError) as cm:
            decode(b'd7:testingi-53e')
        self.assertIn('missing ending `e` delimiter for bencoded dictionary', str(cm.exception))

    def test_missing_value(self):
        with self.assertRaises(DataFormatError):
            decode(b'd3:foo')

    def test_non_string_key(self):
        with self.assertRaises(DataFormatError) as cm:
            decode(b'di1e3:fooe')
        self.assertIn('received `1`', str(cm.exception))

        with self.assertRaises(DataFormatError):
            decode(b'dle3:fooe')

    def test_duplicate_key_last_wins(self):
        value, _ = decode(b'd3:fooi1e3:fooi2ee')
        self.assertEqual(value, {b'foo': 2})

    def test_strict_rejects_unsorted_and_duplicate_keys(self):
        with self.assertRaises(DataFormatError):
            decode(b'd3:fooi1e3:bari2ee', strict=True)
        with self.assertRaises(DataFormatError):
            decode(b'd3:fooi1e3:fooi2ee', strict=True)
        self.assertEqual(decode(b'd3:bari2e3:fooi1ee', strict=True)[0], {b'bar': 2, b'foo': 1})


class DispatchTests(unittest.TestCase):
    def test_unknown_value(self):
        with self.assertRaises(UnknownValueError) as cm:
            decode(b'x1e')
        self.assertEqual(cm.exception.byte, ord('x'))
        self.assertIn('`x`', str(cm.exception))

    def test_unexpected_end(self):
        with self.assertRaises(UnexpectedEndError):
            decode(b'')

    def test_errors_share_a_base(self):
        for encoded in (b'', b'x', b'i-0e'):
            with self.assertRaises(BencodeError):
                decode(encoded)

    def test_bytes_like_input(self):
        self.assertEqual(decode(bytearray(b'i7e'))[0], 7)
        self.assertEqual(decode(memoryview(b'l1:ae'))[0], [b'a'])
        with self.assertRaises(TypeError):
            decode('i7e')

    def test_nesting_limit(self):
        self.assertEqual(decode(b'llee', max_depth=2)[0], [[]])
        with self.assertRaises(DataFormatError):
            decode(b'llleee', max_depth=2)
        with self.assertRaises(DataFormatError):
            decode(b'l' * 10000 + b'e' * 10000)

    def test_decode_all(self):
        self.assertEqual(decode_all(b'li1ee'), [1])
        with self.assertRaises(DataFormatError):
            decode_all(b'li1eei2e')


if __name__ == '__main__':
    unittest.main()
