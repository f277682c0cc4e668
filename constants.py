"""Module holds constant values for use throughout the program."""

# Bencode Delimiters
INT_START = b'i'
LIST_START = b'l'
DICT_START = b'd'
END = b'e'
LENGTH_DELIMITER = b':'

# Integer Configuration
INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1

# Decoder Configuration
MAX_DEPTH = 256  # deepest list/dict nesting accepted by default

# Metainfo Configuration
PIECE_HASH_LEN = 20
INFO_HASH_LEN = 20
