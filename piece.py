from hashlib import sha1

import constants
from decoder import DataFormatError

"""Handles pieces, which are the divisions of the file a torrent describes."""


class PieceError(DataFormatError):
    pass


def split_piece_hashes(blob):
    """Split the `pieces` blob of a torrent into its 20 byte SHA-1 digests.

    The blob is the concatenation of one digest per piece, in piece order.
    """
    if len(blob) % constants.PIECE_HASH_LEN:
        raise PieceError('pieces length `{}` is not a multiple of `{}`.'.format(len(blob), constants.PIECE_HASH_LEN))
    return [bytes(blob[i:i + constants.PIECE_HASH_LEN]) for i in range(0, len(blob), constants.PIECE_HASH_LEN)]


def expected_piece_count(total_length, piece_length):
    if piece_length <= 0:
        raise PieceError('piece length must be positive, received `{}`.'.format(piece_length))
    return -(-total_length // piece_length)


def piece_factory(total_length, piece_length, hashes):
    """Creates the piece divisions for a given length and returns
    a generator object that will yield the pieces in order.

    Every piece is piece_length bytes long except the last, which holds
    whatever remains.
    """
    num_pieces = expected_piece_count(total_length, piece_length)
    if num_pieces != len(hashes):
        raise PieceError('expected `{}` piece hashes for length `{}`, found `{}`.'.format(
            num_pieces, total_length, len(hashes)))
    return _pieces(total_length, piece_length, hashes)


def _pieces(total_length, piece_length, hashes):
    for i, piece_hash in enumerate(hashes):
        offset = i * piece_length
        yield Piece(i, offset, min(piece_length, total_length - offset), piece_hash)


class Piece:
    def __init__(self, piece_index, offset, length, piece_hash):
        self.index = piece_index
        self.offset = offset
        self.length = length
        self.hash = piece_hash

    def is_valid(self, data):
        """Checks hash value for the given bytes vs the expected"""
        return len(data) == self.length and sha1(data).digest() == self.hash

    def __repr__(self):
        return 'Piece With Index {}'.format(self.index)

    def __lt__(self, other):
        return self.index < other.index
