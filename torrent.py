import logging
from hashlib import sha1

import constants
from decoder import DataFormatError, decode
from encoder import encode
from piece import expected_piece_count, piece_factory, split_piece_hashes
from value import ValueKind

"""Handle data related to a torrent and its torrent file"""

logger = logging.getLogger(__name__)


class TorrentError(DataFormatError):
    pass


class Torrent:
    """Hold information coming from a decoded torrent file.

    Only single file torrents are described: the info dictionary must carry
    `length`, `name`, `piece length` and `pieces`.
    """
    def __init__(self, metainfo):
        if _kind(metainfo) is not ValueKind.DICTIONARY:
            raise TorrentError('torrent metainfo must be a bencoded dictionary.')

        self.announce = _text(_field(metainfo, 'announce', ValueKind.BYTE_STRING), 'announce')
        self.info = _field(metainfo, 'info', ValueKind.DICTIONARY)
        self.info_hash = self._hash_info(self.info)

        self.length = int(_field(self.info, 'length', ValueKind.INTEGER))
        if self.length < 0:
            raise TorrentError('field `length` must not be negative, received `{}`.'.format(self.length))
        self.name = _text(_field(self.info, 'name', ValueKind.BYTE_STRING), 'name')
        self.piece_length = int(_field(self.info, 'piece length', ValueKind.INTEGER))
        if self.piece_length <= 0:
            raise TorrentError('field `piece length` must be positive, received `{}`.'.format(self.piece_length))

        # The pieces entry consists of 20 byte hash values for each piece.
        self.pieces = bytes(_field(self.info, 'pieces', ValueKind.BYTE_STRING))
        self.piece_hashes = split_piece_hashes(self.pieces)
        self.num_pieces = len(self.piece_hashes)

        expected = expected_piece_count(self.length, self.piece_length)
        if expected != self.num_pieces:
            logger.warning('Torrent %s lists %d piece hashes, length implies %d', self.name, self.num_pieces, expected)
        logger.debug('Projected torrent %s with info hash %s', self.name, self.info_hash_hex)

    @classmethod
    def from_bytes(cls, data, strict=False, max_depth=constants.MAX_DEPTH):
        metainfo, _ = decode(data, strict=strict, max_depth=max_depth)
        return cls(metainfo)

    @classmethod
    def from_file(cls, tor_file_path, strict=False, max_depth=constants.MAX_DEPTH):
        try:
            with open(tor_file_path, 'rb') as tor_file:
                metainfo = tor_file.read()
        except FileNotFoundError:
            raise TorrentError('the provided file path `{}` does not exist.'.format(tor_file_path)) from None
        except OSError as e:
            raise TorrentError('the provided file path `{}` could not be read: {}.'.format(
                tor_file_path, e.strerror)) from None

        logger.info('Read %d bytes from %s', len(metainfo), tor_file_path)
        return cls.from_bytes(metainfo, strict=strict, max_depth=max_depth)

    @property
    def info_hash_hex(self):
        return self.info_hash.hex()

    def pieces_layout(self):
        """Pieces of the payload with their offsets, lengths and hashes."""
        return piece_factory(self.length, self.piece_length, self.piece_hashes)

    @staticmethod
    def _hash_info(info):
        info_bencode = encode(info)
        info_hash = sha1(info_bencode).digest()
        return info_hash

    def __repr__(self):
        return 'Torrent {} ({})'.format(self.name, self.info_hash_hex)


def _kind(obj):
    return getattr(obj, 'kind', None)


def _field(mapping, name, kind):
    try:
        found = mapping[name.encode('ascii')]
    except KeyError:
        raise TorrentError('missing field `{}` in torrent metainfo.'.format(name)) from None
    if _kind(found) is not kind:
        raise TorrentError('field `{}` must be a bencoded {}.'.format(name, kind.name.lower().replace('_', ' ')))
    return found


def _text(raw, name):
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        raise TorrentError('field `{}` is not valid UTF-8 text.'.format(name)) from None
