import argparse
import logging
import os
import sys

import constants
from decoder import BencodeError, decode
from torrent import Torrent
from value import render

"""Command line entry point: decode bencoded strings and inspect .torrent files."""


def build_parser():
    parser = argparse.ArgumentParser(prog='torrentpeek', description='Inspect bencoded data and .torrent files.')
    parser.add_argument('-l', '--log', action='store_true', help='Show logs')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug logs')

    commands = parser.add_subparsers(dest='command', required=True)

    decode_cmd = commands.add_parser('decode', help='decode provided bencoded string')
    decode_cmd.add_argument('encoded_value', help='bencoded value, e.g. l4:spami42ee')
    decode_cmd.set_defaults(run=run_decode)

    info_cmd = commands.add_parser('info', help='print the metainfo of a .torrent file')
    info_cmd.add_argument('torrent_file', help='path to the .torrent file')
    info_cmd.set_defaults(run=run_info)

    for command in (decode_cmd, info_cmd):
        command.add_argument('--strict', action='store_true',
                             help='reject duplicate or out of order dictionary keys')
        command.add_argument('--max-depth', type=int, default=constants.MAX_DEPTH,
                             help='deepest list/dictionary nesting to accept')
    return parser


def run_decode(args, out):
    value, rest = decode(os.fsencode(args.encoded_value), strict=args.strict, max_depth=args.max_depth)
    if rest:
        logging.info('Ignoring %d trailing bytes', len(rest))
    print(render(value), file=out)


def run_info(args, out):
    torrent = Torrent.from_file(args.torrent_file, strict=args.strict, max_depth=args.max_depth)
    print('Tracker URL: {}'.format(torrent.announce), file=out)
    print('Length: {}'.format(torrent.length), file=out)
    print('Info Hash: {}'.format(torrent.info_hash_hex), file=out)
    print('Piece Length: {}'.format(torrent.piece_length), file=out)
    print('Piece Hashes:', file=out)
    for piece_hash in torrent.piece_hashes:
        print(piece_hash.hex(), file=out)


def main(argv=None, out=None, err=None):
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.log:
        logging.basicConfig(level=logging.INFO)

    try:
        args.run(args, out)
    except BencodeError as e:
        logging.debug('Command %s failed', args.command, exc_info=True)
        print(e, file=err)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
