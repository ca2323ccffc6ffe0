from glob import glob
import os

from sigsubtract.minhash import MINHASH_DEFAULT_SEED
from sigsubtract.sigsubtract_args import (check_scaled_bounds,
                                          check_ksize_bounds, encoding_type,
                                          DEFAULT_KSIZE, DEFAULT_SCALED,
                                          DEFAULT_ENCODING, ENCODINGS)


def add_ksize_arg(parser, default=DEFAULT_KSIZE):
    parser.add_argument(
        '-k', '--ksize', metavar='K', default=default, type=check_ksize_bounds,
        help='k-mer size; default={d}'.format(d=default)
    )


def add_scaled_arg(parser, default=DEFAULT_SCALED):
    parser.add_argument(
        '-s', '--scaled', metavar='N', default=default, type=check_scaled_bounds,
        help='scaled value of the comparison template; default={d}'.format(d=default)
    )


def add_encoding_arg(parser, default=DEFAULT_ENCODING):
    choices = '/'.join(hf.value for hf in ENCODINGS)
    parser.add_argument(
        '-e', '--encoding', metavar='ENCODING', default=default,
        type=encoding_type,
        help=f'sequence encoding type ({choices}, case-insensitive); default={default}'
    )


def add_seed_arg(parser, default=MINHASH_DEFAULT_SEED):
    parser.add_argument(
        '--seed', metavar='SEED', default=default, type=int,
        help='hash seed of the comparison template; default={d}'.format(d=default)
    )


def add_template_args(parser):
    add_ksize_arg(parser)
    add_scaled_arg(parser)
    add_encoding_arg(parser)
    add_seed_arg(parser)


def add_quiet_debug_args(parser):
    parser.add_argument(
        '-q', '--quiet', action='store_true',
        help='suppress non-error output'
    )
    parser.add_argument(
        '-d', '--debug', action='store_true',
        help='output debug information'
    )


def opfilter(path):
    return not path.startswith('__') and path not in ['utils']


def command_list(dirpath):
    paths = glob(os.path.join(dirpath, '*.py'))
    filenames = [os.path.basename(path) for path in paths]
    basenames = [os.path.splitext(path)[0] for path in filenames if not path.startswith('__')]
    basenames = filter(opfilter, basenames)
    return sorted(basenames)
