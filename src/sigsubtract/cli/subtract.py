"""subtract a query signature from many signatures"""

usage="""

### `sigsubtract subtract` - remove a query's hashes from many signatures

Remove every hash value found in the query signature from each signature
listed in a file list, and save the reduced signatures.

For example,

sigsubtract subtract host.sig siglist.txt -k 57 -s 100 -o subtracted

will load the k=57, scaled=100 protein sketch from `host.sig`, then for
each path in `siglist.txt` (one per line) select the matching sketch
(downsampling finer sketches to scaled=100), remove the query's hashes,
and write the result to `subtracted/57/<file name>`.

Processing stops at the first signature that cannot be loaded or has no
compatible sketch; files already written are kept.

"""

from sigsubtract.cli.utils import add_template_args, add_quiet_debug_args
from sigsubtract.sigsubtract_args import check_processes


def subparser(subparsers):
    subparser = subparsers.add_parser('subtract', description=__doc__, usage=usage)
    subparser.add_argument('query', help='query signature to be subtracted')
    subparser.add_argument(
        'siglist',
        help='text file listing the signatures to remove the query from'
    )
    subparser.add_argument(
        '-o', '--output', metavar='DIR', default=None,
        help='base directory for output; default=outputs'
    )
    subparser.add_argument(
        '-p', '--processes', metavar='N', type=check_processes, default=None,
        help='number of worker threads; default is one per CPU'
    )
    add_template_args(subparser)
    add_quiet_debug_args(subparser)


def main(args):
    import sigsubtract.commands
    return sigsubtract.commands.subtract(args)
