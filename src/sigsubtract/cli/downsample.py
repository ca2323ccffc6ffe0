"""select and downsample sketches to a template"""

usage="""

### `sigsubtract downsample` - bring signatures to the template resolution

For each signature, pick the sketch matching the template's ksize,
encoding and seed. A sketch with a smaller scaled value is downsampled to
the template's scaled value; a sketch with a larger one is rejected.

For example,

sigsubtract downsample file1.sig file2.sig -k 57 -s 1000 -o downsampled.sig

will write one signature per input record, each holding a single
scaled=1000 sketch, to `downsampled.sig`.

"""

from sigsubtract.cli.utils import add_template_args, add_quiet_debug_args


def subparser(subparsers):
    subparser = subparsers.add_parser('downsample', description=__doc__, usage=usage)
    subparser.add_argument('signatures', nargs='+')
    subparser.add_argument(
        '-o', '--output', metavar='FILE', default='-',
        help='output signatures to this file (default stdout)'
    )
    add_template_args(subparser)
    add_quiet_debug_args(subparser)


def main(args):
    import sigsubtract.commands
    return sigsubtract.commands.downsample(args)
