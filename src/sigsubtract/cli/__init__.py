"""Define the top-level command line interface for sigsubtract

This module handles user input when sigsubtract is invoked from the command
line. A top-level parser is defined for the `sigsubtract` command, and
subparsers are defined for each subcommand, one module per subcommand.
"""

from argparse import ArgumentParser, RawDescriptionHelpFormatter, SUPPRESS
import os
import sys

import sigsubtract

from . import utils

# Commands
from . import downsample
from . import subtract


class SigsubtractParser(ArgumentParser):
    def parse_args(self, args=None, namespace=None):
        if (args is None and len(sys.argv) == 1) or (args is not None and len(args) == 0):
            self.print_help()
            raise SystemExit(1)
        return super(SigsubtractParser, self).parse_args(args=args, namespace=namespace)


def get_parser():
    clidir = os.path.dirname(__file__)
    basic_ops = utils.command_list(clidir)
    usage = '    Operations\n'
    for op in basic_ops:
        docstring = getattr(sys.modules[__name__], op).__doc__
        helpstring = 'sigsubtract {op:s} --help'.format(op=op)
        usage += '        {hs:30s} {ds:s}\n'.format(hs=helpstring, ds=docstring)

    desc = 'Remove shared hashes from many MinHash signatures.\n\nUsage instructions:\n' + usage
    parser = SigsubtractParser(prog='sigsubtract', description=desc, formatter_class=RawDescriptionHelpFormatter, usage=SUPPRESS)
    parser._optionals.title = 'Options'
    parser.add_argument('-v', '--version', action='version', version='sigsubtract '+ sigsubtract.VERSION)
    sub = parser.add_subparsers(
        title='Instructions', dest='cmd', metavar='cmd', help=SUPPRESS,
    )
    for op in basic_ops:
        getattr(sys.modules[__name__], op).subparser(sub)
    parser._action_groups.reverse()
    return parser


def parse_args(args=None):
    parser = get_parser()
    return parser.parse_args(args=args)
