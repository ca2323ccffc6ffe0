"""
Utility functions for sigsubtract CLI commands.

argparse functionality:

* check_scaled_bounds(arg) -- check that --scaled is reasonable
* check_ksize_bounds(arg) -- check that --ksize is reasonable
* check_processes(arg) -- check that --processes is at least 1
* encoding_type(arg) -- parse --encoding case-insensitively

file handling functionality:

* load_pathlist_from_file(filename) -- load a list of paths from a file
* make_output_dir(output, ksize) -- create <output>/<ksize>/
* class FileOutput - file output context manager that deals w/stdout well
"""
import sys
import os
import argparse

from .logging import notify
from .minhash import HashFunctions, MINHASH_MAX_HASH


DEFAULT_KSIZE = 31
DEFAULT_SCALED = 10
DEFAULT_ENCODING = HashFunctions.PROTEIN
DEFAULT_OUTPUT = 'outputs'

ENCODINGS = (HashFunctions.PROTEIN, HashFunctions.HP, HashFunctions.DAYHOFF)


def check_scaled_bounds(arg):
    try:
        scaled = int(arg)
    except ValueError:
        raise argparse.ArgumentTypeError(f"ERROR: scaled value '{arg}' is not an integer")

    if scaled < 0:
        raise argparse.ArgumentTypeError("ERROR: scaled value must be positive")
    if scaled > MINHASH_MAX_HASH:
        raise argparse.ArgumentTypeError(f"ERROR: scaled value must be <= {MINHASH_MAX_HASH}")
    if scaled > 1e6:
        notify('WARNING: scaled value should be <= 1e6. Continuing anyway.')
    return scaled


def check_ksize_bounds(arg):
    try:
        ksize = int(arg)
    except ValueError:
        raise argparse.ArgumentTypeError(f"ERROR: ksize value '{arg}' is not an integer")

    if ksize <= 0:
        raise argparse.ArgumentTypeError("ERROR: ksize value must be positive")
    return ksize


def check_processes(arg):
    try:
        n = int(arg)
    except ValueError:
        raise argparse.ArgumentTypeError(f"ERROR: processes value '{arg}' is not an integer")

    if n < 1:
        raise argparse.ArgumentTypeError("ERROR: need at least one process")
    return n


def encoding_type(arg):
    for hf in ENCODINGS:
        if hf.value.lower() == arg.lower():
            return hf
    choices = ", ".join(hf.value for hf in ENCODINGS)
    raise argparse.ArgumentTypeError(f"ERROR: unknown encoding '{arg}'; choose one of {choices}")


def load_pathlist_from_file(filename):
    """Load a list-of-files text file: one path per line, in file order.

    Lines are taken as-is apart from the line terminator.
    """
    try:
        with open(filename, 'rt') as fp:
            file_list = [ x.rstrip('\r\n') for x in fp ]
    except FileNotFoundError:
        raise ValueError(f"pathlist file '{filename}' does not exist")
    except OSError:
        raise ValueError(f"cannot open file '{filename}'")
    except UnicodeDecodeError:
        raise ValueError(f"cannot parse file '{filename}' as list of filenames")
    return file_list


def make_output_dir(output, ksize):
    "Create (if needed) and return the per-ksize output directory."
    if not output:
        output = DEFAULT_OUTPUT
    outdir = os.path.join(output, str(ksize))
    os.makedirs(outdir, exist_ok=True)
    return outdir


class FileOutput:
    """Open 'filename' for writing, or hand back sys.stdout for '-' or None.

    Only files opened here are closed on exit.
    """
    def __init__(self, filename, mode='wt', *, encoding='utf-8'):
        self.filename = filename
        self.mode = mode
        self.encoding = encoding
        self.fp = None

    def __enter__(self):
        if self.filename in (None, '-'):
            return sys.stdout
        self.fp = open(self.filename, self.mode, encoding=self.encoding)
        return self.fp

    def __exit__(self, exc_type, exc_value, traceback):
        if self.fp is not None:
            self.fp.close()
            self.fp = None
        return False
