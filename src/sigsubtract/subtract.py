"""
Subtract one query sketch from many signature files.

load_query_hashes() extracts the hashes to remove, once per run.
subtract_one() handles a single target file: load, resolve against the
template, remove the query hashes and write the reduced signature.
subtract_all() fans subtract_one() out over a whole list of files.
"""
import os
from functools import partial

from .batch import run_batch, BatchProgress
from .exceptions import (IncompatibleSketchError, QueryResolutionError,
                         TargetResolutionError, TargetIOError)
from .logging import notify, debug
from .signature import load_signatures_from_path, save_signatures
from .template import select_exact, select_and_downsample


def load_query_hashes(filename, template):
    """Load the query signature file and return its hashes as a FrozenMinHash.

    Only an exact match with 'template' is accepted; the last matching
    sketch across all records in the file is used.
    """
    query_mh = None
    for sig in load_signatures_from_path(filename):
        mh = select_exact(sig, template)
        if mh is not None:
            query_mh = mh

    if query_mh is None:
        raise QueryResolutionError(filename, template)

    query_mh.into_frozen()
    return query_mh


def output_path_for(filename, outdir):
    "Output location for 'filename': its base name, under 'outdir'."
    return os.path.join(outdir, os.path.basename(filename))


def compose_output(sig, minhash):
    "Replace every sketch in 'sig' with 'minhash', keeping the metadata."
    sig.reset_sketches()
    sig.push(minhash)
    return sig


def write_output(sig, path):
    "Write 'sig' to 'path' as a one-element signature list."
    with open(path, 'wt') as fp:
        save_signatures([sig], fp)


def subtract_one(filename, *, template, query_hashes, outdir):
    """Remove 'query_hashes' from the signature in 'filename' and save it.

    Only the first signature record in the file is processed. Returns the
    output path.
    """
    try:
        sigs = load_signatures_from_path(filename)
    except OSError as exc:
        raise TargetIOError(filename, "reading", exc) from exc
    if not sigs:
        raise TargetResolutionError(filename, template)
    target_sig = sigs[0]

    try:
        target_mh = select_and_downsample(target_sig, template)
    except IncompatibleSketchError as exc:
        raise TargetResolutionError(filename, template) from exc

    n_before = len(target_mh)
    target_mh.remove_many(query_hashes)
    debug("removed {} of {} hashes from '{}'",
          n_before - len(target_mh), n_before, filename)

    outpath = output_path_for(filename, outdir)
    compose_output(target_sig, target_mh)
    try:
        write_output(target_sig, outpath)
    except OSError as exc:
        raise TargetIOError(outpath, "writing", exc) from exc

    return outpath


def subtract_all(filenames, *, template, query_hashes, outdir, n_jobs=None,
                 progress=None):
    """Run subtract_one() over every file in 'filenames' (fail-fast).

    'outdir' must already exist. Returns the number of files written.
    """
    if progress is None:
        progress = BatchProgress()

    func = partial(subtract_one, template=template,
                   query_hashes=query_hashes, outdir=outdir)
    n = run_batch(filenames, func, n_jobs=n_jobs, progress=progress)
    notify("Subtracted query from {} signatures", n)
    return n
