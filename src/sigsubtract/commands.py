"""
Functions implementing the main command-line subcommands.
"""
import sys

from . import sigsubtract_args
from .exceptions import (SigsubtractError, IncompatibleSketchError,
                         TargetResolutionError)
from .logging import notify, error, set_quiet
from .signature import load_signatures_from_path, save_signatures
from .subtract import load_query_hashes, subtract_all, compose_output
from .template import SketchTemplate, select_and_downsample


def _template_from_args(args):
    return SketchTemplate.from_params(args.ksize, args.scaled,
                                      args.encoding, seed=args.seed)


def subtract(args):
    """
    subtract a query signature from every signature in a list of files.
    """
    set_quiet(args.quiet, args.debug)
    template = _template_from_args(args)

    notify("Loading queries")
    try:
        query_hashes = load_query_hashes(args.query, template)
    except OSError as exc:
        error("cannot read query signature '{}': {}", args.query, exc)
        sys.exit(-1)
    except SigsubtractError as exc:
        error("{}", exc)
        sys.exit(-1)
    notify("Loaded query signature, k={}", template.ksize)

    notify("Loading siglist")
    try:
        filenames = sigsubtract_args.load_pathlist_from_file(args.siglist)
    except ValueError as exc:
        error("{}", exc)
        sys.exit(-1)
    notify("Loaded {} sig paths in siglist", len(filenames))

    try:
        outdir = sigsubtract_args.make_output_dir(args.output, template.ksize)
    except OSError as exc:
        error("cannot create output directory: {}", exc)
        sys.exit(-1)

    try:
        subtract_all(filenames, template=template, query_hashes=query_hashes,
                     outdir=outdir, n_jobs=args.processes)
    except SigsubtractError as exc:
        error("{}", exc)
        sys.exit(-1)

    return 0


def downsample(args):
    """
    resolve signatures against a template, downsampling where needed.
    """
    set_quiet(args.quiet, args.debug)
    template = _template_from_args(args)

    output_sigs = []
    for filename in args.signatures:
        try:
            sigs = load_signatures_from_path(filename)
        except OSError as exc:
            error("cannot read signature '{}': {}", filename, exc)
            sys.exit(-1)
        except SigsubtractError as exc:
            error("{}", exc)
            sys.exit(-1)

        for sig in sigs:
            try:
                mh = select_and_downsample(sig, template)
            except IncompatibleSketchError:
                error("{}", TargetResolutionError(filename, template))
                sys.exit(-1)
            output_sigs.append(compose_output(sig, mh))

        notify("loaded and downsampled {} signatures from '{}'", len(sigs), filename)

    with sigsubtract_args.FileOutput(args.output, 'wt') as fp:
        save_signatures(output_sigs, fp)

    notify("output {} signatures", len(output_sigs))
    return 0
