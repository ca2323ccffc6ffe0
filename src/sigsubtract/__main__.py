"""
The main entry point for sigsubtract, defined in setup.py.

Can also be executed as 'python -m sigsubtract'.
"""


def main(arglist=None):
    import sigsubtract.cli
    args = sigsubtract.cli.parse_args(arglist)
    if args.cmd is None:
        sigsubtract.cli.get_parser().print_help()
        raise SystemExit(1)

    mod = getattr(sigsubtract.cli, args.cmd)
    mainmethod = getattr(mod, 'main')

    retval = mainmethod(args)
    raise SystemExit(retval)


if __name__ == '__main__':
    main()
