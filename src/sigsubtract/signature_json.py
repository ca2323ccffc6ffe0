"""
Streaming JSON loader for signature files, built on ijson parse events.

Signature files hold a list of records; each record carries metadata
(name, filename, license, ...) and a 'signatures' list of sketches. Large
'mins' arrays are read straight off the event stream.
"""
import ijson

from .minhash import MinHash, HashFunctions, MINHASH_DEFAULT_SEED


def _next(iterable):
    try:
        return next(iterable)
    except StopIteration:
        raise ValueError("unexpected end of JSON input")


def _json_skip_value(iterable, event):
    "Consume the remainder of a nested value that began with 'event'."
    if event not in ('start_map', 'start_array'):
        return
    depth = 1
    while depth:
        prefix, event, value = _next(iterable)
        if event in ('start_map', 'start_array'):
            depth += 1
        elif event in ('end_map', 'end_array'):
            depth -= 1


def _json_next_atomic_array(iterable):
    """
    - iterable: iterator as returned by ijson.parse
    """
    l = list()
    prefix, event, value = _next(iterable)
    while event != 'start_array':
        prefix, event, value = _next(iterable)
    prefix, event, value = _next(iterable)
    while event != 'end_array':
        if event in ('start_map', 'start_array'):
            raise ValueError("expected an array of integers")
        l.append(value)
        prefix, event, value = _next(iterable)
    return l


def _json_next_sketch(iterable, ignore_md5sum=False):
    """Helper function to unpack and check one sketch block only; the
    'start_map' event must already have been consumed.
    - iterable: an iterable such the one returned by ijson.parse()
    - ignore_md5sum: skip checking the stored md5sum
    """
    d = dict()
    prefix, event, value = _next(iterable)
    while event != 'end_map':
        key = value
        if key in ('mins', 'abundances'):
            value = _json_next_atomic_array(iterable)
        else:
            prefix, event, value = _next(iterable)
            if event in ('start_map', 'start_array'):
                _json_skip_value(iterable, event)
                value = None
        d[key] = value
        prefix, event, value = _next(iterable)

    ksize = d['ksize']
    mins = d['mins']
    n = d.get('num', 0)
    if n == 0xffffffff:               # load legacy signatures where n == -1
        n = 0
    max_hash = d.get('max_hash', 0)
    seed = d.get('seed', MINHASH_DEFAULT_SEED)
    hash_function = HashFunctions.from_molecule(d.get('molecule', 'DNA'))

    track_abundance = 'abundances' in d
    mh = MinHash(n, ksize, hash_function=hash_function,
                 track_abundance=track_abundance,
                 max_hash=max_hash, seed=seed)

    if not track_abundance:
        mh.add_many(mins)
    else:
        abundances = list(map(int, d['abundances']))
        if len(abundances) != len(mins):
            raise ValueError("'mins' and 'abundances' differ in length")
        mh.set_abundances(zip(mins, abundances))

    if not ignore_md5sum and d.get('md5sum'):
        if d['md5sum'] != mh.md5sum():
            raise ValueError('error loading - md5 of minhash does not match')

    return mh


def _json_next_record(iterable, ignore_md5sum=False):
    """Unpack one signature record; the 'start_map' event must already have
    been consumed. Returns a SourmashSignature.
    """
    from .signature import SourmashSignature

    d = dict()
    minhashes = []
    prefix, event, value = _next(iterable)
    while event != 'end_map':
        key = value
        if key == 'signatures':
            prefix, event, value = _next(iterable)
            if event != 'start_array':
                raise ValueError("expected 'signatures' to be a list")
            prefix, event, value = _next(iterable)
            while event != 'end_array':
                if event != 'start_map':
                    raise ValueError('expected "start_map".')
                minhashes.append(_json_next_sketch(iterable, ignore_md5sum))
                prefix, event, value = _next(iterable)
        else:
            prefix, event, value = _next(iterable)
            if event in ('start_map', 'start_array'):
                _json_skip_value(iterable, event)
                value = None
            d[key] = value
        prefix, event, value = _next(iterable)

    if d.get('class', 'sourmash_signature') != 'sourmash_signature':
        raise ValueError(f"unknown signature class: {d['class']}")

    # hardcode in support only for CC0 going forward
    if d.get('license', 'CC0') != 'CC0':
        raise ValueError("only CC0-licensed signatures are supported.")

    return SourmashSignature(minhashes,
                             name=d.get('name') or "",
                             filename=d.get('filename') or "",
                             email=d.get('email') or "",
                             hash_function=d.get('hash_function') or "0.murmur64")


def load_signatureset_json_iter(data, ignore_md5sum=False):
    """
    - data: binary file handle (or file handle-like) object
    - ignore_md5sum: skip checking stored md5sums

    Yields one SourmashSignature per record, in file order. A bare record
    (not wrapped in a list) is also accepted.
    """
    parser = ijson.parse(data)

    prefix, event, value = _next(parser)
    if event == 'start_map':
        yield _json_next_record(parser, ignore_md5sum)
        return

    if event != 'start_array':
        raise ValueError("expected a list of signatures")

    prefix, event, value = _next(parser)
    while event != 'end_array':
        if event != 'start_map':
            raise ValueError('expected "start_map".')
        yield _json_next_record(parser, ignore_md5sum)
        prefix, event, value = _next(parser)
