"""
Save and load MinHash sketches in a JSON format, along with some metadata.
"""
import gzip
import io
import json
import zlib

import ijson

from .exceptions import SignatureLoadError
from .minhash import MinHash
from .signature_json import load_signatureset_json_iter


SIGNATURE_VERSION = 0.4
GZIP_MAGIC = b'\x1f\x8b'


class SourmashSignature:
    "Main class for signature information: metadata plus one or more sketches."

    def __init__(self, minhashes=None, name="", filename="", *, email="",
                 license="CC0", hash_function="0.murmur64"):
        if isinstance(minhashes, MinHash):
            minhashes = [minhashes]
        self._minhashes = list(minhashes or [])

        self.name = name
        self.filename = filename
        self.email = email
        self.license = license
        self.hash_function = hash_function

    @property
    def minhash(self):
        if not self._minhashes:
            raise ValueError("signature has no sketches")
        return self._minhashes[0]

    @property
    def minhashes(self):
        return tuple(self._minhashes)

    def reset_sketches(self):
        "Drop all sketches, keeping the metadata."
        self._minhashes = []

    def push(self, minhash):
        "Attach another sketch."
        self._minhashes.append(minhash)

    def md5sum(self):
        "Calculate md5 hash of the first sketch, specifically."
        return self.minhash.md5sum()

    def __len__(self):
        return len(self._minhashes)

    def __eq__(self, other):
        if not isinstance(other, SourmashSignature):
            return NotImplemented
        return (self.name == other.name and
                self.filename == other.filename and
                self.minhashes == other.minhashes)

    def __str__(self):
        return self._display_name()

    def __repr__(self):
        return f"SourmashSignature('{self._display_name()}', {len(self)} sketches)"

    def _display_name(self, max_length=0):
        name = self.name
        filename = self.filename
        if name:
            s = name
        elif filename:
            s = filename
        elif self._minhashes:
            s = self.md5sum()[:8]
        else:
            s = ""

        if max_length and len(s) > max_length:
            s = s[:max_length - 3] + '...'
        return s

    def _save(self):
        "Return a JSON-able dictionary for this signature record."
        sketches = []
        for mh in self._minhashes:
            sketch = {}
            sketch['num'] = mh.num
            sketch['ksize'] = mh.ksize
            sketch['seed'] = mh.seed
            sketch['max_hash'] = mh.max_hash
            sketch['mins'] = mh.get_mins()
            if mh.track_abundance:
                sketch['abundances'] = mh.get_abundances()
            sketch['md5sum'] = mh.md5sum()
            sketch['molecule'] = mh.moltype
            sketches.append(sketch)

        record = {}
        record['class'] = 'sourmash_signature'
        record['email'] = self.email
        record['hash_function'] = self.hash_function
        record['filename'] = self.filename
        if self.name:
            record['name'] = self.name
        record['license'] = self.license
        record['signatures'] = sketches
        record['version'] = SIGNATURE_VERSION
        return record


def load_signatures(data, *, ignore_md5sum=False):
    """Load signatures from a JSON string, bytes, or a binary file handle.

    Returns a list of SourmashSignature objects, in file order.
    """
    location = getattr(data, 'name', '<buffer>')
    if isinstance(data, str):
        data = data.encode('utf-8')
    try:
        if isinstance(data, bytes):
            if data[:2] == GZIP_MAGIC:
                data = gzip.decompress(data)
            data = io.BytesIO(data)

        return list(load_signatureset_json_iter(data,
                                                ignore_md5sum=ignore_md5sum))
    except (gzip.BadGzipFile, zlib.error, EOFError) as exc:
        raise SignatureLoadError(location, exc) from exc
    except (ValueError, KeyError, TypeError, OverflowError,
            ijson.JSONError) as exc:
        raise SignatureLoadError(location, exc) from exc


def load_signatures_from_path(filename, *, ignore_md5sum=False):
    """Load all signatures from a (possibly gzipped) signature file.

    OSError is propagated for unreadable files; malformed content raises
    SignatureLoadError.
    """
    with open(filename, 'rb') as fp:
        magic = fp.read(2)
        fp.seek(0)
        try:
            if magic == GZIP_MAGIC:
                with gzip.open(fp, 'rb') as gz:
                    return list(load_signatureset_json_iter(gz, ignore_md5sum))
            return list(load_signatureset_json_iter(fp, ignore_md5sum))
        except (gzip.BadGzipFile, zlib.error, EOFError) as exc:
            raise SignatureLoadError(filename, exc) from exc
        except (ValueError, KeyError, TypeError, OverflowError,
                ijson.JSONError) as exc:
            raise SignatureLoadError(filename, exc) from exc


def save_signatures(siglist, fp=None):
    "Save multiple signatures into a JSON string (or into text file handle 'fp')"
    records = [ sig._save() for sig in siglist ]

    if fp is None:
        return json.dumps(records)

    json.dump(records, fp)
    return None
