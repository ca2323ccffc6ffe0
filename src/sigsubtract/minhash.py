# -*- coding: utf-8 -*-
"""
sigsubtract submodule that provides the MinHash sketch class and utility
functions.

class MinHash - scaled (or num) MinHash sketch holding retained hash values.
class FrozenMinHash - read-only MinHash class.
"""
import hashlib
from collections.abc import Mapping
from enum import Enum

import numpy as np


__all__ = ['get_minhash_default_seed',
           'get_minhash_max_hash',
           'HashFunctions',
           'MinHash',
           'FrozenMinHash']


# default MurmurHash seed
MINHASH_DEFAULT_SEED = 42


def get_minhash_default_seed():
    "Return the default seed value used for the MurmurHash hashing function."
    return MINHASH_DEFAULT_SEED


# we use the 64-bit hash space of MurmurHash only
# this is 2 ** 64 - 1 in hexadecimal
MINHASH_MAX_HASH = 0xFFFFFFFFFFFFFFFF


def get_minhash_max_hash():
    "Return the maximum hash value."
    return MINHASH_MAX_HASH


def _get_max_hash_for_scaled(scaled):
    "Convert a 'scaled' value into a 'max_hash' value."
    if scaled == 0:
        return 0
    elif scaled == 1:
        return get_minhash_max_hash()

    return get_minhash_max_hash() // int(scaled)


def _get_scaled_for_max_hash(max_hash):
    "Convert a 'max_hash' value into a 'scaled' value."
    if max_hash == 0:
        return 0
    return min(
        int(round(get_minhash_max_hash() / max_hash, 0)),
        MINHASH_MAX_HASH
    )


class HashFunctions(Enum):
    "k-mer canonicalization schemes; values are the JSON 'molecule' strings."
    DNA = 'DNA'
    PROTEIN = 'protein'
    DAYHOFF = 'dayhoff'
    HP = 'hp'

    @classmethod
    def from_molecule(cls, molecule):
        for hf in cls:
            if hf.value.lower() == str(molecule).lower():
                return hf
        raise ValueError(f"unknown molecule type: {molecule}")

    def __str__(self):
        return self.value


def _as_hash_array(hashes):
    "Convert MinHash objects, arrays or iterables of ints into a uint64 array."
    if isinstance(hashes, MinHash):
        return hashes._mins
    if isinstance(hashes, np.ndarray):
        return hashes.astype(np.uint64, copy=False)
    return np.fromiter(hashes, dtype=np.uint64)


class _HashesWrapper(Mapping):
    "A read-only view of the hashes contained by a MinHash object."
    def __init__(self, h):
        self._data = h

    def __getitem__(self, key):
        return self._data[key]

    def __repr__(self):
        return repr(self._data)

    def __len__(self):
        return len(self._data)

    def __iter__(self):
        return iter(self._data)

    def __eq__(self, other):
        return list(self.items()) == list(other.items())

    def __setitem__(self, k, v):
        raise RuntimeError("cannot modify hashes directly; use 'add' methods")


class MinHash:
    """\
    The core sketch object for sigsubtract.

    MinHash objects store the retained hash values of a k-mer sketch, along
    with the parameters they were built with: ksize, hash function, seed,
    and either a ``num`` bound (standard MinHash) or a ``max_hash``
    threshold (``scaled`` MinHash). Hash values themselves are computed
    elsewhere; this class only holds, filters and removes them.

    Retained hashes keep the order in which they were added, and each hash
    is retained at most once.

    Basic usage:

    >>> from sigsubtract import MinHash
    >>> mh = MinHash(0, 57, hash_function='protein', scaled=100)
    >>> mh.add_many([5, 10, 20])
    >>> mh.remove_many([10, 99])
    >>> list(mh.hashes)
    [5, 20]
    """

    def __init__(
        self,
        n,
        ksize,
        *,
        hash_function=HashFunctions.DNA,
        track_abundance=False,
        seed=MINHASH_DEFAULT_SEED,
        max_hash=0,
        mins=None,
        scaled=0,
    ):
        """\
        Create a sigsubtract.MinHash object.

        To create a standard (``num``) MinHash, use:
           ``MinHash(<num>, <ksize>, ...)``

        To create a ``scaled`` MinHash, use
            ``MinHash(0, <ksize>, scaled=<int>, ...)``

        ``MinHash(0, <ksize>)`` is an unbounded sketch that keeps every hash.

        Optional arguments:
           * hash_function (default DNA) - HashFunctions member or molecule name
           * track_abundance (default False) - track hash multiplicity
           * mins (default None) - list of hashvals, or {hashval: abund}
           * seed (default 42) - murmurhash seed
        """
        if max_hash and scaled:
            raise ValueError("cannot set both max_hash and scaled")
        if scaled:
            max_hash = _get_max_hash_for_scaled(scaled)

        if max_hash and n:
            raise ValueError("cannot set both n and max_hash")

        if not isinstance(hash_function, HashFunctions):
            hash_function = HashFunctions.from_molecule(hash_function)

        self.num = int(n)
        self.ksize = int(ksize)
        self.hash_function = hash_function
        self.seed = int(seed)
        self._max_hash = int(max_hash)
        self.track_abundance = bool(track_abundance)

        self._mins = np.empty(0, dtype=np.uint64)
        self._abunds = np.empty(0, dtype=np.uint64) if track_abundance else None

        if mins is not None:
            if track_abundance:
                self.set_abundances(mins)
            else:
                self.add_many(mins)

    def __copy__(self):
        "Create a new copy of this MinHash."
        a = self.copy_and_clear()
        a._mins = self._mins.copy()
        if self.track_abundance:
            a._abunds = self._abunds.copy()
        return a

    copy = __copy__

    def __eq__(self, other):
        "equality testing via =="
        if not isinstance(other, MinHash):
            return NotImplemented
        return (self._params() == other._params() and
                self.hashes == other.hashes)

    def __repr__(self):
        return (f"MinHash(num={self.num}, ksize={self.ksize}, "
                f"moltype={self.moltype}, scaled={self.scaled}, "
                f"seed={self.seed}, size={len(self)})")

    def _params(self):
        return (self.num, self.ksize, self.hash_function, self.seed,
                self._max_hash, self.track_abundance)

    def copy_and_clear(self):
        "Create an empty copy of this MinHash."
        return MinHash(
            self.num,
            self.ksize,
            hash_function=self.hash_function,
            track_abundance=self.track_abundance,
            seed=self.seed,
            max_hash=self._max_hash,
        )

    def _select_new(self, hashes):
        "Return index of the entries of 'hashes' this sketch should keep."
        keep = np.ones(len(hashes), dtype=bool)
        if self._max_hash:
            keep &= hashes <= np.uint64(self._max_hash)
        if len(self._mins):
            keep &= ~np.isin(hashes, self._mins)

        idx = np.flatnonzero(keep)
        # first occurrence wins, in input order
        _, first = np.unique(hashes[idx], return_index=True)
        return idx[np.sort(first)]

    def _enforce_num(self):
        if self.num and len(self._mins) > self.num:
            order = np.argsort(self._mins, kind="stable")[:self.num]
            order.sort()
            self._mins = self._mins[order]
            if self.track_abundance:
                self._abunds = self._abunds[order]

    def add_many(self, hashes):
        """Add many hashes to the sketch at once.

        ``hashes`` can be either an iterable (list, set, etc.), a numpy
        array, or another ``MinHash`` object.
        """
        arr = _as_hash_array(hashes)
        idx = self._select_new(arr)
        self._mins = np.concatenate([self._mins, arr[idx]])
        if self.track_abundance:
            ones = np.ones(len(idx), dtype=np.uint64)
            self._abunds = np.concatenate([self._abunds, ones])
        self._enforce_num()

    def set_abundances(self, values, clear=True):
        """Set abundances for hashes from ``values``, where
        ``values[hash] = abund``.

        Hashes with an abundance of 0 are not retained.
        """
        if not self.track_abundance:
            raise RuntimeError(
                "Use track_abundance=True when constructing "
                "the MinHash to use set_abundances."
            )
        if clear:
            self.clear()

        items = values.items() if isinstance(values, Mapping) else values
        pairs = [(h, a) for (h, a) in items if a > 0]
        hashes = np.fromiter((h for h, _ in pairs), dtype=np.uint64,
                             count=len(pairs))
        abunds = np.fromiter((a for _, a in pairs), dtype=np.uint64,
                             count=len(pairs))

        idx = self._select_new(hashes)
        self._mins = np.concatenate([self._mins, hashes[idx]])
        self._abunds = np.concatenate([self._abunds, abunds[idx]])
        self._enforce_num()

    def remove_many(self, hashes):
        """Remove many hashes from a sketch at once.

        ``hashes`` can be either an iterable (list, set, etc.), a numpy
        array, or another ``MinHash`` object. Hashes not present in the
        sketch are ignored; the remaining hashes keep their order.
        """
        remove = _as_hash_array(hashes)
        if not len(remove) or not len(self._mins):
            return

        keep = ~np.isin(self._mins, remove)
        self._mins = self._mins[keep]
        if self.track_abundance:
            self._abunds = self._abunds[keep]

    def clear(self):
        "Clears all hashes and abundances."
        self._mins = np.empty(0, dtype=np.uint64)
        if self.track_abundance:
            self._abunds = np.empty(0, dtype=np.uint64)

    def __len__(self):
        "Number of hashes."
        return len(self._mins)

    @property
    def hashes(self):
        if self.track_abundance:
            d = dict(zip(self._mins.tolist(), self._abunds.tolist()))
        else:
            d = { k : 1 for k in self._mins.tolist() }
        return _HashesWrapper(d)

    def get_mins(self):
        "Return the retained hash values as a list, in retention order."
        return self._mins.tolist()

    def get_abundances(self):
        "Return abundances aligned with get_mins(), or None."
        if self.track_abundance:
            return self._abunds.tolist()
        return None

    @property
    def scaled(self):
        return _get_scaled_for_max_hash(self._max_hash)

    @property
    def max_hash(self):
        return self._max_hash

    @property
    def moltype(self):
        return self.hash_function.value

    def downsample(self, *, scaled=None, max_hash=None):
        """Copy this object and downsample new object to a coarser
        `scaled` (or `max_hash`) threshold.

        Every hash above the new threshold is discarded; the rest keep
        their order and abundances.
        """
        if scaled is None and max_hash is None:
            raise ValueError('must specify either scaled or max_hash to downsample')
        if scaled is not None and max_hash is not None:
            raise ValueError('cannot specify both scaled and max_hash')

        if self.num:
            raise ValueError("cannot downsample a num MinHash using scaled")

        if max_hash is None:
            max_hash = _get_max_hash_for_scaled(scaled)

        if not max_hash:
            if self._max_hash:
                raise ValueError("cannot downsample a scaled MinHash to unbounded")
        elif self._max_hash and max_hash > self._max_hash:
            raise ValueError(f"new scaled {_get_scaled_for_max_hash(max_hash)} "
                             f"is lower than current sample scaled {self.scaled}")

        a = MinHash(
            0, self.ksize,
            hash_function=self.hash_function,
            track_abundance=self.track_abundance, seed=self.seed,
            max_hash=max_hash
        )
        if max_hash:
            keep = self._mins <= np.uint64(max_hash)
        else:
            keep = np.ones(len(self._mins), dtype=bool)
        a._mins = self._mins[keep]
        if self.track_abundance:
            a._abunds = self._abunds[keep]

        return a

    def md5sum(self):
        "Calculate md5 hash of the retained hashes, in order."
        m = hashlib.md5()
        m.update(str(self.ksize).encode('ascii'))
        for k in self._mins.tolist():
            m.update(str(k).encode('utf-8'))
        return m.hexdigest()

    def to_mutable(self):
        "Return a copy of this MinHash that can be changed."
        return self.__copy__()

    def to_frozen(self):
        "Return a frozen copy of this MinHash that cannot be changed."
        new_mh = self.__copy__()
        new_mh.into_frozen()
        return new_mh

    def into_frozen(self):
        "Freeze this MinHash, preventing any changes."
        self._mins.flags.writeable = False
        if self.track_abundance:
            self._abunds.flags.writeable = False
        self.__class__ = FrozenMinHash


class FrozenMinHash(MinHash):
    def add_many(self, *args, **kwargs):
        raise TypeError('FrozenMinHash does not support modification')

    def set_abundances(self, *args, **kwargs):
        raise TypeError('FrozenMinHash does not support modification')

    def remove_many(self, *args, **kwargs):
        raise TypeError('FrozenMinHash does not support modification')

    def clear(self, *args, **kwargs):
        raise TypeError('FrozenMinHash does not support modification')

    def downsample(self, *, scaled=None, max_hash=None):
        if scaled and self.scaled == scaled:
            return self
        if max_hash and self._max_hash == max_hash:
            return self

        down_mh = MinHash.downsample(self, scaled=scaled, max_hash=max_hash)
        down_mh.into_frozen()
        return down_mh

    def to_mutable(self):
        "Return a copy of this MinHash that can be changed."
        mut = self.copy_and_clear()
        mut._mins = self._mins.copy()
        if self.track_abundance:
            mut._abunds = self._abunds.copy()
        return mut

    def to_frozen(self):
        "Return a frozen copy of this MinHash that cannot be changed."
        return self

    def into_frozen(self):
        "Freeze this MinHash, preventing any changes."
        pass

    def __copy__(self):
        return self
    copy = __copy__
