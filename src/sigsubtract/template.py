"""
Sketch templates and the compatibility resolver.

A SketchTemplate fixes the comparison space for a run (ksize, hash function,
seed and scaled threshold) without holding any hashes. resolve() decides how
a single sketch relates to a template, and select_and_downsample() applies
that decision across all of the sketches in a signature.
"""
from dataclasses import dataclass
from enum import Enum

from .exceptions import IncompatibleSketchError
from .minhash import (HashFunctions, MINHASH_DEFAULT_SEED, MINHASH_MAX_HASH,
                      _get_max_hash_for_scaled)


@dataclass(frozen=True)
class SketchTemplate:
    "Parameters for a threshold MinHash; carries no hash values."
    ksize: int
    hash_function: HashFunctions
    scaled: int
    seed: int = MINHASH_DEFAULT_SEED

    @classmethod
    def from_params(cls, ksize, scaled, hash_function, seed=MINHASH_DEFAULT_SEED):
        if not isinstance(hash_function, HashFunctions):
            hash_function = HashFunctions.from_molecule(hash_function)
        if not 0 <= int(scaled) <= MINHASH_MAX_HASH:
            raise ValueError(f"scaled must be between 0 and {MINHASH_MAX_HASH}")
        return cls(ksize=int(ksize), hash_function=hash_function,
                   scaled=int(scaled), seed=int(seed))

    @property
    def max_hash(self):
        "0 means unbounded."
        return _get_max_hash_for_scaled(self.scaled)

    @property
    def num(self):
        return 0

    def __str__(self):
        return (f"MinHash(ksize={self.ksize}, moltype={self.hash_function}, "
                f"scaled={self.scaled}, max_hash={self.max_hash}, "
                f"seed={self.seed})")


class Resolution(Enum):
    EXACT = 1
    DOWNSAMPLE = 2
    INCOMPATIBLE = 3


def resolve(mh, template):
    "Classify how 'mh' can be brought into the comparison space of 'template'."
    if mh.num != 0:
        return Resolution.INCOMPATIBLE
    if (mh.ksize != template.ksize or
            mh.hash_function != template.hash_function or
            mh.seed != template.seed):
        return Resolution.INCOMPATIBLE

    if mh.max_hash == template.max_hash:
        return Resolution.EXACT

    # max_hash == 0 is unbounded, finer than any bounded template
    if template.max_hash and (mh.max_hash == 0 or
                              mh.max_hash > template.max_hash):
        return Resolution.DOWNSAMPLE

    return Resolution.INCOMPATIBLE


def select_exact(sig, template):
    """Return a copy of the last sketch in 'sig' that exactly matches
    'template', or None."""
    selected = None
    for mh in sig.minhashes:
        if resolve(mh, template) == Resolution.EXACT:
            selected = mh
    if selected is None:
        return None
    return selected.to_mutable()


def select_and_downsample(sig, template):
    """Pick a sketch from 'sig' at the resolution of 'template'.

    All sketches are scanned and the last one that either matches exactly
    or can be downsampled wins. Returns a new mutable MinHash; raises
    IncompatibleSketchError when nothing matches.
    """
    selected = None
    for mh in sig.minhashes:
        resolution = resolve(mh, template)
        if resolution == Resolution.EXACT:
            selected = mh.to_mutable()
        elif resolution == Resolution.DOWNSAMPLE:
            selected = mh.downsample(max_hash=template.max_hash)

    if selected is None:
        raise IncompatibleSketchError(template)
    return selected
