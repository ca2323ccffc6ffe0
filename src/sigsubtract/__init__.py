"""
sigsubtract: remove the hashes of one MinHash sketch from many signatures.
"""
from .minhash import (MinHash, FrozenMinHash, HashFunctions,
                      get_minhash_default_seed, get_minhash_max_hash)
DEFAULT_SEED = get_minhash_default_seed()
MAX_HASH = get_minhash_max_hash()

from .signature import (SourmashSignature, load_signatures,
                        load_signatures_from_path, save_signatures)
from .template import SketchTemplate, select_and_downsample

VERSION = '0.1.0'

from . import cli
