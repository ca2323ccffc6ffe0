from hypothesis import given, example
import hypothesis.strategies as st

from sigsubtract import MinHash
from sigsubtract.minhash import _get_max_hash_for_scaled


hash_lists = st.lists(st.integers(min_value=0, max_value=2**64 - 1),
                      min_size=0, max_size=500)


@given(hash_lists, hash_lists)
@example([1, 2, 3], [2])
def test_remove_many_is_set_difference(target, query):
    mh = MinHash(0, 21, scaled=1, mins=target)
    mh.remove_many(query)

    result = mh.get_mins()
    assert not set(result) & set(query)
    assert set(result) == set(target) - set(query)

    # survivors keep their first-seen order
    expected = []
    for h in target:
        if h not in query and h not in expected:
            expected.append(h)
    assert result == expected


@given(hash_lists, hash_lists)
def test_remove_many_is_idempotent(target, query):
    mh = MinHash(0, 21, scaled=1, mins=target)
    mh.remove_many(query)
    once = mh.get_mins()

    mh.remove_many(query)
    assert mh.get_mins() == once


@given(hash_lists,
       st.integers(min_value=1, max_value=1000),
       st.integers(min_value=1, max_value=1000))
@example([0, 2**64 - 1], 1, 2)
def test_downsample_is_monotonic(hashes, scaled_a, scaled_b):
    fine, coarse = sorted((scaled_a, scaled_b))

    mh = MinHash(0, 21, scaled=fine, mins=hashes)
    down = mh.downsample(scaled=coarse)

    assert len(down) <= len(mh)
    assert set(down.get_mins()) <= set(mh.get_mins())

    max_hash = _get_max_hash_for_scaled(coarse)
    assert all(h <= max_hash for h in down.get_mins())
    assert set(down.get_mins()) == { h for h in mh.get_mins() if h <= max_hash }


@given(st.lists(st.integers(min_value=0, max_value=2**64 - 1), min_size=10, max_size=1000),
       st.lists(st.integers(min_value=0, max_value=2**64 - 1), min_size=10, max_size=1000),
       st.integers(min_value=1000, max_value=10000))
@example([0], [0], 1000)
def test_set_abundance_scaled_hypothesis(hashes, abundances, scaled):
    a = MinHash(0, 10, track_abundance=True, scaled=scaled)
    oracle = dict(zip(hashes, abundances))

    a.set_abundances(oracle)

    max_hash = _get_max_hash_for_scaled(scaled)
    below_max_hash = sum(1 for (k, v) in oracle.items() if k <= max_hash and v > 0)

    mins = a.hashes
    assert len(mins) == below_max_hash

    for k, v in mins.items():
        assert oracle[k] == v
        assert k <= max_hash
        assert v > 0
