"""
Tests for the 'sigsubtract downsample' command line.
"""
import pytest

import sigsubtract_tst_utils as utils
from sigsubtract_tst_utils import make_minhash, write_sig
from sigsubtract import load_signatures, load_signatures_from_path
from sigsubtract.minhash import _get_max_hash_for_scaled


def test_downsample_to_stdout(runtmp):
    max_1000 = _get_max_hash_for_scaled(1000)
    write_sig(runtmp.output('a.sig'),
              [make_minhash([1, 2, max_1000 + 1], scaled=100)], name='a')

    runtmp.sigsubtract('downsample', 'a.sig', '-k', '57', '-s', '1000')

    sigs = load_signatures(runtmp.last_result.out)
    assert len(sigs) == 1
    assert sigs[0].name == 'a'
    assert sigs[0].minhash.scaled == 1000
    assert sigs[0].minhash.get_mins() == [1, 2]


def test_downsample_multiple_files(runtmp):
    write_sig(runtmp.output('a.sig'),
              [make_minhash([1], moltype='hp'), make_minhash([2])])
    write_sig(runtmp.output('b.sig'), [make_minhash([3], scaled=10)])

    runtmp.sigsubtract('downsample', 'a.sig', 'b.sig',
                       '-k', '57', '-s', '100', '-o', 'out.sig')

    sigs = load_signatures_from_path(runtmp.output('out.sig'))
    assert [ len(sig) for sig in sigs ] == [1, 1]
    assert sigs[0].minhash.get_mins() == [2]
    assert sigs[1].minhash.get_mins() == [3]
    assert all(sig.minhash.scaled == 100 for sig in sigs)

    assert "output 2 signatures" in runtmp.last_result.err


def test_downsample_incompatible(runtmp):
    write_sig(runtmp.output('a.sig'), [make_minhash([1], scaled=1000)])

    with pytest.raises(utils.SigsubtractCommandFailed):
        runtmp.sigsubtract('downsample', 'a.sig', '-k', '57', '-s', '100')

    assert "Unable to load a sketch from 'a.sig'" in runtmp.last_result.err


def test_downsample_missing_file(runtmp):
    with pytest.raises(utils.SigsubtractCommandFailed):
        runtmp.sigsubtract('downsample', 'nope.sig')

    assert "cannot read signature 'nope.sig'" in runtmp.last_result.err


def test_downsample_requires_signatures(runtmp):
    with pytest.raises(utils.SigsubtractCommandFailed):
        runtmp.sigsubtract('downsample')

    assert runtmp.last_result.status == 2
