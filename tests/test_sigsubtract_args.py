"""
Tests for functions in sigsubtract_args module.
"""
import argparse
import os
import sys

import pytest

from sigsubtract import sigsubtract_args
from sigsubtract.minhash import HashFunctions


def test_load_pathlist_from_file(tmp_path):
    path = tmp_path / 'list.txt'
    path.write_text("b.sig\na.sig\nb.sig\r\nsub dir/c.sig\n")

    files = sigsubtract_args.load_pathlist_from_file(str(path))
    # order and duplicates are kept
    assert files == ['b.sig', 'a.sig', 'b.sig', 'sub dir/c.sig']


def test_load_pathlist_no_existence_check(tmp_path):
    path = tmp_path / 'list.txt'
    path.write_text("/no/such/file.sig\n")

    files = sigsubtract_args.load_pathlist_from_file(str(path))
    assert files == ['/no/such/file.sig']


def test_load_pathlist_empty(tmp_path):
    path = tmp_path / 'list.txt'
    path.write_text("")
    assert sigsubtract_args.load_pathlist_from_file(str(path)) == []


def test_load_pathlist_missing(tmp_path):
    with pytest.raises(ValueError) as exc:
        sigsubtract_args.load_pathlist_from_file(str(tmp_path / 'nope.txt'))
    assert 'does not exist' in str(exc.value)


def test_load_pathlist_binary(tmp_path):
    path = tmp_path / 'list.txt.gz'
    path.write_bytes(b'\x1f\x8b\x08\x00\xff\xfe\xfd')

    with pytest.raises(ValueError) as exc:
        sigsubtract_args.load_pathlist_from_file(str(path))
    assert 'cannot parse file' in str(exc.value)


def test_check_scaled_bounds():
    assert sigsubtract_args.check_scaled_bounds('100') == 100
    assert sigsubtract_args.check_scaled_bounds('0') == 0

    with pytest.raises(argparse.ArgumentTypeError):
        sigsubtract_args.check_scaled_bounds('-1')
    with pytest.raises(argparse.ArgumentTypeError):
        sigsubtract_args.check_scaled_bounds('ten')


def test_check_scaled_bounds_upper_limit(capsys):
    assert sigsubtract_args.check_scaled_bounds(str(2**64 - 1)) == 2**64 - 1
    assert 'WARNING: scaled value should be <= 1e6' in capsys.readouterr().err

    with pytest.raises(argparse.ArgumentTypeError):
        sigsubtract_args.check_scaled_bounds(str(2**64))
    with pytest.raises(argparse.ArgumentTypeError):
        sigsubtract_args.check_scaled_bounds(str(2**65))


def test_check_ksize_bounds():
    assert sigsubtract_args.check_ksize_bounds('57') == 57

    with pytest.raises(argparse.ArgumentTypeError):
        sigsubtract_args.check_ksize_bounds('0')
    with pytest.raises(argparse.ArgumentTypeError):
        sigsubtract_args.check_ksize_bounds('1.5')


def test_encoding_type():
    assert sigsubtract_args.encoding_type('protein') == HashFunctions.PROTEIN
    assert sigsubtract_args.encoding_type('Dayhoff') == HashFunctions.DAYHOFF
    assert sigsubtract_args.encoding_type('HP') == HashFunctions.HP

    with pytest.raises(argparse.ArgumentTypeError):
        sigsubtract_args.encoding_type('DNA')


def test_make_output_dir(tmp_path):
    outdir = sigsubtract_args.make_output_dir(str(tmp_path / 'out'), 57)
    assert outdir == os.path.join(str(tmp_path / 'out'), '57')
    assert os.path.isdir(outdir)

    # existing directories are fine
    assert sigsubtract_args.make_output_dir(str(tmp_path / 'out'), 57) == outdir


def test_make_output_dir_default(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    outdir = sigsubtract_args.make_output_dir(None, 31)
    assert outdir == os.path.join('outputs', '31')
    assert os.path.isdir(tmp_path / 'outputs' / '31')


def test_make_output_dir_blocked(tmp_path):
    blocker = tmp_path / 'out'
    blocker.write_text('a file')

    with pytest.raises(OSError):
        sigsubtract_args.make_output_dir(str(blocker), 57)


def test_fileoutput_stdout():
    with sigsubtract_args.FileOutput('-') as fp:
        assert fp is sys.stdout
    with sigsubtract_args.FileOutput(None) as fp:
        assert fp is sys.stdout


def test_fileoutput_file(tmp_path):
    path = str(tmp_path / 'x.txt')
    with sigsubtract_args.FileOutput(path, 'wt') as fp:
        fp.write('hello')

    with open(path) as fp:
        assert fp.read() == 'hello'


def test_check_processes():
    assert sigsubtract_args.check_processes('4') == 4

    with pytest.raises(argparse.ArgumentTypeError):
        sigsubtract_args.check_processes('0')
    with pytest.raises(argparse.ArgumentTypeError):
        sigsubtract_args.check_processes('many')
