import os

from hypothesis import settings, Verbosity
import pytest

from sigsubtract import logging as sigsubtract_logging

from sigsubtract_tst_utils import TempDirectory, RunnerContext


@pytest.fixture
def runtmp():
    with TempDirectory() as location:
        yield RunnerContext(location)


@pytest.fixture(autouse=True)
def reset_quiet():
    yield
    sigsubtract_logging.set_quiet(False, False)


@pytest.fixture(params=[1, 4])
def n_jobs(request):
    return request.param


@pytest.fixture(params=[True, False])
def track_abundance(request):
    return request.param


settings.register_profile("ci", max_examples=1000)
settings.register_profile("dev", max_examples=10)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)
settings.load_profile(os.getenv(u'HYPOTHESIS_PROFILE', 'default'))
