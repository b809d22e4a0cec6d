import pytest

from pyinicfg import registry


@pytest.fixture(autouse=True)
def _builtin_converters_only():
    yield
    registry.reset()
