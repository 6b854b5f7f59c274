import pytest

import tinct.cache


@pytest.fixture(autouse=True)
def registry():
    with tinct.cache.use_registry() as registry:
        yield registry
