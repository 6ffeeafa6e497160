import random

import pytest

from merge2048.utils import config


@pytest.fixture(autouse=True)
def _restore_config():
    saved = {name: getattr(config, name) for name in config._OVERRIDABLE}
    yield
    for name, value in saved.items():
        setattr(config, name, value)


@pytest.fixture
def rng():
    return random.Random(2048)
