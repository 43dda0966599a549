import sys

import pytest

from .console import Console


@pytest.fixture
def console() -> Console:
    return Console(sys.stdout, verbose=True, strict=True)
