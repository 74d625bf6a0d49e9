"""Test configuration ensuring src package discoverability & settings reset helpers."""
import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def reset_settings_cache():  # convenience for tests toggling env flags
    from utils.settings import get_settings
    get_settings.cache_clear()  # type: ignore


@pytest.fixture
def clean_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


# Known cloud with minimum pairwise distance 1.0, realized by (0,1)-(1,1) and (0,-2)-(1,-2)
FIXTURE_XS = [-2, 1, 2, 0, -8, -7, -8, 5, 1, 1, -2, 5, 4, 3, -5, 8, 4, 2, 1, 0]
FIXTURE_YS = [0, 3, 4, -2, -3, 4, 2, 0, 1, 2, -2, -1, 4, 0, 2, -2, 3, -3, -2, 1]


@pytest.fixture
def fixture_cloud():
    return list(FIXTURE_XS), list(FIXTURE_YS)


@pytest.fixture(autouse=True)
def default_tolerances():
    from utils.config import set_tolerances
    set_tolerances(None)
    yield
    set_tolerances(None)
