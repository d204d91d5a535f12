from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from moonphase import MoonPhaseCalculator

PARIS = ZoneInfo("Europe/Paris")


@pytest.fixture
def paris():
    return PARIS


@pytest.fixture
def reference_calc():
    """The 2016-11-01 Europe/Paris reference lunation."""
    return MoonPhaseCalculator(datetime(2016, 11, 1), PARIS)
