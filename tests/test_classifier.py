# tests/test_classifier.py

import logging
from datetime import datetime

import pytest

from moonphase.core.errors import IndeterminateClassificationError
from moonphase.core.types import PhaseKind
from moonphase.engines.classifier import classify, classify_strict


def test_mid_november_is_full_moon(paris):
    assert classify(datetime(2016, 11, 16, tzinfo=paris), paris) is PhaseKind.FULL_MOON

def test_event_instants_classify_as_their_own_phase(reference_calc, paris):
    events = reference_calc.all_phase_events()
    for kind in list(PhaseKind)[:-1]:
        assert classify(events[kind].instant, paris) is kind

def test_waning_crescent_instant_is_indeterminate(reference_calc, paris):
    ev = reference_calc.waning_crescent()
    assert classify(ev.instant, paris) is None

def test_boundary_before_waning_crescent(paris):
    assert classify(datetime(2016, 11, 24, 23, 59, 59, tzinfo=paris), paris) is PhaseKind.LAST_QUARTER
    assert classify(datetime(2016, 11, 25, 0, 0, 0, tzinfo=paris), paris) is None
    assert classify(datetime(2016, 11, 27, 12, 0, tzinfo=paris), paris) is None

def test_next_lunation_new_moon(paris):
    # k = 209 new moon falls at 2016-11-29 12:19:34 CET
    assert classify(datetime(2016, 11, 29, 13, 0, tzinfo=paris), paris) is PhaseKind.NEW_MOON

def test_between_events(paris):
    assert classify(datetime(2016, 11, 5, 12, 0, tzinfo=paris), paris) is PhaseKind.WAXING_CRESCENT
    assert classify(datetime(2016, 11, 8, 0, 0, tzinfo=paris), paris) is PhaseKind.FIRST_QUARTER
    assert classify(datetime(2016, 11, 19, 0, 0, tzinfo=paris), paris) is PhaseKind.WANING_GIBBOUS

def test_strict_raises_when_indeterminate(paris):
    with pytest.raises(IndeterminateClassificationError):
        classify_strict(datetime(2016, 11, 25, tzinfo=paris), paris)
    assert classify_strict(datetime(2016, 11, 16, tzinfo=paris), paris) is PhaseKind.FULL_MOON

def test_reanchor_is_logged(paris, caplog):
    caplog.set_level(logging.DEBUG, logger="moonphase.engines.classifier")
    classify(datetime(2016, 11, 16, tzinfo=paris), paris)
    assert any("re-anchoring" in r.getMessage() for r in caplog.records)
