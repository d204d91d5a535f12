# tests/test_cli.py

import logging

import pytest

from moonphase import cli


def test_phases_command(capsys):
    assert cli.main(["phases", "2016-11-01", "--tz", "Europe/Paris"]) == 0
    out = capsys.readouterr().out
    assert "2016-10-30 16:39:34 CET" in out
    assert "2016-11-14 13:53:15 CET" in out
    assert "waning crescent" in out

def test_date_shorthand(capsys):
    assert cli.main(["2016-11-01", "--tz", "Europe/Paris"]) == 0
    assert "2016-11-21 08:35:28" in capsys.readouterr().out

def test_classify_command(capsys):
    assert cli.main(["classify", "2016-11-16", "--tz", "Europe/Paris"]) == 0
    assert capsys.readouterr().out.strip().endswith("full moon")

def test_classify_indeterminate(capsys):
    assert cli.main(["classify", "2016-11-25", "--tz", "Europe/Paris"]) == 0
    assert "indeterminate" in capsys.readouterr().out
    assert cli.main(["classify", "2016-11-25", "--tz", "Europe/Paris", "--strict"]) == 2

def test_unknown_zone_exits_with_error(capsys):
    assert cli.main(["phases", "2016-11-01", "--tz", "Nowhere/Land"]) == 1
    assert "Nowhere/Land" in capsys.readouterr().err

def test_bad_date():
    with pytest.raises(SystemExit):
        cli.main(["phases", "2016-13-45"])

def test_args_command(capsys):
    assert cli.main(["args", "--k", "-283"]) == 0
    out = capsys.readouterr().out
    assert "k = -283" in out
    assert "JDE (mean phase) = 2443192.9410" in out

def test_args_from_date(capsys):
    assert cli.main(["args", "--date", "2016-11-01", "--phase", "full_moon", "--tz", "Europe/Paris"]) == 0
    assert "k = 208.5" in capsys.readouterr().out

def test_verbose_flag_configures_debug_logging(monkeypatch, capsys):
    calls = []
    monkeypatch.setattr(cli.logging, "basicConfig", lambda **kw: calls.append(kw))

    assert cli.main(["classify", "2016-11-16", "--tz", "Europe/Paris"]) == 0
    assert calls == []

    assert cli.main(["-v", "classify", "2016-11-16", "--tz", "Europe/Paris"]) == 0
    assert calls and calls[0]["level"] == logging.DEBUG

    assert cli.main(["--verbose", "2016-11-01", "--tz", "Europe/Paris"]) == 0
    assert len(calls) == 2
    assert "2016-11-14 13:53:15" in capsys.readouterr().out
