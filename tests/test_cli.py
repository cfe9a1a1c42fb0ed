import logging

import pytest

from glyphsolve.__main__ import _parse_assignment, _parse_strength, main
from glyphsolve.solver import ConstraintStrength


def test_parse_assignment():
    assert _parse_assignment("width=80") == ("width", 80.0, None)
    assert _parse_assignment(" x1 = -5@weak") == ("x1", -5.0, "weak")
    with pytest.raises(ValueError):
        _parse_assignment("width")
    with pytest.raises(ValueError):
        _parse_assignment("width=wide")


def test_parse_strength():
    assert _parse_strength(None) is ConstraintStrength.STRONG
    assert _parse_strength("hard") is ConstraintStrength.HARD
    with pytest.raises(ValueError):
        _parse_strength("loud")


def test_main_prints_default_layout(capsys):
    main([])

    out = capsys.readouterr().out
    assert "glyph.rectangle" in out
    assert "  x1 = -30" in out
    assert "  width = 60" in out
    assert "guides:" in out
    assert "line x" in out


def test_main_applies_edits_and_marks(capsys):
    main(["--set", "width=80", "--mark", "mark.rect"])

    out = capsys.readouterr().out
    assert "  x1 = -40" in out
    assert "  x2 = 40" in out
    assert "mark.rect" in out
    assert "  fill = #888888" in out


def test_main_reports_hints(capsys):
    main(["--pin", "height=400@HARD"])

    out = capsys.readouterr().out
    assert "  height = 400" in out
    assert "hint:" in out
    assert "height" in out


def test_main_exits_on_infeasible_pins(caplog):
    with caplog.at_level(logging.ERROR, logger="glyphsolve.__main__"):
        with pytest.raises(SystemExit) as excinfo:
            main(["--pin", "x1=0@HARD", "--pin", "x1=5@HARD"])

    assert excinfo.value.code == 2
    assert "infeasible" in caplog.text


@pytest.mark.parametrize(
    "argv, message",
    [
        (["--set", "width"], "expected NAME=VALUE"),
        (["--pin", "width=80@loud"], "unknown strength"),
        (["--set", "depth=3"], "depth"),
        (["--glyph", "mark.rect"], "mark.rect"),
    ],
)
def test_main_rejects_bad_arguments(capsys, argv, message):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)

    assert excinfo.value.code == 2
    assert message in capsys.readouterr().err
