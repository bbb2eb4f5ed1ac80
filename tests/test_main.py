import sys

import pytest

from intkdtree import main as demo


def run_main(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["intkdtree-demo", *argv])
    demo.main()


def test_sample_output(monkeypatch, capsys):
    run_main(monkeypatch)
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "(point: 50 50 )",
        "(point: 10 60 ), (point: 80 40 )",
        "(point: 48 38 ), null, (point: 51 38 ), null",
        "null, null, null, null",
        "Nearest Neighbor: (48 38 )",
        "Squared distance: 68",
    ]


def test_custom_target(monkeypatch, capsys):
    run_main(monkeypatch, "-t", "79", "41")
    out = capsys.readouterr().out
    assert "Nearest Neighbor: (80 40 )" in out


def test_random_points(monkeypatch, capsys):
    run_main(monkeypatch, "-r", "20", "-d", "3", "-t", "1", "2", "3")
    out = capsys.readouterr().out
    assert "Nearest Neighbor:" in out


def test_mismatched_target_exits(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        run_main(monkeypatch, "-t", "1", "2", "3")
    assert excinfo.value.code == 1
    assert "Dimension mismatch" in capsys.readouterr().out


def test_invalid_dims_exits(monkeypatch):
    with pytest.raises(SystemExit) as excinfo:
        run_main(monkeypatch, "-r", "5", "-d", "0")
    assert excinfo.value.code == 1


def test_generate_points_is_seeded():
    a = demo.generate_points(10, 2, 100, seed=5)
    b = demo.generate_points(10, 2, 100, seed=5)
    assert a == b
    assert all(len(p) == 2 and all(0 <= v < 100 for v in p) for p in a)


def test_random_points_without_target(monkeypatch, capsys):
    run_main(monkeypatch, "-r", "20", "-d", "3")
    out = capsys.readouterr().out
    assert "Nearest Neighbor:" in out
    assert "Dimension mismatch" not in out
