"""Command line smoke tests."""

from __future__ import annotations

from pathlib import Path

from predprey_field.main import main


def _config(tmp_path: Path) -> Path:
    path = tmp_path / "small.yaml"
    path.write_text("""
grid:
  depth: 20
  width: 20
simulation:
  max_steps: 5
population:
  fox_probability: 0.05
  rabbit_probability: 0.2
""")
    return path


def test_run_writes_log_and_snapshot(tmp_path: Path) -> None:
    out = tmp_path / "out"
    code = main(["--config", str(_config(tmp_path)), "--out-dir", str(out),
                 "--seed", "3", "--quiet"])
    assert code == 0
    assert (out / "Logs.dat").read_text().startswith("[start]")
    assert (out / "final_state.png").exists()


def test_analyse_reads_previous_runs(tmp_path: Path, capsys) -> None:
    out = tmp_path / "out"
    for seed in ("1", "2"):
        main(["--config", str(_config(tmp_path)), "--out-dir", str(out),
              "--seed", seed, "--quiet", "--no-snapshot"])
    capsys.readouterr()

    assert main(["--analyse", "--out-dir", str(out)]) == 0
    assert "Runs logged:           2" in capsys.readouterr().out


def test_missing_config_fails(tmp_path: Path, capsys) -> None:
    assert main(["--config", str(tmp_path / "nope.yaml")]) == 1
    assert "not found" in capsys.readouterr().err


def test_missing_log_fails(tmp_path: Path) -> None:
    assert main(["--analyse", "--out-dir", str(tmp_path)]) == 1


def test_no_exports(tmp_path: Path) -> None:
    out = tmp_path / "out"
    code = main(["--config", str(_config(tmp_path)), "--out-dir", str(out),
                 "--quiet", "--no-log", "--no-snapshot"])
    assert code == 0
    assert not out.exists()
