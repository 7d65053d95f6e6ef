"""Tests for the command-line interface."""

import json

import pytest

from moral_sim import __version__
from moral_sim.cli import main


class TestCli:
    """Tests for the moral-sim command."""

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_demo_text(self, capsys):
        assert main(["demo", "--seed", "3", "--years", "5"]) == 0
        out = capsys.readouterr().out

        assert "MORAL SPECTRUM SIMULATION REPORT" in out
        assert "Story of Aisha:" in out
        assert "Story of Lina:" in out
        assert "linear-gradient(90deg, " in out
        assert "[Year 5]" in out

    def test_demo_json(self, capsys):
        assert main(["demo", "--seed", "3", "--years", "5", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)

        assert len(data["stories"]) == 4
        assert all(len(story["events"]) == 5 for story in data["stories"])
        assert len(data["spectrum"]) == 4
        assert data["metrics"]["total_events"] == 20

    def test_demo_is_reproducible(self, capsys):
        main(["demo", "--seed", "9", "--json"])
        first = json.loads(capsys.readouterr().out)
        main(["demo", "--seed", "9", "--json"])
        second = json.loads(capsys.readouterr().out)

        def lines(payload):
            return [[e["description"] for e in s["events"]] for s in payload["stories"]]

        assert lines(first) == lines(second)

    def test_demo_output_dir(self, tmp_path, capsys):
        out_dir = tmp_path / "out"
        assert main(["demo", "-s", "2", "-y", "4", "-o", str(out_dir), "--plots"]) == 0

        for name in ("simulation_report.txt", "metrics.json", "stories.json",
                     "spectrum.png", "trajectories.png"):
            assert (out_dir / name).exists(), name

    def test_spawn_family(self, capsys):
        assert main(["spawn", "Omar", "--score", "60", "-c", "2", "-s", "1", "-y", "3", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)

        names = [s["person"]["name"] for s in data["stories"]]
        assert names == ["Omar", "Omar's child", "Omar's child"]
        assert data["stories"][1]["person"]["parent_name"] == "Omar"

    def test_plots_need_output_dir(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["demo", "--plots"])
        assert exc.value.code == 2
        assert "--plots needs --output-dir" in capsys.readouterr().err

    @pytest.mark.parametrize("argv", [
        ["demo", "--years", "-3"],
        ["demo", "--years", "0"],
        ["spawn", "Omar", "--children", "-1"],
    ])
    def test_bad_counts_rejected(self, argv, capsys):
        with pytest.raises(SystemExit) as exc:
            main(argv)
        assert exc.value.code == 2
        assert "must be >=" in capsys.readouterr().err

    def test_spawn_without_children(self, capsys):
        assert main(["spawn", "Omar", "-c", "0", "-s", "1", "-y", "2", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [s["person"]["name"] for s in data["stories"]] == ["Omar"]
