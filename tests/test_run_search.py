import os

import pytest

import run_search as runner
from knn_search.config_group import ConfigGroup
from knn_search.registry import BASE, EUCLID, UNIFORM


def _write_items(path, items):
    lines = [f"{it.coords[0]},{it.coords[1]},{it.category}" for it in items]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Points the runner's input and output locations at tmp_path."""
    csv_path = tmp_path / "chips.txt"
    monkeypatch.setattr(runner, "RAW_CSV", str(csv_path))
    monkeypatch.setattr(runner, "FIGS_DIR", str(tmp_path / "figs"))
    monkeypatch.setattr(runner, "RESULTS_DIR", str(tmp_path / "results"))
    # one configuration keeps the end-to-end run short
    monkeypatch.setattr(ConfigGroup, "for_items",
                        classmethod(lambda cls, items, k_min=2: cls([BASE], [EUCLID], [UNIFORM], (2,))))
    return tmp_path


class TestMain:
    """End-to-end runs of the command-line runner."""

    def test_reports_best_and_writes_outputs(self, workspace, clusters, capsys):
        _write_items(workspace / "chips.txt", clusters)
        runner.main()
        out = capsys.readouterr().out
        assert "Best F1-score is " in out
        assert "with predictor: base-euclid-uniform-2" in out
        assert os.path.isfile(workspace / "figs" / f"{runner.OUTPUT_NAME}.png")
        assert os.path.isfile(workspace / "results" / "knn_search_results.csv")

    def test_no_predictor_raises(self, workspace, four_points):
        # too few items for any fold to score a predictor
        _write_items(workspace / "chips.txt", four_points[:3])
        with pytest.raises(RuntimeError, match="No predictor found"):
            runner.main()


class TestRun:
    def test_missing_file_exits_with_error(self, workspace, capsys):
        with pytest.raises(SystemExit) as exc:
            runner.run()
        assert exc.value.code == 1
        assert "Search failed:" in capsys.readouterr().out

    def test_no_predictor_exits_with_error(self, workspace, four_points, capsys):
        _write_items(workspace / "chips.txt", four_points[:3])
        with pytest.raises(SystemExit) as exc:
            runner.run()
        assert exc.value.code == 1
        assert "No predictor found" in capsys.readouterr().out
