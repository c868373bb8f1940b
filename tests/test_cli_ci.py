from pathlib import Path
import json

import pytest
from click.testing import CliRunner

from bootci import __version__
from bootci.cli import cli


RENTS = [2298, 2400, 2979, 2500, 2750, 2325, 2985, 3150, 2995, 2650]


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    lines = ["rent,died,survived"]
    for i, rent in enumerate(RENTS):
        lines.append(f"{rent},{'yes' if i % 3 == 0 else 'no'},{1 if i % 2 else 0}")
    path = tmp_path / "data.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_version(cli_runner):
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_ci_mean_writes_json(cli_runner, data_file: Path, tmp_path: Path):
    out = tmp_path / "results" / "rent.json"
    result = cli_runner.invoke(
        cli,
        ["ci", "--data", str(data_file), "--column", "rent", "--reps", "2000", "--seed", "5", "--output", str(out)],
        catch_exceptions=False,
    )
    assert result.exit_code == 0, result.output
    assert "95.0% CI (percentile)" in result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["distribution"]["repetitions"] == 2000
    assert data["distribution"]["seed"] == 5
    assert data["sample"]["size"] == len(RENTS)
    (interval,) = data["intervals"]
    assert min(RENTS) < interval["lower"] <= interval["upper"] < max(RENTS)


def test_ci_multiple_levels_share_distribution(cli_runner, data_file: Path, tmp_path: Path):
    out = tmp_path / "levels.json"
    result = cli_runner.invoke(
        cli,
        [
            "ci", "--data", str(data_file), "--column", "rent", "--stat", "median",
            "--reps", "1000", "--level", "0.8", "--level", "0.99", "--output", str(out),
        ],
    )
    assert result.exit_code == 0, result.output
    intervals = json.loads(out.read_text(encoding="utf-8"))["intervals"]
    assert [ci["level"] for ci in intervals] == [0.8, 0.99]
    assert intervals[0]["width"] <= intervals[1]["width"]


def test_ci_proportion_requires_success(cli_runner, data_file: Path):
    result = cli_runner.invoke(cli, ["ci", "--data", str(data_file), "--column", "died", "--stat", "prop"])
    assert result.exit_code == 2
    assert "--success" in result.output


def test_ci_proportion_categorical(cli_runner, data_file: Path):
    result = cli_runner.invoke(
        cli,
        ["ci", "--data", str(data_file), "--column", "died", "--stat", "prop", "--success", "yes", "--reps", "1000"],
    )
    assert result.exit_code == 0, result.output
    assert "Observed prop: 0.4" in result.output


def test_ci_proportion_numeric_success_is_coerced(cli_runner, data_file: Path):
    result = cli_runner.invoke(
        cli,
        ["ci", "--data", str(data_file), "--column", "survived", "--stat", "prop", "--success", "1", "--reps", "1000"],
    )
    assert result.exit_code == 0, result.output
    assert "Observed prop: 0.5" in result.output


def test_ci_non_numeric_success_for_numeric_column(cli_runner, data_file: Path):
    result = cli_runner.invoke(
        cli,
        ["ci", "--data", str(data_file), "--column", "survived", "--stat", "prop", "--success", "yes"],
    )
    assert result.exit_code == 1
    assert "not numeric" in result.output


def test_ci_invalid_level(cli_runner, data_file: Path):
    result = cli_runner.invoke(
        cli, ["ci", "--data", str(data_file), "--column", "rent", "--reps", "100", "--level", "1.0"]
    )
    assert result.exit_code == 1
    assert "level must be in (0, 1)" in result.output


def test_ci_missing_file_and_column(cli_runner, data_file: Path, tmp_path: Path):
    missing = cli_runner.invoke(cli, ["ci", "--data", str(tmp_path / "none.csv"), "--column", "rent"])
    assert missing.exit_code == 1
    assert "not found" in missing.output

    bad_col = cli_runner.invoke(cli, ["ci", "--data", str(data_file), "--column", "price"])
    assert bad_col.exit_code == 1
    assert "available" in bad_col.output


def test_ci_mean_of_categorical_column_fails_cleanly(cli_runner, data_file: Path):
    result = cli_runner.invoke(cli, ["ci", "--data", str(data_file), "--column", "died", "--reps", "100"])
    assert result.exit_code == 1
    assert "Statistic 'mean' failed" in result.output


def test_ci_plot_and_report(cli_runner, data_file: Path, tmp_path: Path):
    plot = tmp_path / "figs" / "rent.png"
    report = tmp_path / "out" / "rent.md"
    result = cli_runner.invoke(
        cli,
        [
            "ci", "--data", str(data_file), "--column", "rent", "--reps", "1000",
            "--plot", str(plot), "--report", str(report),
        ],
    )
    assert result.exit_code == 0, result.output
    assert plot.exists()
    text = report.read_text(encoding="utf-8")
    assert "mean of `rent`" in text
    assert "../figs/rent.png" in text


def test_ci_se_method(cli_runner, data_file: Path):
    result = cli_runner.invoke(
        cli, ["ci", "--data", str(data_file), "--column", "rent", "--reps", "1000", "--method", "se"]
    )
    assert result.exit_code == 0, result.output
    assert "CI (se)" in result.output


def test_ci_parallel_workers(cli_runner, data_file: Path, tmp_path: Path):
    out = tmp_path / "par.json"
    result = cli_runner.invoke(
        cli,
        ["ci", "--data", str(data_file), "--column", "rent", "--reps", "2000", "--workers", "2", "--output", str(out)],
    )
    assert result.exit_code == 0, result.output
    dist = json.loads(out.read_text(encoding="utf-8"))["distribution"]
    assert dist["repetitions"] == 2000
    assert dist["n_chunks"] == 2
