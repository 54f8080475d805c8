#!filepath: tests/cli/test_cli.py
import pytest
from typer.testing import CliRunner

from unimodel import __version__
from unimodel.cli import app

runner = CliRunner()


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "cfg.yml"
    path.write_text(
        "log:\n"
        "  dir: null\n"
        "  level: ERROR\n"
        "fit:\n"
        "  max_workers: 2\n"
        "  default_engines:\n"
        "    linear_reg: lm\n",
        encoding="utf-8",
    )
    return str(path)


def invoke(config_path, *args):
    return runner.invoke(
        app, ["--config", config_path, *args], env={"COLUMNS": "200"}
    )


def test_version(config_path):
    result = invoke(config_path, "version")

    assert result.exit_code == 0
    assert f"v{__version__}" in result.output


def test_engines_lists_builtin_backends(config_path):
    result = invoke(config_path, "engines", "rand_forest")

    assert result.exit_code == 0
    assert "ranger" in result.output
    assert "randomForest" in result.output


def test_engines_unknown_model_type(config_path):
    result = invoke(config_path, "engines", "no_such_model")

    assert result.exit_code == 1
    assert "UnknownModelType" in result.output


def test_translate_ranger(config_path):
    result = invoke(
        config_path,
        "translate", "rand_forest",
        "--engine", "ranger",
        "--mode", "regression",
        "--arg", "trees=2000",
    )

    assert result.exit_code == 0
    assert "num.trees = 2000" in result.output


def test_translate_rejects_engine_arg(config_path):
    result = invoke(
        config_path,
        "translate", "rand_forest",
        "--engine", "randomForest",
        "--mode", "regression",
        "--engine-arg", "seed=63233",
    )

    assert result.exit_code == 1
    assert "UnsupportedArgumentForEngine" in result.output


def test_translate_uses_default_engine(config_path):
    result = invoke(config_path, "translate", "linear_reg")

    assert result.exit_code == 0
    assert "linear_reg / lm" in result.output


def test_translate_without_default_engine(config_path):
    result = invoke(config_path, "translate", "boost_tree", "--mode", "regression")

    assert result.exit_code == 1
    assert "no default engine" in result.output


def test_translate_varying_is_rejected(config_path):
    result = invoke(
        config_path,
        "translate", "rand_forest",
        "--engine", "ranger",
        "--mode", "regression",
        "--arg", "mtry=varying()",
    )

    assert result.exit_code == 1
    assert "HasVaryingParameters" in result.output


def test_fit_from_csv(config_path, tmp_path, regression_data):
    frame = regression_data["x"].copy()
    frame["target"] = regression_data["y"]
    csv = tmp_path / "train.csv"
    frame.to_csv(csv, index=False)

    result = invoke(
        config_path, "fit", "linear_reg", "--data", str(csv), "--target", "target"
    )

    assert result.exit_code == 0
    assert f"fitted linear_reg / lm on {len(frame)} rows" in result.output


def test_fit_missing_target_column(config_path, tmp_path, regression_data):
    csv = tmp_path / "train.csv"
    regression_data["x"].to_csv(csv, index=False)

    result = invoke(
        config_path, "fit", "linear_reg", "--data", str(csv), "--target", "target"
    )

    assert result.exit_code == 1
    assert "column 'target' not found" in result.output


def test_translate_unparsable_value(config_path):
    result = invoke(
        config_path,
        "translate", "rand_forest",
        "--engine", "ranger",
        "--mode", "regression",
        "--arg", "trees=[1",
    )

    assert result.exit_code == 2
    assert "cannot parse value" in result.output


# ============================================================
# fit-grid
# ============================================================
@pytest.fixture
def train_csv(tmp_path, regression_data):
    frame = regression_data["x"].copy()
    frame["target"] = regression_data["y"]
    csv = tmp_path / "train.csv"
    frame.to_csv(csv, index=False)
    return str(csv)


def test_fit_grid(config_path, train_csv):
    result = invoke(
        config_path,
        "fit-grid", "rand_forest",
        "--data", train_csv,
        "--target", "target",
        "--engine", "ranger",
        "--mode", "regression",
        "--grid", "trees=[3, 6]",
        "--engine-arg", "seed=1",
    )

    assert result.exit_code == 0
    assert "n_estimators=3" in result.output
    assert "n_estimators=6" in result.output


def test_fit_grid_uses_configured_workers(config_path, train_csv, monkeypatch):
    seen = {}

    def fake_fit_many(specs, data, engine_name, *, max_workers=None, registry=None):
        seen["points"] = [
            (spec.args["penalty"].value, spec.args["mixture"].value) for spec in specs
        ]
        seen["engine"] = engine_name
        seen["max_workers"] = max_workers
        return ["handle"] * len(specs)

    monkeypatch.setattr("unimodel.cli.fit_many", fake_fit_many)

    result = invoke(
        config_path,
        "fit-grid", "linear_reg",
        "--data", train_csv,
        "--target", "target",
        "--engine", "glmnet",
        "--grid", "penalty=[0.1, 0.01]",
        "--grid", "mixture=[0, 1]",
    )

    assert result.exit_code == 0
    assert seen["engine"] == "glmnet"
    assert seen["max_workers"] == 2
    assert seen["points"] == [(0.1, 0), (0.1, 1), (0.01, 0), (0.01, 1)]


def test_fit_grid_requires_a_list(config_path, train_csv):
    result = invoke(
        config_path,
        "fit-grid", "rand_forest",
        "--data", train_csv,
        "--target", "target",
        "--engine", "ranger",
        "--mode", "regression",
        "--grid", "trees=5",
    )

    assert result.exit_code == 2
    assert "non-empty list" in result.output


def test_fit_missing_data_file(config_path, tmp_path):
    result = invoke(
        config_path,
        "fit", "linear_reg",
        "--data", str(tmp_path / "missing.csv"),
        "--target", "target",
    )

    assert result.exit_code == 1
    assert "FileNotFoundError" in result.output
    assert "failed to load training data" in result.output
