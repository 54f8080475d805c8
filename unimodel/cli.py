#!filepath: unimodel/cli.py
import itertools
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import typer
import yaml
from rich import print
from rich.markup import escape
from rich.table import Table

from unimodel import (
    AppConfig,
    UnimodelError,
    __version__,
    create,
    default_registry,
    finalize,
    fit,
    fit_many,
    init_logging,
    logs,
    varying,
    with_args,
    with_engine_args,
)

app = typer.Typer(help="unimodel: one argument vocabulary for many modeling engines")

_VARYING_TOKEN = "varying()"


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, help="Path to a YAML config"),
):
    cfg = AppConfig.load(config)
    init_logging(cfg.log)
    ctx.obj = cfg


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def engines(model_type: Optional[str] = typer.Argument(None)):
    """
    List registered engines with their modes and argument names
    """
    try:
        descriptors = default_registry().engines(model_type)
    except UnimodelError as exc:
        _fail(exc)

    table = Table(title="Registered engines")
    table.add_column("model type")
    table.add_column("engine")
    table.add_column("modes")
    table.add_column("canonical -> native")
    table.add_column("extra native args")

    for d in descriptors:
        mapped = set(d.arg_name_map.values())
        table.add_row(
            d.model_type,
            d.engine_name,
            ", ".join(sorted(m.value for m in d.supported_modes)),
            ", ".join(f"{k} -> {v}" for k, v in d.arg_name_map.items()),
            ", ".join(sorted(d.valid_native_args - mapped)),
        )

    print(table)


@app.command()
def translate(
    ctx: typer.Context,
    model_type: str,
    engine: Optional[str] = typer.Option(None, help="Engine name"),
    mode: Optional[str] = typer.Option(None, help="regression / classification / ..."),
    arg: List[str] = typer.Option([], help="Canonical argument, name=value"),
    engine_arg: List[str] = typer.Option([], help="Native engine argument, name=value"),
):
    """
    Show the engine-native arguments a specification finalizes to
    """
    engine = _engine_or_default(ctx, model_type, engine)

    try:
        spec = _build_spec(model_type, mode, arg, engine_arg)
        invocation = finalize(spec, engine)
    except (UnimodelError, ValueError) as exc:
        _fail(exc)

    print(f"[green]{model_type} / {engine} ({invocation.mode.value})[/green]")
    for name, value in invocation.native_args.items():
        print(escape(f"  {name} = {value!r}"))


@app.command(name="fit")
def fit_command(
    ctx: typer.Context,
    model_type: str,
    data: str = typer.Option(..., help="CSV file with predictors and outcome"),
    target: str = typer.Option(..., help="Outcome column"),
    engine: Optional[str] = typer.Option(None, help="Engine name"),
    mode: Optional[str] = typer.Option(None, help="regression / classification / ..."),
    arg: List[str] = typer.Option([], help="Canonical argument, name=value"),
    engine_arg: List[str] = typer.Option([], help="Native engine argument, name=value"),
):
    """
    Fit a model on a CSV file and print the fitted handle
    """
    engine = _engine_or_default(ctx, model_type, engine)

    try:
        x, y = _load_frame(data, target)
        spec = _build_spec(model_type, mode, arg, engine_arg)
        handle = fit(spec, {"x": x, "y": y}, engine)
    except (UnimodelError, ValueError, OSError) as exc:
        _fail(exc)

    print(f"[green]fitted {model_type} / {engine} on {len(x)} rows[/green]")
    print(handle)


@app.command(name="fit-grid")
def fit_grid_command(
    ctx: typer.Context,
    model_type: str,
    data: str = typer.Option(..., help="CSV file with predictors and outcome"),
    target: str = typer.Option(..., help="Outcome column"),
    grid: List[str] = typer.Option(..., help="Canonical argument, name=[v1, v2, ...]"),
    engine: Optional[str] = typer.Option(None, help="Engine name"),
    mode: Optional[str] = typer.Option(None, help="regression / classification / ..."),
    arg: List[str] = typer.Option([], help="Canonical argument, name=value"),
    engine_arg: List[str] = typer.Option([], help="Native engine argument, name=value"),
):
    """
    Fit one model per grid point on a CSV file (fit.max_workers threads)
    """
    engine = _engine_or_default(ctx, model_type, engine)
    names, points = _expand_grid(_parse_pairs(grid))

    try:
        x, y = _load_frame(data, target)
        base = _build_spec(model_type, mode, arg, engine_arg)
        # grid names stay varying until each point fills them in
        base = with_args(base, **{name: varying(name) for name in names})
        specs = [with_args(base, **dict(zip(names, point))) for point in points]
        handles = fit_many(
            specs, {"x": x, "y": y}, engine, max_workers=ctx.obj.fit.max_workers
        )
    except (UnimodelError, ValueError, OSError) as exc:
        _fail(exc)

    table = Table(title=f"{model_type} / {engine} on {len(x)} rows")
    for name in names:
        table.add_column(name)
    table.add_column("model")
    for point, handle in zip(points, handles):
        table.add_row(*(escape(repr(v)) for v in point), escape(repr(handle)))

    print(table)


# ------------------------------------------------------------------
# helpers
# ------------------------------------------------------------------
def _parse_pairs(pairs: List[str]) -> Dict[str, Any]:
    """
    name=value pairs; values are YAML scalars, ``varying()`` -> Placeholder
    """
    parsed: Dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise typer.BadParameter(f"expected name=value, got '{pair}'")
        name, raw = pair.split("=", 1)
        raw = raw.strip()
        if raw == _VARYING_TOKEN:
            parsed[name.strip()] = varying()
            continue
        try:
            parsed[name.strip()] = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise typer.BadParameter(f"cannot parse value of '{pair}': {exc}") from exc
    return parsed


def _expand_grid(grid: Dict[str, Any]) -> Tuple[List[str], List[Tuple[Any, ...]]]:
    """
    {name: [values]} -> (names, cartesian product of the values)
    """
    for name, values in grid.items():
        if not isinstance(values, list) or not values:
            raise typer.BadParameter(
                f"grid '{name}' needs a non-empty list, e.g. {name}=[1, 2]"
            )
    names = list(grid)
    return names, list(itertools.product(*(grid[n] for n in names)))


@logs.catch(msg="failed to load training data")
def _load_frame(path: str, target: str) -> Tuple[pd.DataFrame, pd.Series]:
    frame = pd.read_csv(path)
    if target not in frame.columns:
        raise ValueError(f"column '{target}' not found in {path}")
    return frame.drop(columns=[target]), frame[target]


def _build_spec(model_type, mode, arg, engine_arg):
    spec = create(model_type, mode=mode)
    spec = with_args(spec, **_parse_pairs(arg))
    return with_engine_args(spec, **_parse_pairs(engine_arg))


def _engine_or_default(ctx: typer.Context, model_type: str, engine: Optional[str]) -> str:
    if engine is not None:
        return engine

    defaults = ctx.obj.fit.default_engines if ctx.obj is not None else {}
    if model_type not in defaults:
        print(f"[red]no --engine given and no default engine for {model_type}[/red]")
        raise typer.Exit(code=1)
    return defaults[model_type]


def _fail(exc: Exception):
    logs.error(f"[CLI] {type(exc).__name__}: {exc}")
    print(f"[red]{type(exc).__name__}: {escape(str(exc))}[/red]")
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()

# python -m unimodel.cli translate rand_forest --engine ranger --mode regression --arg trees=2000
