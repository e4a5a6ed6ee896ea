from __future__ import annotations

import sys
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .api import generate_cards
from .config import resolve_parameters
from .logging_setup import setup_logging
from .models import GenerationResult
from .serialize import (
    build_run_meta,
    emit_cards_json,
    emit_report_json,
    emit_summary_csv,
    load_cards_json,
)
from .verify import verify as verify_cards
from .version import __version__

app = typer.Typer(help="Balanced 4x4 bingo card generator CLI")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(0)


@app.callback()
def common_options(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show application version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    pass


def _render_cards(console: Console, result: GenerationResult) -> None:
    for card in result.cards:
        table = Table(title=f"Card #{card.id}", show_header=False, show_lines=True)
        for _ in range(len(card.cells[0])):
            table.add_column(justify="right")
        for row in card.cells:
            table.add_row(*(str(x) for x in row))
        console.print(table)

    counts = [count for _, count in result.number_distribution]
    dist = Table(title="Number distribution")
    dist.add_column("number", justify="right")
    dist.add_column("count", justify="right")
    for num, count in result.number_distribution:
        dist.add_row(str(num), f"{count}x")
    console.print(dist)
    if counts:
        lo, hi = min(counts), max(counts)
        console.print(f"Min: {lo}x  Max: {hi}x  Range: {hi - lo}")


@app.command()
def run(
    num_cards: int = typer.Option(None, "--num-cards", "-n", help="Number of cards to generate"),
    min_num: int = typer.Option(None, "--min", help="Smallest number on the cards"),
    max_num: int = typer.Option(None, "--max", help="Largest number on the cards"),
    seed: int = typer.Option(None, "--seed", help="Seed for reproducible runs"),
    rng_engine: str = typer.Option(None, "--rng-engine", help="py_random|numpy_pcg64"),
    config: str = typer.Option(None, "--config", help="Path to config file (YAML/JSON)"),
    out_cards: str = typer.Option(None, "--out-cards", help="cards.json output path"),
    out_report: str = typer.Option(None, "--out-report", help="report.json output path"),
    summary_csv: str = typer.Option(None, "--summary-csv", help="Path to summary.csv (optional)"),
    log_file: str = typer.Option(None, "--log-file", help="Log file path"),
    log_level: str = typer.Option(None, "--log-level", help="DEBUG|INFO|WARN|ERROR"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Resolve params and exit"),
    force: bool = typer.Option(False, "--force", help="Overwrite outputs if they exist"),
    no_mkdirs: bool = typer.Option(False, "--no-mkdirs", help="Do not create parent directories"),
    show_cards: bool = typer.Option(False, "--show-cards", help="Print cards and distribution"),
) -> None:
    """Generate line-unique cards and write cards/report artifacts."""

    cli_overrides = {
        "num_cards": num_cards,
        "min_num": min_num,
        "max_num": max_num,
        "seed": seed,
        "rng_engine": rng_engine,
        "out_cards": out_cards,
        "out_report": out_report,
        "summary_csv": summary_csv,
        "log_file": log_file,
        "log_level": log_level,
    }

    try:
        settings, params_hash, _cfg_path = resolve_parameters(
            config_path_str=config, cli_overrides=cli_overrides
        )
    except (ValueError, FileNotFoundError) as exc:
        typer.echo(f"Config error: {exc}", err=True)
        raise typer.Exit(code=2)

    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        json_format=(settings.log_format == "json"),
    )

    n, lo, hi = settings.num_cards, settings.min_num, settings.max_num
    engine = settings.rng_engine
    seed_value = settings.seed

    if dry_run:
        typer.echo(f"Cards: {n}, range: {lo}..{hi}, engine: {engine}, seed: {seed_value}")
        typer.echo(f"Params hash: {params_hash}")
        raise typer.Exit(0)

    start_time = time.time()
    result = generate_cards(n, lo, hi, seed=seed_value, rng_engine=engine)
    elapsed = time.time() - start_time

    if not result.success:
        typer.echo(result.message, err=True)
        raise typer.Exit(code=1)

    report = verify_cards([c.cells for c in result.cards], min_num=lo, max_num=hi)

    run_meta = build_run_meta(
        app_version=__version__,
        params_hash=params_hash,
        seed=result.seed,
        rng_engine=engine,
    )

    out_cards_path = Path(settings.out_cards)
    out_report_path = Path(settings.out_report)

    emit_cards_json(
        out_cards_path,
        result=result,
        params={"num_cards": n, "min_num": lo, "max_num": hi},
        run_meta=run_meta,
        mkdirs=(not no_mkdirs),
        overwrite=force,
    )
    emit_report_json(
        out_report_path,
        report=report,
        mkdirs=(not no_mkdirs),
        overwrite=force,
    )

    if settings.summary_csv:
        emit_summary_csv(
            Path(settings.summary_csv),
            freqs=result.distribution_map(),
            mkdirs=(not no_mkdirs),
            overwrite=force,
        )

    if show_cards:
        _render_cards(Console(), result)

    typer.echo(result.message)
    typer.echo(f"Output files: {out_cards_path}, {out_report_path}")
    typer.echo(
        f"Variance {result.variance:.3f} after {result.attempts} attempt(s), {elapsed:.2f}s"
    )

    raise typer.Exit(code=0)


@app.command()
def verify(
    cards: str = typer.Option(..., "--cards", help="Path to cards.json"),
    min_num: int = typer.Option(None, "--min", help="Smallest allowed number"),
    max_num: int = typer.Option(None, "--max", help="Largest allowed number"),
    out_report: str = typer.Option(None, "--out-report", help="Write the report here"),
    force: bool = typer.Option(False, "--force", help="Overwrite the report if it exists"),
) -> None:
    """Re-audit a cards.json artifact for line uniqueness and range."""
    matrices, params = load_cards_json(Path(cards))
    lo = min_num if min_num is not None else params.get("min_num")
    hi = max_num if max_num is not None else params.get("max_num")
    if lo is None or hi is None:
        typer.echo("Range unknown: pass --min and --max", err=True)
        raise typer.Exit(code=2)
    if int(hi) < int(lo):
        typer.echo(f"Invalid range: {lo}..{hi}", err=True)
        raise typer.Exit(code=2)

    report = verify_cards(matrices, min_num=int(lo), max_num=int(hi))
    if out_report:
        emit_report_json(Path(out_report), report=report, mkdirs=True, overwrite=force)

    lines = report["lines"]
    typer.echo(f"Cards: {report['num_cards']}, line collisions: {lines['line_collisions']}")
    if not report["ok"]:
        typer.echo("Verification FAILED", err=True)
        raise typer.Exit(code=1)
    typer.echo("Verification OK")
    raise typer.Exit(code=0)


def main(_argv: list[str] | None = None) -> int:
    try:
        app(standalone_mode=True)
        return 0
    except SystemExit as e:
        return int(e.code) if e.code is not None else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
