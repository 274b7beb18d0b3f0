"""Command line entry point for the commodity-compare application."""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

import click
import structlog

from commodity_compare.config import DEFAULT_YEARS_BACK, PipelineConfig
from commodity_compare.conversion import (
    PROFILES,
    Commodity,
    Converter,
    RateTable,
    UnknownCommodityError,
    WheatVariant,
)
from commodity_compare.conversion.rates import DEFAULT_TO_USD, DEFAULT_USD_TO_TARGET
from commodity_compare.data.client import VendorHttpClient
from commodity_compare.data.ingest import MarketDataCollector
from commodity_compare.data.models import ComparisonReport
from commodity_compare.data.pipeline import compare_commodity, live_snapshot
from commodity_compare.logging import configure_logging, run_context
from commodity_compare.output import generate_comparison_plot
from commodity_compare.output.utils import format_percent, format_price
from commodity_compare.series.summary import summarize

ENV_PREFIX = "COMMODITY_COMPARE"
LOG_FORMAT_CHOICES = ("console", "json")
LOG_LEVEL_CHOICES = ("critical", "error", "warning", "info", "debug")
WHEAT_VARIANT_CHOICES = tuple(variant.value for variant in WheatVariant)

logger = structlog.get_logger(__name__)


def _parse_commodity(value: str) -> Commodity:
    try:
        return Commodity.parse(value)
    except UnknownCommodityError as exc:
        raise click.BadParameter(str(exc), param_hint="COMMODITY") from exc


def _parse_rate(value: str) -> tuple[str, float]:
    """Parse ``CODE=RATE`` overrides for the USD rate table."""
    code, sep, raw = value.partition("=")
    if not sep or not code.strip():
        raise click.BadParameter(f"Expected CODE=RATE, got {value!r}.", param_hint="--rate")
    try:
        rate = float(raw)
    except ValueError as exc:
        raise click.BadParameter(f"Rate for {code} is not a number.", param_hint="--rate") from exc
    if rate <= 0:
        raise click.BadParameter(f"Rate for {code} must be positive.", param_hint="--rate")
    return code.strip().upper(), rate


def _build_config(ctx: click.Context, **options: object) -> PipelineConfig:
    """Merge group-level settings into a pipeline configuration."""
    ctx.ensure_object(dict)
    try:
        return PipelineConfig(
            rates=ctx.obj.get("rates") or RateTable(),
            vendor_username=ctx.obj.get("vendor_username"),
            vendor_password=ctx.obj.get("vendor_password"),
            **options,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc


def _build_collector(config: PipelineConfig) -> MarketDataCollector:
    client = VendorHttpClient(username=config.vendor_username, password=config.vendor_password)
    return MarketDataCollector(client=client)


def _report_rows(report: ComparisonReport) -> list[dict[str, object]]:
    """Flatten a report into tabular rows for export."""
    return [
        {
            "commodity": report.commodity,
            "month": record.month_key,
            "month_display": record.month_display,
            "unit": report.unit,
            "ledger_value": record.ledger_value,
            "market_value": record.market_value,
            "difference": record.difference,
            "ratio": record.ratio,
            "percent_difference": record.percent_difference,
            "ledger_samples": record.ledger_samples,
            "market_samples": record.market_samples,
            "market_provenance": (
                record.market_provenance.value if record.market_provenance else None
            ),
        }
        for record in report.records
    ]


def _echo_report(report: ComparisonReport) -> None:
    """Print the comparison as an aligned text table with a short summary."""
    decimals = report.decimals
    header = f"{'Month':<10} {'Purchase':>14} {'Market':>14} {'Difference':>14} {'Diff %':>9}"
    click.echo(f"{report.commodity} ({report.unit})")
    click.echo(header)
    click.echo("-" * len(header))
    for record in report.records:
        click.echo(
            f"{record.month_display:<10} "
            f"{format_price(record.ledger_value, decimals):>14} "
            f"{format_price(record.market_value, decimals):>14} "
            f"{format_price(record.difference, decimals):>14} "
            f"{format_percent(record.percent_difference):>9}"
        )
    summary = summarize(report.records)
    provenance = report.market_provenance.value if report.market_provenance else "none"
    click.echo(
        f"{summary.matched_months}/{summary.months} months matched ({provenance} market data); "
        f"cheaper than market in {summary.cheaper_months}, "
        f"premium in {summary.premium_months}."
    )


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    envvar=f"{ENV_PREFIX}_LOG_LEVEL",
    default="info",
    show_default=True,
    help="Verbosity for structured logs.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMAT_CHOICES, case_sensitive=False),
    envvar=f"{ENV_PREFIX}_LOG_FORMAT",
    default="console",
    show_default=True,
    help="Render logs as console-friendly text or JSON.",
)
@click.option(
    "--vendor-username",
    envvar=f"{ENV_PREFIX}_VENDOR_USERNAME",
    default=None,
    help="Market data vendor username.",
)
@click.option(
    "--vendor-password",
    envvar=f"{ENV_PREFIX}_VENDOR_PASSWORD",
    default=None,
    help="Market data vendor password.",
)
@click.option(
    "--usd-to-ngn",
    type=float,
    envvar=f"{ENV_PREFIX}_USD_TO_NGN",
    default=DEFAULT_USD_TO_TARGET,
    show_default=True,
    help="NGN per one USD.",
)
@click.option(
    "--rate",
    "rates",
    multiple=True,
    help="Override a USD rate as CODE=RATE (USD per unit), e.g. GHS=0.087.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: str,
    log_format: str,
    vendor_username: str | None,
    vendor_password: str | None,
    usd_to_ngn: float,
    rates: tuple[str, ...],
) -> None:
    """Compare purchase prices with market prices per calendar month."""
    configure_logging(level=log_level, json_output=log_format.lower() == "json")
    if usd_to_ngn <= 0:
        raise click.BadParameter("must be positive.", param_hint="--usd-to-ngn")
    to_usd = dict(DEFAULT_TO_USD)
    to_usd.update(_parse_rate(value) for value in rates)
    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "vendor_username": vendor_username,
            "vendor_password": vendor_password,
            "rates": RateTable(to_usd=to_usd, usd_to_target=usd_to_ngn),
        }
    )
    logger.bind(command_group="commodity-compare").debug(
        "cli.initialized",
        vendor_credentials=bool(vendor_username and vendor_password),
        log_level=log_level.lower(),
        log_format=log_format.lower(),
    )


@cli.command("commodities")
def commodities() -> None:
    """List supported commodities with their unit and vendor symbol."""
    for commodity, profile in PROFILES.items():
        symbols = ", ".join(
            f"{variant.value}={source.symbol}" for variant, source in profile.variants.items()
        )
        click.echo(
            f"{commodity.value:<11} {profile.name:<24} {profile.unit_label:<7} "
            f"decimals={profile.decimals} symbol={symbols or profile.symbol()}"
        )


@cli.command("compare")
@click.argument("commodity")
@click.option(
    "--years-back",
    type=int,
    envvar=f"{ENV_PREFIX}_YEARS_BACK",
    default=DEFAULT_YEARS_BACK,
    show_default=True,
    help="How many years before the current year to keep.",
)
@click.option("--min-year", type=int, default=None, help="Fixed lower bound for the year window.")
@click.option(
    "--wheat-variant",
    type=click.Choice(WHEAT_VARIANT_CHOICES, case_sensitive=False),
    envvar=f"{ENV_PREFIX}_WHEAT_VARIANT",
    default=WheatVariant.ZW.value,
    show_default=True,
    help="Wheat contract used for market prices.",
)
@click.option("--offline", is_flag=True, help="Skip the vendor and use reference prices only.")
@click.option(
    "--allow-synthetic/--no-synthetic",
    default=True,
    show_default=True,
    help="Fall back to bundled reference prices when live data is unavailable.",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional path to write the report as JSON.",
)
@click.option(
    "--export",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional .csv or .parquet path for the monthly rows.",
)
@click.option(
    "--plot",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional .png path for a line chart of both series.",
)
@click.pass_context
def compare(
    ctx: click.Context,
    commodity: str,
    *,
    years_back: int,
    min_year: int | None,
    wheat_variant: str,
    offline: bool,
    allow_synthetic: bool,
    output: Path | None,
    export: Path | None,
    plot: Path | None,
) -> None:
    """Compare purchase and market prices for COMMODITY month by month."""
    key = _parse_commodity(commodity)
    if years_back < 0:
        raise click.BadParameter("must not be negative.", param_hint="--years-back")
    if export is not None and export.suffix.lower() not in {".csv", ".parquet"}:
        raise click.BadParameter("Export path must end with .csv or .parquet", param_hint="--export")
    config = _build_config(
        ctx,
        years_back=years_back,
        min_year=min_year,
        wheat_variant=wheat_variant,
        offline=offline,
        allow_synthetic=allow_synthetic,
    )
    collector = None if offline else _build_collector(config)
    try:
        with run_context(command="compare", commodity=key.value):
            report = compare_commodity(key, config=config, collector=collector)
    finally:
        if collector is not None:
            collector.close()

    if report.is_empty:
        raise click.ClickException(f"No purchase data in the selected window for {key.value}.")

    _echo_report(report)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(report.to_dict(), indent=2))
        click.echo(f"Wrote report to {output}")
    if export:
        export.parent.mkdir(parents=True, exist_ok=True)
        rows = _report_rows(report)
        if export.suffix.lower() == ".csv":
            _write_csv(rows, export)
        else:
            _write_parquet(rows, export)
        click.echo(f"Rows written to {export}")
    if plot:
        plot_report = generate_comparison_plot(report, output_dir=plot.parent, filename=plot.name)
        click.echo(f"Chart written to {plot_report.path}")


@cli.command("live")
@click.argument("commodities", nargs=-1)
@click.option(
    "--days",
    type=int,
    default=365,
    show_default=True,
    help="Days of daily history to request.",
)
@click.option(
    "--wheat-variant",
    type=click.Choice(WHEAT_VARIANT_CHOICES, case_sensitive=False),
    envvar=f"{ENV_PREFIX}_WHEAT_VARIANT",
    default=WheatVariant.ZW.value,
    show_default=True,
    help="Wheat contract used for market prices.",
)
@click.option("--pacing", type=float, default=0.2, show_default=True, help="Seconds between requests.")
@click.pass_context
def live(
    ctx: click.Context,
    commodities: tuple[str, ...],
    *,
    days: int,
    wheat_variant: str,
    pacing: float,
) -> None:
    """Show the latest market price and recent changes for COMMODITIES (default: all)."""
    if days <= 0:
        raise click.BadParameter("must be positive.", param_hint="--days")
    keys = [_parse_commodity(item) for item in commodities] or list(Commodity)
    config = _build_config(ctx, wheat_variant=wheat_variant)
    converter = Converter(rates=config.rates, wheat_variant=config.wheat_variant)
    collector = _build_collector(config)
    try:
        for index, key in enumerate(keys):
            if index:
                collector.sleep(pacing)
            with run_context(command="live", commodity=key.value):
                snapshot = live_snapshot(
                    key, config=config, converter=converter, collector=collector, days=days
                )
            profile = converter.profile(key)
            if snapshot is None:
                click.echo(f"{key.value:<11} no market data")
                continue
            changes = "  ".join(
                f"{horizon} {format_percent(change)}"
                for horizon, change in snapshot.changes().items()
            )
            click.echo(
                f"{key.value:<11} {format_price(snapshot.current, profile.decimals):>12} "
                f"{profile.unit_label}  as of {snapshot.date}  {changes}"
            )
    finally:
        collector.close()


@cli.command("download")
@click.option(
    "--symbol",
    "symbols",
    multiple=True,
    required=True,
    help="NAME=SYMBOL pair to download, e.g. wheat=ZWZ25. Repeatable.",
)
@click.option("--start", type=click.DateTime(formats=["%Y-%m-%d"]), required=True)
@click.option("--end", type=click.DateTime(formats=["%Y-%m-%d"]), required=True)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("out"),
    show_default=True,
    help="Directory receiving one JSON file per symbol.",
)
@click.pass_context
def download(
    ctx: click.Context,
    symbols: tuple[str, ...],
    *,
    start: datetime,
    end: datetime,
    output_dir: Path,
) -> None:
    """Download raw minute bars for one or more vendor symbols."""
    pairs: dict[str, str] = {}
    for value in symbols:
        name, sep, symbol = value.partition("=")
        if not sep or not name.strip() or not symbol.strip():
            raise click.BadParameter(f"Expected NAME=SYMBOL, got {value!r}.", param_hint="--symbol")
        pairs[name.strip()] = symbol.strip()
    start_date: date = start.date()
    end_date: date = end.date()
    if end_date < start_date:
        raise click.UsageError("--end must not be earlier than --start.")
    config = _build_config(ctx)
    collector = _build_collector(config)
    try:
        written = collector.download_minutes(pairs, start_date, end_date, output_dir)
    finally:
        collector.close()
    for name, path in written.items():
        click.echo(f"Saved {name} to {path}")
    missing = sorted(set(pairs) - set(written))
    if missing:
        raise click.ClickException(f"Downloads failed for: {', '.join(missing)}")


def _write_csv(rows: list[dict[str, object]], path: Path) -> None:
    """Write report rows to CSV via pandas."""
    import pandas as pd  # type: ignore

    df = pd.DataFrame(rows)
    df.to_csv(path, index=False)


def _write_parquet(rows: list[dict[str, object]], path: Path) -> None:
    """Write report rows to parquet via pandas/pyarrow."""
    import pandas as pd  # type: ignore

    df = pd.DataFrame(rows)
    try:
        df.to_parquet(path, index=False)
    except (ImportError, ValueError) as exc:  # pragma: no cover - optional deps
        raise click.ClickException(
            "Writing parquet requires pandas with pyarrow or fastparquet installed."
        ) from exc


if __name__ == "__main__":
    cli()
