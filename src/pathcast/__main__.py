import json
import logging
from pathlib import Path

import click

from pathcast.config import Settings
from pathcast.logging_config import setup_logging

logger = logging.getLogger(__name__)

KLINE_CLOSE_INDEX = 4


def load_prices(path: str) -> list[float]:
    """Read closing prices (oldest first) from a JSON or text/CSV file.

    JSON may be a list of numbers, a list of kline arrays (close at index 4)
    or an object with a "prices" list. Text files use the last column of each
    line; lines that do not parse as a number (headers) are skipped.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")

    if file_path.suffix.lower() == ".json":
        payload = json.loads(raw)
        if isinstance(payload, dict):
            payload = payload.get("prices", [])
        prices = []
        for item in payload:
            if isinstance(item, (list, tuple)):
                item = item[KLINE_CLOSE_INDEX]
            prices.append(float(item))
        return prices

    prices = []
    for line in raw.splitlines():
        line = line.strip()
        if not line:
            continue
        last = line.replace(",", " ").split()[-1]
        try:
            prices.append(float(last))
        except ValueError:
            logger.debug("Skipping non-numeric line: %s", line)
    return prices


def parse_prices(text: str) -> list[float]:
    try:
        return [float(p) for p in text.split(",") if p.strip()]
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--prices")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool):
    """Pathcast - Monte Carlo price path simulation"""
    setup_logging(Settings().log_dir)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.option("--prices-file", "-f", type=click.Path(exists=True, dir_okay=False),
              default=None, help="JSON or CSV file with closing prices (oldest first)")
@click.option("--prices", "-p", "prices_text", type=str, default=None,
              help="Comma-separated closing prices (oldest first)")
@click.option("--days", "-d", type=int, default=None,
              help="Forward horizon in days (default: from settings)")
@click.option("--paths", "-n", type=int, default=None,
              help="Number of simulated paths (default: from settings)")
@click.option("--seed", type=int, default=None, help="Random seed")
@click.option("--samples", type=int, default=None,
              help="Number of representative paths to keep")
@click.option("--workers", type=int, default=None,
              help="Threads used for path generation")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
def simulate(prices_file: str | None, prices_text: str | None, days: int | None,
             paths: int | None, seed: int | None, samples: int | None,
             workers: int | None, as_json: bool):
    """Simulate future price paths from historical closes."""
    from pathcast.analysis.formatting import format_price
    from pathcast.analysis.sim_models import InvalidConfigurationError
    from pathcast.analysis.simulation import run_monte_carlo

    settings = Settings()

    if prices_file and prices_text:
        raise click.UsageError("Use either --prices-file or --prices, not both")
    if prices_file:
        prices = load_prices(prices_file)
    elif prices_text:
        prices = parse_prices(prices_text)
    else:
        raise click.UsageError("One of --prices-file or --prices is required")

    days = days if days is not None else settings.simulation_default_days
    paths = paths if paths is not None else settings.simulation_num_paths

    try:
        result = run_monte_carlo(
            prices,
            horizon_days=days,
            num_simulations=paths,
            seed=seed if seed is not None else settings.simulation_seed,
            sample_paths=samples if samples is not None else settings.simulation_sample_paths,
            max_workers=workers if workers is not None else settings.simulation_max_workers,
        )
    except InvalidConfigurationError as e:
        raise click.UsageError(str(e))
    except ValueError as e:
        raise click.ClickException(str(e))

    if result is None:
        raise click.ClickException("No price data to simulate")

    if as_json:
        click.echo(json.dumps(result))
        return

    stats = result["stats"]
    click.echo("=" * 48)
    click.echo("  GBM MONTE CARLO SIMULATION")
    click.echo("=" * 48)
    click.echo(f"  Paths:             {result['num_simulations']:,}")
    click.echo(f"  Horizon:           {result['horizon_days']} days")
    click.echo(f"  History used:      {result['input_days_used']} days")
    click.echo(f"  Daily volatility:  {stats['volatility']}%")
    click.echo("  " + "-" * 44)
    click.echo(f"  Current:           {format_price(stats['current'])}")
    click.echo(f"  Projected median:  {format_price(stats['projected_median'])}")
    click.echo(f"  Projected low:     {format_price(stats['projected_low'])}  (P5)")
    click.echo(f"  Projected high:    {format_price(stats['projected_high'])}  (P95)")
    click.echo("=" * 48)


@cli.command()
@click.option("--host", default=None, help="Bind address (default: from settings)")
@click.option("--port", type=int, default=None, help="Port (default: from settings)")
def serve(host: str | None, port: int | None):
    """Start the HTTP API."""
    import uvicorn

    from pathcast.web.app import create_app

    settings = Settings()
    host = host or settings.api_host
    port = port or settings.api_port
    click.echo(f"Starting Pathcast API on {host}:{port}")
    uvicorn.run(create_app(settings), host=host, port=port)


if __name__ == "__main__":
    cli()
