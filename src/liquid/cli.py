import logging
from contextlib import contextmanager

import click
import uvicorn
from rich.console import Console
from rich.table import Table
from sqlmodel import Session

from liquid.core.clock import SystemClock
from liquid.core.db import engine, init_db
from liquid.core.exceptions import LiquidError
from liquid.log import setup_logging
from liquid.services import LiquidFactory

logger = logging.getLogger(__name__)


@contextmanager
def _factory():
    with Session(engine) as session:
        yield LiquidFactory(session, SystemClock())


def _run(func):
    """Turn a revert into a click error with its reason."""
    try:
        return func()
    except LiquidError as e:
        raise click.ClickException(f"{e.category}: {e.reason}")


def _contracts(factory: LiquidFactory, index: int):
    return _run(lambda: factory.load(factory.liquids(index)))


@click.group()
@click.option("--log-file", is_flag=True, help="Also write logs to a timestamped file")
@click.pass_context
def cli(ctx, log_file: bool):
    """Operate Liquid vaults: deploy, list assets, push prices, collect fees."""
    setup_logging(f"liquid_{ctx.invoked_subcommand}", to_file=log_file)


@cli.command("init-db")
def init_db_command():
    init_db(engine)
    click.echo("Database initialized")


@cli.command("register-token")
@click.option("--address", required=True)
@click.option("--name", required=True)
@click.option("--symbol", required=True)
@click.option("--decimals", required=True, type=int)
def register_token(address: str, name: str, symbol: str, decimals: int):
    with _factory() as factory:
        token = _run(lambda: factory.tokens.register_token(address, name, symbol, decimals))
        click.echo(f"Registered {token.symbol} at {token.address}")


@cli.command()
@click.option("--name", required=True, help="Share token name")
@click.option("--symbol", required=True, help="Share token symbol")
@click.option("--owner", required=True, help="Admin of every component")
def deploy(name: str, symbol: str, owner: str):
    with _factory() as factory:
        contracts = _run(lambda: factory.deploy_liquid(name, symbol, owner))
        liquid = contracts.liquid
        click.echo(f"Liquid #{liquid.index} {liquid.name} ({liquid.symbol})")
        click.echo(f"  vault:        {liquid.vault_address}")
        click.echo(f"  oracle:       {liquid.oracle_address}")
        click.echo(f"  cashier:      {liquid.cashier_address}")
        click.echo(f"  fee splitter: {liquid.fee_splitter_address}")


@cli.command("add-asset")
@click.option("--liquid", "index", required=True, type=int)
@click.option("--caller", required=True, help="Account holding the asset manager role")
@click.argument("assets", nargs=-1, required=True)
def add_asset(index: int, caller: str, assets):
    with _factory() as factory:
        oracle = _contracts(factory, index).oracle
        for asset in assets:
            _run(lambda: oracle.add_supported_asset(caller, asset))
            click.echo(f"Added {asset}")
        click.echo(f"Supported assets: {oracle.get_supported_assets_num()}")


@cli.command("update-prices")
@click.option("--liquid", "index", required=True, type=int)
@click.option("--caller", required=True, help="Account holding the price updater role")
@click.argument("prices", nargs=-1, required=True, type=int)
def update_prices(index: int, caller: str, prices):
    """PRICES are raw 1e36 fixed point values, one per asset, standard asset last."""
    with _factory() as factory:
        oracle = _contracts(factory, index).oracle
        _run(lambda: oracle.update_prices(caller, list(prices)))
        for asset, price in zip(oracle.get_supported_assets(), prices):
            click.echo(f"{asset}: {price}")
        click.echo(f"Share standard price: {oracle.fetch_share_standard_price()}")


@cli.command("read-strategies")
@click.option("--liquid", "index", required=True, type=int)
def read_strategies(index: int):
    with _factory() as factory:
        vault = _contracts(factory, index).vault
        length = vault.strategies_length()
        table = Table(title=f"Strategies of {vault.name}")
        table.add_column("#")
        table.add_column("Target")
        table.add_column("Description")
        for i in range(length):
            strategy = vault.strategies(i)
            table.add_row(str(i), strategy.target, strategy.description)
        Console().print(table)
        click.echo(f"{length} strategies")


@cli.command("collect-fees")
@click.option("--liquid", "index", required=True, type=int)
@click.option("--caller", required=True, help="Account holding the fee manager role")
def collect_fees(index: int, caller: str):
    with _factory() as factory:
        cashier = _contracts(factory, index).cashier
        fees = _run(lambda: cashier.collect_fees(caller))
        click.echo(f"Management fee shares: {fees.management}")
        click.echo(f"Performance fee shares: {fees.performance}")


@cli.command()
@click.option("--host", default="0.0.0.0")
@click.option("--port", default=8001, type=int)
def serve(host: str, port: int):
    uvicorn.run("liquid.main:app", host=host, port=port)


if __name__ == "__main__":
    cli()
