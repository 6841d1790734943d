from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import replace

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from punktransfers.core.config import IndexerConfig, StreamConfig
from punktransfers.core.constants import PUNK_ASSIGN_SIGNATURE, PUNK_TRANSFER_SIGNATURE
from punktransfers.core.errors import PunkTransfersError
from punktransfers.core.interfaces import ILogSource, ITransferSink
from punktransfers.decoding.decoder import TransferDecoder
from punktransfers.decoding.matcher import EventMatcher
from punktransfers.decoding.signatures import event_topic0
from punktransfers.pipeline.processor import ProcessStats, TransferProcessor
from punktransfers.sinks import JsonlSink, LoggingSink, ParquetSink
from punktransfers.sources import JsonlLogSource, KafkaLogSource

console = Console(stderr=True)

SINKS = ("log", "jsonl", "parquet")


def _setup_logging(level: str) -> logging.Logger:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    return logging.getLogger("punktransfers")


def _build_sink(kind: str, out: str, rows_per_shard: int, logger: logging.Logger) -> ITransferSink:
    if kind == "log":
        return LoggingSink(logger.getChild("sink"))
    if kind == "jsonl":
        return JsonlSink(out or "-")
    if not out:
        raise click.UsageError("--out is required for the parquet sink")
    return ParquetSink(out, rows_per_shard=rows_per_shard, logger=logger.getChild("sink"))


def _run(ctx: click.Context, make_source: Callable[[], ILogSource], limit: int | None) -> None:
    opts = ctx.obj
    logger: logging.Logger = opts["logger"]
    config: IndexerConfig = opts["config"]
    # sink options are validated before any broker connection is opened
    sink = _build_sink(opts["sink"], opts["out"], opts["rows_per_shard"], logger)
    source = make_source()
    processor = TransferProcessor(
        EventMatcher(config, logger=logger.getChild("matcher")),
        TransferDecoder(config, logger=logger.getChild("decoder")),
        sink,
        on_decode_error=opts["on_decode_error"],
        logger=logger.getChild("pipeline"),
    )
    t0 = time.time()
    try:
        stats = processor.run(source, limit=limit)
    except PunkTransfersError as e:
        raise click.ClickException(str(e)) from e
    _print_summary(stats, time.time() - t0)


def _print_summary(stats: ProcessStats, elapsed: float) -> None:
    table = Table(title=f"summary ({elapsed:.2f}s)")
    table.add_column("counter")
    table.add_column("value", justify="right")
    for k, v in stats.as_dict().items():
        table.add_row(k, f"{v:,}")
    console.print(table)


@click.group()
@click.option("--contract", default=None, help="Target contract address (default: CryptoPunks)")
@click.option("--deployment-block", type=int, default=None, help="Logs at or before this block are rejected")
@click.option(
    "--case-sensitive/--no-case-sensitive",
    default=False,
    show_default=True,
    help="Compare contract addresses without lowercasing",
)
@click.option(
    "--on-decode-error",
    type=click.Choice(["skip", "halt"]),
    default="skip",
    show_default=True,
    help="Skip-and-count or stop on a matched log that fails to decode",
)
@click.option("--sink", type=click.Choice(SINKS), default="log", show_default=True)
@click.option("--out", default="", help="Output path for jsonl (file) or parquet (directory) sinks")
@click.option("--rows-per-shard", type=int, default=250_000, show_default=True)
@click.option("--log-level", default="INFO", show_default=True, envvar="LOG_LEVEL")
@click.pass_context
def cli(
    ctx: click.Context,
    contract: str | None,
    deployment_block: int | None,
    case_sensitive: bool,
    on_decode_error: str,
    sink: str,
    out: str,
    rows_per_shard: int,
    log_level: str,
) -> None:
    """punktransfers: decode CryptoPunks ownership transfers from a log stream."""
    overrides: dict = {"address_case_sensitive": case_sensitive}
    if contract is not None:
        overrides["contract_address"] = contract
    if deployment_block is not None:
        overrides["deployment_block"] = deployment_block
    try:
        config = IndexerConfig.punks(**overrides)
    except PunkTransfersError as e:
        raise click.BadParameter(str(e)) from e

    ctx.obj = {
        "config": config,
        "logger": _setup_logging(log_level),
        "on_decode_error": on_decode_error,
        "sink": sink,
        "out": out,
        "rows_per_shard": rows_per_shard,
    }


@cli.command("decode")
@click.argument("path", default="-")
@click.option("--limit", type=int, default=None, help="Stop after this many messages")
@click.pass_context
def decode_cmd(ctx: click.Context, path: str, limit: int | None) -> None:
    """Decode an NDJSON file of raw logs ("-" for stdin)."""
    _run(ctx, lambda: JsonlLogSource(path), limit)


@cli.command("consume")
@click.option("--bootstrap-servers", default=None, help="[env: KAFKA_BOOTSTRAP_SERVERS / MSK_BOOTSTRAP_SERVERS, default: msk]")
@click.option("--topic", default=None, help="[env: KAFKA_TOPIC, default: ethereum-logs]")
@click.option("--group-id", default=None, help="[env: KAFKA_GROUP_ID, default: punk-transfer-processor]")
@click.option("--security-protocol", default=None, help="[env: KAFKA_SECURITY_PROTOCOL]")
@click.option("--sasl-mechanism", default=None, help="[env: KAFKA_SASL_MECHANISM]")
@click.option(
    "--start-offset",
    type=click.Choice(["earliest", "latest"]),
    default=None,
    help="[env: KAFKA_START_OFFSET, default: earliest]",
)
@click.option("--idle-timeout", type=float, default=None, help="Stop after N seconds without messages")
@click.option("--limit", type=int, default=None, help="Stop after this many messages")
@click.pass_context
def consume_cmd(
    ctx: click.Context,
    bootstrap_servers: str | None,
    topic: str | None,
    group_id: str | None,
    security_protocol: str | None,
    sasl_mechanism: str | None,
    start_offset: str | None,
    idle_timeout: float | None,
    limit: int | None,
) -> None:
    """Consume raw logs from Kafka and decode them.

    Settings come from the environment; options given on the command line win.
    """
    passed = {
        "bootstrap_servers": bootstrap_servers,
        "topic": topic,
        "group_id": group_id,
        "security_protocol": security_protocol,
        "sasl_mechanism": sasl_mechanism,
        "start_offset": start_offset,
    }
    stream = replace(StreamConfig.from_env(), **{k: v for k, v in passed.items() if v is not None})
    logger: logging.Logger = ctx.obj["logger"]
    _run(ctx, lambda: KafkaLogSource(stream, idle_timeout_s=idle_timeout, logger=logger.getChild("kafka")), limit)


@cli.command("signatures")
@click.pass_context
def signatures_cmd(ctx: click.Context) -> None:
    """Show the configured topic0s next to the keccak of their signatures."""
    config: IndexerConfig = ctx.obj["config"]
    click.echo(f"contract {config.contract_address} (after block {config.deployment_block:,})")
    for signature, configured in (
        (PUNK_TRANSFER_SIGNATURE, config.transfer_topic0),
        (PUNK_ASSIGN_SIGNATURE, config.assign_topic0),
    ):
        status = "ok" if event_topic0(signature) == configured.lower() else "MISMATCH"
        click.echo(f"{signature:<40} {configured}  {status}")


if __name__ == "__main__":
    cli()
