"""
src/advanced_hash/cli.py
Interfaz de Operador (click).
Bucle interactivo, digest de un solo disparo y auditoría.
Los errores del núcleo (AdvancedHashError) salen como ClickException (código 1).

Uso:
    advanced-hash run
    advanced-hash digest "abc" --salt S1 --pepper P1 --binary
    advanced-hash audit --samples 64
"""
import logging
import sys
from typing import Optional

import click

from .config import HashConfig
from .errors import AdvancedHashError
from .hashing.encoder import to_base64, to_binary_string
from .io.log_sink import HashLog
from .io.sources import PepperSource, SaltSource
from .kernel.engine import HashEngine

EXIT_COMMAND = "exit"


def _engine(ctx: click.Context, config: HashConfig) -> HashEngine:
    # obj["executor"]: executor prestado (tests, embebido en otra app)
    return HashEngine(config, executor=ctx.obj.get("executor"))


def _configure(ctx: click.Context, workers: Optional[int], lenient: bool, log_dir: Optional[str]) -> HashConfig:
    base: HashConfig = ctx.obj["config"]
    return base.override(
        max_workers=workers,
        strict=False if lenient else None,
        log_dir=log_dir,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Salted and peppered 256-bit digest."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    ctx.ensure_object(dict)
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = HashConfig.from_env()
        except ValueError as e:
            raise click.UsageError(str(e)) from e


@cli.command("run")
@click.option("--log-dir", default=None, type=click.Path(file_okay=False),
              help="Directory for hash_log.txt")
@click.option("--workers", "-w", default=None, type=click.IntRange(min=1),
              help="Worker pool size")
@click.option("--lenient", is_flag=True,
              help="Drop lost unit results instead of failing")
@click.pass_context
def run_command(ctx: click.Context, log_dir: Optional[str], workers: Optional[int], lenient: bool) -> None:
    """Hash lines read from stdin until 'exit'."""
    config = _configure(ctx, workers, lenient, log_dir)
    engine = _engine(ctx, config)
    salts = SaltSource(length=config.salt_length)
    peppers = PepperSource()
    stdin = sys.stdin

    with HashLog(config.log_dir, config.log_file) as log:
        click.echo("Enter strings to hash (type exit to quit):")
        while True:
            line = stdin.readline()
            if not line:
                break
            text = line.strip()
            if text.lower() == EXIT_COMMAND:
                break

            salt, pepper = salts(), peppers()
            try:
                digest = engine.digest(text, salt, pepper)
            except AdvancedHashError as e:
                raise click.ClickException(str(e)) from e

            log.write(text, salt, pepper, digest)
            click.echo(f"(Base64): {to_base64(digest)}")

    click.echo(f"Exiting. Log saved to '{log.path}'.")


@cli.command("digest")
@click.argument("text")
@click.option("--salt", default=None, help="Salt (random if omitted)")
@click.option("--pepper", default=None, help="Pepper (time+pid if omitted)")
@click.option("--binary", is_flag=True, help="Also print the 256-bit binary form")
@click.option("--chained", is_flag=True, help="Use the round-chained variant")
@click.option("--workers", "-w", default=None, type=click.IntRange(min=1),
              help="Worker pool size")
@click.option("--lenient", is_flag=True,
              help="Drop lost unit results instead of failing")
@click.pass_context
def digest_command(ctx: click.Context, text: str, salt: Optional[str], pepper: Optional[str],
                   binary: bool, chained: bool, workers: Optional[int], lenient: bool) -> None:
    """Hash a single TEXT and print its Base64 digest."""
    config = _configure(ctx, workers, lenient, None)
    engine = _engine(ctx, config)
    salt = SaltSource(length=config.salt_length)() if salt is None else salt
    pepper = PepperSource()() if pepper is None else pepper

    try:
        if chained:
            digest = engine.chained_digest(text, salt, pepper)
        else:
            digest = engine.digest(text, salt, pepper)
    except AdvancedHashError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Salt: {salt}")
    click.echo(f"Pepper: {pepper}")
    if binary:
        click.echo(f"(Binary): {to_binary_string(digest)}")
    click.echo(f"(Base64): {to_base64(digest)}")


@cli.command("audit")
@click.option("--samples", "-n", default=32, show_default=True, type=click.IntRange(min=1),
              help="Number of random samples")
@click.option("--workers", "-w", default=None, type=click.IntRange(min=1),
              help="Process pool size")
@click.option("--seed", default=0, show_default=True, help="RNG seed")
def audit_command(samples: int, workers: Optional[int], seed: int) -> None:
    """Check size, determinism and sensitivity of the digest."""
    from .audit import run_audit

    report = run_audit(samples=samples, workers=workers, seed=seed)
    if not report.ok:
        raise SystemExit(1)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
