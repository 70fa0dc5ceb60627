# rotolog CLI (Typer)

import glob
import os
from pathlib import Path

import typer

from .config import settings
from .levels import LogLevel, Policy
from .logger import Logger

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _write_batch(log: Logger) -> None:
    log.error("Error info")
    log.info_stream().write("test")
    log.info("(INFO)")
    log.debug("Debug")
    log.debug_stream().write(f"{2}dfsadf")


@app.command()
def demo(
    log_dir: Path = typer.Option(Path("logs"), help="Directory for the log files of the second phase"),
    iterations: int = typer.Option(10, min=1, help="Writes per level in the file phase"),
    max_size: int = typer.Option(500, help="Size threshold of the shared INFO/ERROR file"),
    max_files: int = typer.Option(4, help="Files kept by size rotation, live file included"),
):
    """Walk through level gating and timers on the console, then file routing and rotation."""
    settings.diagnostics.apply()

    with Logger(profiling=True) as log:
        log.timer_start()

        log.set_level(LogLevel.DEBUG)
        _write_batch(log)

        log.set_level(LogLevel.INFO)
        log.info_stream().write("INFO set")
        _write_batch(log)

        log.timer_start()

        log.set_level(LogLevel.ERROR)
        log.error_stream().write("ERROR set")
        _write_batch(log)

        log.timer_stop("microseconds")
        log.timer_stop("milliseconds")

        log_dir.mkdir(parents=True, exist_ok=True)
        log.set_level(LogLevel.DEBUG)
        log.set_level_sink(LogLevel.DEBUG, log_dir / "logfileDEB.log", Policy.DAILY)
        log.set_level_sink(LogLevel.INFO, log_dir / "logfile.log", Policy.MAX_SIZE, max_files, max_size)
        log.set_level_sink(LogLevel.ERROR, log_dir / "logfile.log", Policy.MAX_SIZE)

        for i in range(iterations):
            log.error("Log file Error info")
            log.info_stream().write(f"Log file test {i}")
            log.info("Log file (INFO)")
            log.debug("Log file Debug")
            log.debug_stream().write(f"Log file{i}dfsadf")

    typer.echo(f"\nLog files written to {log_dir}")


@app.command()
def tail(
    path: Path = typer.Argument(..., help="Active log file"),
    archives: bool = typer.Option(False, "--archives", help="List rotated archives as well"),
):
    """Print a log file and, optionally, its archives."""
    if not path.exists():
        typer.echo(f"No such log file: {path}", err=True)
        raise typer.Exit(code=1)
    typer.echo(path.read_text(encoding="utf-8"))
    if archives:
        for archive in sorted(glob.glob(glob.escape(os.fspath(path)) + ".*")):
            typer.echo(f"{archive}\t{os.path.getsize(archive)} bytes")


def main() -> None:
    app()
