import signal
from pathlib import Path
from types import FrameType

import typer

from vision_extract.config.settings import Settings
from vision_extract.exceptions import (
    EXIT_AUDIT,
    EXIT_INTERRUPTED,
    EXIT_USAGE,
    VisionExtractError,
)
from vision_extract.logging.logger import Log
from vision_extract.processor.processor import build_processor

USAGE = "Usage: vision-extract IMAGE_PATH"

app = typer.Typer(
    name="vision-extract",
    help="Extract the text in an image using a vision-capable language model.",
    add_completion=False,
)


@app.command()
def extract(
    image_path: str = typer.Argument(
        ...,
        metavar="IMAGE_PATH",
        help="JPEG, PNG, GIF or WebP image to read.",
    ),
) -> None:
    """Extract the text in IMAGE_PATH and print it."""
    try:
        settings = Settings()
        Log.configure(settings.log_level)
        processor = build_processor(settings)
        context = processor.process(Path(image_path))
    except VisionExtractError as exc:
        typer.echo(f"Error: {exc}", err=True)
        if exc.exit_code == EXIT_USAGE:
            typer.echo(USAGE, err=True)
        raise typer.Exit(code=exc.exit_code) from exc
    except ValueError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=EXIT_USAGE) from exc
    except OSError as exc:
        typer.echo(f"Error: could not write audit record: {exc}", err=True)
        raise typer.Exit(code=EXIT_AUDIT) from exc
    except KeyboardInterrupt as exc:
        typer.echo("Interrupted", err=True)
        raise typer.Exit(code=EXIT_INTERRUPTED) from exc

    if context.result is not None:
        typer.echo(context.result.content)


def _interrupt(signum: int, frame: FrameType | None) -> None:
    _ = frame
    raise KeyboardInterrupt(f"signal {signum}")


def main() -> None:
    """Entry point: SIGTERM unwinds like Ctrl-C so temporary files are removed."""
    signal.signal(signal.SIGTERM, _interrupt)
    app()


if __name__ == "__main__":
    main()
