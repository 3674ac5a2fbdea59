"""
Distill command line tool.

Entry point that summarizes an audio file (e.g. a meeting recording) with
object storage, AssemblyAI and Gemini.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.status import Status

from distill.config import load_config
from distill.dependencies import get_handler
from distill.domain import AudioSource, ProgressObserver, Stage, TranscriptionJob
from distill.exceptions import ConfigurationError, DistillError
from distill.handlers import DeliveryStatus, OutputType
from distill.logging import setup_logging

EXIT_FAILURE = 1
EXIT_DELIVERY_FAILED = 2

app = typer.Typer(
    help="Distill summarizes an audio file (e.g. a meeting) using object storage, "
    "AssemblyAI and Gemini.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

_STAGE_MESSAGES = {
    Stage.UPLOAD: "Uploading file to bucket {detail}...",
    Stage.TRANSCRIPTION: "Submitting transcription job (bucket region {detail})...",
    Stage.SUMMARIZATION: "Summarizing text...",
    Stage.DELIVERY: "Writing {detail} output...",
}


class SpinnerProgress(ProgressObserver):
    """Reports pipeline progress on a rich spinner."""

    def __init__(self, status: Status):
        self._status = status

    def stage_started(self, stage: Stage, detail: str = "") -> None:
        self._status.update(_STAGE_MESSAGES[stage].format(detail=detail))

    def job_polled(self, job: TranscriptionJob) -> None:
        self._status.update(
            f"Waiting for transcription to complete ({job.status.value}, "
            f"check {job.polls})..."
        )


@app.command()
def summarize(
    input_audio_file: Path = typer.Option(
        ..., "--input-audio-file", "-i", help="Path to the audio file to summarize."
    ),
    output_type: OutputType = typer.Option(
        OutputType.TERMINAL,
        "--output-type",
        "-o",
        case_sensitive=False,
        help="Where to deliver the summary.",
    ),
    bucket: str | None = typer.Option(
        None, "--bucket", "-b", help="Bucket to upload to; overrides DISTILL_S3_BUCKET."
    ),
) -> None:
    """Upload, transcribe and summarize an audio file."""
    console.print("Welcome to Distill CLI")

    try:
        config = load_config()
        setup_logging(config.log_level)
        if bucket:
            config = config.model_copy(
                update={"storage": config.storage.model_copy(update={"bucket_name": bucket})}
            )
        if not config.storage.bucket_name:
            raise ConfigurationError(
                "No bucket configured; set DISTILL_S3_BUCKET or pass --bucket"
            )
        source = AudioSource.from_path(input_audio_file)

        console.print(f"Bucket: {config.storage.bucket_name}")
        with get_handler(config, console) as handler:
            with console.status("Starting...", spinner="dots") as status:
                result = handler.run(source, output_type, SpinnerProgress(status))
    except DistillError as e:
        err_console.print(
            f"[red]Error in {e.stage} stage:[/] {escape(str(e))}",
            highlight=False,
            soft_wrap=True,
        )
        raise typer.Exit(code=EXIT_FAILURE)

    if result.delivery is DeliveryStatus.FAILED:
        err_console.print(
            f"[yellow]Summary shown above; delivery failed:[/] {escape(str(result.sink_error))}",
            highlight=False,
            soft_wrap=True,
        )
        raise typer.Exit(code=EXIT_DELIVERY_FAILED)
    if result.delivery is DeliveryStatus.SKIPPED:
        err_console.print(
            f"[yellow]{output_type.value} output is not configured; summary shown above.[/]",
            soft_wrap=True,
        )
    elif output_type is not OutputType.TERMINAL:
        console.print(f"Summary delivered ({output_type.value}).")
    console.print("Done!")


def main():
    """Runs the command line application."""
    app()


if __name__ == "__main__":
    main()
