"""Command-line interface for Note Stream.

Provides commands for:
- detect: Run onset detection over an audio file
- note: Show the note identity of one or more frequencies
- info: Show audio file information
"""

import typer
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, Iterator, List
from rich.console import Console
from rich.table import Table

from .core.constants import DEFAULT_FRAME_RATE, DEFAULT_WINDOW_SIZE, REFERENCE_HZ

app = typer.Typer(
    name="note-stream",
    help="Monophonic pitch to note-onset detection",
    rich_markup_mode="markdown",
)
console = Console()


@dataclass
class StageTimings:
    """Wall-clock time per pipeline stage, plus window throughput.

    Per-window cost is reported against the frame budget of a live display
    that analyses one window per frame.
    """

    stages: Dict[str, float] = field(default_factory=dict)
    windows: int = 0
    audio_seconds: float = 0.0

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Time the enclosed block under `name`."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.stages[name] = time.perf_counter() - start

    @property
    def total_time(self) -> float:
        return sum(self.stages.values())

    @property
    def ms_per_window(self) -> float:
        """Mean detection time per window in milliseconds, 0 when nothing ran."""
        if not self.windows:
            return 0.0
        return self.stages.get("detect", 0.0) * 1000.0 / self.windows

    @property
    def realtime_factor(self) -> float:
        """Audio seconds processed per second of detection time."""
        detect = self.stages.get("detect", 0.0)
        if detect <= 0:
            return 0.0
        return self.audio_seconds / detect

    def print_summary(self, frame_rate: float) -> None:
        """Print stage times and the per-window cost against the frame budget."""
        console.print("\n[bold]Timing Summary:[/bold]")
        for name, duration in self.stages.items():
            console.print(f"  {name}: {duration:.2f}s")
        console.print(f"  [bold]Total: {self.total_time:.2f}s[/bold]")
        if self.windows:
            budget_ms = 1000.0 / frame_rate
            style = "green" if self.ms_per_window <= budget_ms else "red"
            console.print(
                f"  Per window: [{style}]{self.ms_per_window:.3f} ms[/{style}] "
                f"(frame budget {budget_ms:.1f} ms, {self.realtime_factor:.1f}x real time)"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stages": self.stages,
            "total_time": self.total_time,
            "windows": self.windows,
            "ms_per_window": self.ms_per_window,
            "realtime_factor": self.realtime_factor,
        }


def _load_config(
    config_file: Optional[Path], **overrides: Any
):
    """Build the pipeline config from an optional JSON file plus CLI overrides."""
    from .core import StreamConfig

    try:
        base = StreamConfig.from_json(str(config_file)) if config_file else StreamConfig()
        return base.with_overrides(**overrides)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: Invalid configuration: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def detect(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, MP3, FLAC, ...)"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output MIDI file path"
    ),
    json_out: Optional[Path] = typer.Option(
        None, "--json-out", help="Write onset events to a JSON file"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "-c", "--config", help="JSON file with pipeline settings"
    ),
    min_note: Optional[int] = typer.Option(
        None, "--min-note", help="Lowest note number that produces onsets (default 55)"
    ),
    max_note: Optional[int] = typer.Option(
        None, "--max-note", help="Highest note number that produces onsets (default 96)"
    ),
    cooldown: Optional[float] = typer.Option(
        None, "--cooldown", help="Re-articulation cooldown in ms (default 200)"
    ),
    window_size: Optional[int] = typer.Option(
        None, "--window-size", help="Samples per analysis window (default 2048)"
    ),
    frame_rate: Optional[float] = typer.Option(
        None, "--frame-rate", help="Windows analysed per second (default 60)"
    ),
    hop: Optional[int] = typer.Option(
        None, "--hop", help="Samples between windows (overrides --frame-rate)"
    ),
    highpass: Optional[float] = typer.Option(
        None, "--highpass", help="High-pass cutoff in Hz (default 80)"
    ),
    no_highpass: bool = typer.Option(
        False, "--no-highpass", help="Disable the capture high-pass filter"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Detect note onsets in an audio file, window by window.

    **Examples:**

        note-stream detect violin.wav

        note-stream detect violin.wav -o violin.mid --cooldown 150

        note-stream detect violin.wav --json --no-highpass
    """
    from .input import AudioLoader, count_windows
    from .transcription import OnsetTranscriber
    from .output import MIDIExporter, events_to_dicts, export_events_json

    config = _load_config(
        config_file,
        min_note=min_note,
        max_note=max_note,
        cooldown_ms=cooldown,
        window_size=window_size,
        frame_rate=frame_rate,
        hop_length=hop,
        highpass_hz=0.0 if no_highpass else highpass,
    )

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    timings = StageTimings()

    try:
        if not json_output:
            console.print(f"[blue]Loading audio:[/blue] {input_file}")

        with timings.stage("load"):
            loader = AudioLoader(
                target_sr=config.sample_rate,
                highpass_hz=config.highpass_hz,
                window_size=config.window_size,
            )
            audio, sr = loader.load(str(input_file))
        duration = loader.get_duration(audio, sr)

        hop_length = config.hop_length_for(sr)
        timings.windows = count_windows(len(audio), config.window_size, hop_length)
        timings.audio_seconds = duration
        if verbose and not json_output:
            console.print(f"  Duration: {duration:.2f}s, Sample rate: {sr}Hz")
            console.print(
                f"  Windows: {timings.windows} "
                f"({config.window_size} samples, hop {hop_length})"
            )
            if config.highpass_hz:
                console.print(f"  High-pass: {config.highpass_hz:.0f} Hz")

        if not json_output:
            console.print("[blue]Detecting onsets...[/blue]")
        with timings.stage("detect"):
            transcriber = OnsetTranscriber(config)
            events = transcriber.transcribe(audio, sr)
        stats = transcriber.stream.stats

        if not json_output:
            console.print(f"  Detected {len(events)} onsets")

        if output is not None:
            with timings.stage("export"):
                MIDIExporter().export(events, str(output))
            if not json_output:
                console.print(f"[blue]Exported MIDI to:[/blue] {output}")

        if json_out is not None:
            export_events_json(events, str(json_out), config=config)
            if not json_output:
                console.print(f"[blue]Exported events to:[/blue] {json_out}")

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if json_output:
        result = {
            "input": str(input_file),
            "duration": duration,
            "sample_rate": sr,
            "events": events_to_dicts(events),
            "stats": {
                "windows": stats.windows,
                "no_pitch": stats.no_pitch,
                "out_of_range": stats.out_of_range,
                "suppressed": stats.suppressed,
                "emitted": stats.emitted,
            },
            "timings": timings.to_dict(),
        }
        if output is not None:
            result["output"] = str(output)
        console.print_json(data=result)
        return

    if events:
        _show_events_table(events, transcriber)
    if verbose:
        _show_stats(stats)
        timings.print_summary(sr / hop_length)
    console.print("[green]Detection complete![/green]")


@app.command()
def note(
    frequencies: List[float] = typer.Argument(..., help="Frequencies in Hz"),
    reference: float = typer.Option(
        REFERENCE_HZ, "--reference", "-r", help="Reference pitch for A4 in Hz"
    ),
):
    """Show note name, octave, note number and cents for frequencies."""
    from .analysis import NoteMapper

    try:
        mapper = NoteMapper(reference_hz=reference)
        identities = [(f, mapper.identity(f)) for f in frequencies]
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Note Identity")
    table.add_column("Frequency (Hz)", style="cyan")
    table.add_column("Note", style="green")
    table.add_column("Number", style="yellow")
    table.add_column("Cents", style="magenta")

    for frequency, identity in identities:
        table.add_row(
            f"{frequency:.2f}",
            identity.full_name,
            str(identity.note_number),
            f"{identity.cents_offset:+d}",
        )

    console.print(table)


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
    window_size: int = typer.Option(DEFAULT_WINDOW_SIZE, "--window-size", help="Samples per window"),
    frame_rate: float = typer.Option(DEFAULT_FRAME_RATE, "--frame-rate", help="Windows per second"),
):
    """Show information about an audio file."""
    import numpy as np
    from .input import AudioLoader, count_windows

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    config = _load_config(None, window_size=window_size, frame_rate=frame_rate)
    loader = AudioLoader(
        target_sr=config.sample_rate, highpass_hz=None, window_size=config.window_size
    )
    try:
        audio, sr = loader.load(str(input_file))
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    hop_length = config.hop_length_for(sr)
    peak = float(np.abs(audio).max()) if len(audio) else 0.0

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {loader.get_duration(audio, sr):.2f} seconds")
    console.print(f"  Sample rate: {sr} Hz")
    console.print(f"  Samples: {len(audio):,}")
    console.print(f"  Peak amplitude: {peak:.3f}")
    console.print(
        f"  Windows: {count_windows(len(audio), config.window_size, hop_length):,} "
        f"({config.window_size} samples, hop {hop_length})"
    )


def _show_events_table(events, transcriber):
    """Display onset events in a table."""
    table = Table(title="Detected Onsets")
    table.add_column("Note", style="cyan")
    table.add_column("Time (ms)", style="green")
    table.add_column("Cents", style="yellow")
    table.add_column("Lane", style="magenta")

    for event in events:
        table.add_row(
            event.full_name,
            f"{event.time_ms:.1f}",
            f"{event.cents_offset:+d}",
            f"{transcriber.stream.lane_position(event):.2f}",
        )

    console.print(table)


def _show_stats(stats):
    """Display stream counters."""
    console.print("\n[bold]Stream Summary:[/bold]")
    console.print(f"  Windows: {stats.windows}")
    console.print(f"  No pitch: {stats.no_pitch}")
    console.print(f"  Out of range: {stats.out_of_range}")
    console.print(f"  Suppressed: {stats.suppressed}")
    console.print(f"  Emitted: {stats.emitted}")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
