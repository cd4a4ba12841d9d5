"""Rich console output for progress lines and the final summary."""

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape

from src.models import CallResult, RunResult

console = Console(legacy_windows=False)
err_console = Console(stderr=True, legacy_windows=False)


def print_banner(model_count: int, out: Console | None = None) -> None:
    out = out or console
    out.print(f"Processing input with {model_count} different AI models...")


def print_call_result(result: CallResult, out: Console | None = None) -> None:
    """Print one progress line as a call completes."""
    out = out or console
    model = escape(result.model)
    if result.ok:
        out.print(f"[green]OK[/green]   Received response from {model} ({result.latency_sec:.2f}s)")
    else:
        out.print(f"[red]FAIL[/red] Error from {model}: {escape(result.error.message)}")


def print_generating_summary(out: Console | None = None) -> None:
    out = out or console
    out.print("All models responded. Generating summary...")


def print_error(message: str, out: Console | None = None) -> None:
    out = out or err_console
    out.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_summary(result: RunResult, plain: bool = False, out: Console | None = None) -> None:
    """Print the summary section and the total run time."""
    out = out or console
    out.print(f"\n[bold green]--- Summary ({result.summary_latency_sec:.2f}s) ---[/bold green]")
    if plain:
        out.print(result.summary, markup=False, highlight=False, soft_wrap=True)
    else:
        out.print(Markdown(result.summary))
    out.print(f"\nTotal execution time: {result.total_duration_sec:.2f} seconds")
