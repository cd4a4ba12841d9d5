"""Click CLI — loads config, reads stdin, runs the fan-out and prints the summary."""

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from config.config_loader import (
    DEFAULT_CONFIG_DIR,
    AppConfig,
    ConfigError,
    ensure_config_dir,
    load_config,
    load_env,
)
from src.models import CallResult, ModelSpec, ProviderKind, RunResult
from src.output import (
    console,
    print_banner,
    print_call_result,
    print_error,
    print_generating_summary,
    print_summary,
)
from src.providers.anthropic import AnthropicProvider
from src.providers.base import AIProvider
from src.providers.gemini import GeminiProvider
from src.providers.openai_provider import OpenAIProvider
from src.router import Router
from src.runner import InputError, run, validate_input
from src.synthesis import SynthesisError

logger = logging.getLogger(__name__)

PROVIDER_CLASSES: dict[ProviderKind, type[AIProvider]] = {
    ProviderKind.OPENAI: OpenAIProvider,
    ProviderKind.GEMINI: GeminiProvider,
    ProviderKind.CLAUDE: AnthropicProvider,
}


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
    )
    # SDK clients log every HTTP request at INFO.
    for noisy in ("httpx", "google_genai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _build_router(config: AppConfig) -> Router:
    providers = {kind: PROVIDER_CLASSES[kind](config.providers[kind]) for kind in PROVIDER_CLASSES}
    # The synthesizer always goes through OpenAI; listed models keep their own kind.
    synthesizer = ModelSpec(config.synthesizer_model, ProviderKind.OPENAI)
    return Router((synthesizer, *config.models), providers, config.credentials)


def _read_stdin() -> str:
    try:
        return sys.stdin.read()
    except (OSError, UnicodeDecodeError) as exc:
        print_error(f"Error reading from stdin: {exc}")
        sys.exit(1)


async def _run_with_progress(user_input: str, config: AppConfig, router: Router) -> RunResult:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:

        def on_result(result: CallResult) -> None:
            print_call_result(result, out=progress.console)

        def on_dispatched(results: list[CallResult]) -> None:
            print_generating_summary(out=progress.console)

        progress.add_task("Waiting for models...", total=None)
        return await run(user_input, config, router, on_result=on_result, on_dispatched=on_dispatched)


@click.command()
@click.option("--config-dir", "config_dir", type=click.Path(path_type=Path), default=DEFAULT_CONFIG_DIR,
              envvar="MULTIDOC_CONFIG_DIR", show_default=True, help="Directory holding the .env with API keys")
@click.option("--settings", "settings_path", type=click.Path(exists=True, path_type=Path),
              default=None, help="Settings YAML (models, system prompt, synthesizer)")
@click.option("--plain", is_flag=True, help="Print the summary verbatim instead of rendering markdown")
@click.option("--verbose", is_flag=True, help="Enable DEBUG-level logging")
def main(config_dir: Path, settings_path: Path | None, plain: bool, verbose: bool) -> None:
    """multidoc -- ask several AI models at once and summarize their answers.

    Reads the whole input from stdin.

    \b
    Examples:
      echo "Explain CRDTs in two paragraphs" | multidoc
      multidoc --plain < notes.md
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8", errors="replace")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8", errors="replace")

    _setup_logging(verbose)

    if ensure_config_dir(config_dir):
        console.print(
            f"Created default config at: {config_dir / '.env'}\nPlease add your API keys to this file."
        )
        sys.exit(0)

    try:
        load_env(config_dir)
        config = load_config(settings_path) if settings_path else load_config()
    except (ConfigError, FileNotFoundError) as exc:
        print_error(f"{exc} (config dir: {config_dir})")
        sys.exit(1)

    user_input = _read_stdin()
    try:
        validate_input(user_input)
    except InputError as exc:
        print_error(str(exc))
        sys.exit(1)

    router = _build_router(config)
    print_banner(len(config.models))

    try:
        result = asyncio.run(_run_with_progress(user_input, config, router))
    except SynthesisError as exc:
        print_error(str(exc))
        sys.exit(1)

    print_summary(result, plain=plain)


if __name__ == "__main__":
    main()
