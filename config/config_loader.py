"""Load settings.yaml and .env into typed, immutable config. Bootstraps the user config dir."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

from src.models import ModelSpec, ProviderKind

logger = logging.getLogger(__name__)

_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "multidoc"

_ENV_TEMPLATE = """OPENAI_API_KEY=your_openai_api_key
GEMINI_API_KEY=your_gemini_api_key
CLAUDE_API_KEY=your_claude_api_key"""


class ConfigError(Exception):
    """Raised for malformed settings, unset API keys, or a missing .env file."""


@dataclass(frozen=True)
class ProviderConfig:
    name: str
    api_key_env: str
    max_tokens: int | None = None
    base_url: str | None = None


@dataclass(frozen=True)
class Credentials:
    openai: str = field(repr=False)
    gemini: str = field(repr=False)
    claude: str = field(repr=False)

    def for_kind(self, kind: ProviderKind) -> str:
        return getattr(self, kind.value)


@dataclass(frozen=True)
class AppConfig:
    system_prompt: str
    synthesizer_model: str
    timeout_sec: float
    models: tuple[ModelSpec, ...]
    providers: dict[ProviderKind, ProviderConfig]
    credentials: Credentials


def ensure_config_dir(config_dir: Path = DEFAULT_CONFIG_DIR) -> bool:
    """Create config_dir with a template .env if it does not exist yet.

    Returns True when the directory was created, i.e. the user still has to
    fill in their API keys.
    """
    if config_dir.exists():
        return False
    config_dir.mkdir(parents=True, exist_ok=True)
    env_path = config_dir / ".env"
    env_path.write_text(_ENV_TEMPLATE, encoding="utf-8")
    logger.info("Created default config at %s", env_path)
    return True


def load_env(config_dir: Path = DEFAULT_CONFIG_DIR) -> Path:
    """Load <config_dir>/.env, falling back to a .env in the working directory.

    Returns the path that was loaded. Raises ConfigError if neither exists.
    """
    env_path = config_dir / ".env"
    if env_path.is_file():
        load_dotenv(env_path)
        return env_path

    logger.warning("No .env file in %s, trying current directory", config_dir)
    local_env = Path.cwd() / ".env"
    if local_env.is_file():
        load_dotenv(local_env)
        return local_env

    raise ConfigError(f"Error loading .env file: not found in {config_dir} or {Path.cwd()}")


def _parse_providers(raw_providers: dict) -> dict[ProviderKind, ProviderConfig]:
    providers: dict[ProviderKind, ProviderConfig] = {}
    for provider_name, provider_raw in raw_providers.items():
        kind = ProviderKind(provider_name)
        max_tokens = provider_raw.get("max_tokens")
        providers[kind] = ProviderConfig(
            name=provider_name,
            api_key_env=provider_raw["api_key_env"],
            max_tokens=int(max_tokens) if max_tokens is not None else None,
            base_url=provider_raw.get("base_url"),
        )
    return providers


def load_config(settings_path: Path = _SETTINGS_PATH) -> AppConfig:
    """Load and validate configuration from settings.yaml and the environment.

    Raises FileNotFoundError if the settings file is missing. Malformed
    settings (unknown provider, missing key, bad value) and unset API key
    variables raise ConfigError; the latter names every missing variable.
    """
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    try:
        with settings_path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)

        defaults_raw = raw["defaults"]
        system_prompt = str(defaults_raw["system_prompt"])
        synthesizer_model = str(defaults_raw["synthesizer"])
        timeout_sec = float(defaults_raw["timeout_sec"])

        providers = _parse_providers(raw["providers"])
        models = tuple(
            ModelSpec(model=str(m["model"]), provider=ProviderKind(m["provider"]))
            for m in raw["models"]
        )
    except KeyError as exc:
        raise ConfigError(f"Invalid settings in {settings_path}: missing key {exc}") from exc
    except (ValueError, TypeError, AttributeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid settings in {settings_path}: {exc}") from exc

    missing_kinds = [k.value for k in ProviderKind if k not in providers]
    if missing_kinds:
        raise ConfigError(f"Settings missing provider sections: {', '.join(missing_kinds)}")

    keys: dict[str, str] = {}
    missing: list[str] = []
    for kind, provider_cfg in providers.items():
        api_key = os.environ.get(provider_cfg.api_key_env, "").strip()
        if api_key:
            keys[kind.value] = api_key
        else:
            missing.append(provider_cfg.api_key_env)

    if missing:
        raise ConfigError(f"Missing required API keys: {', '.join(missing)}")

    logger.debug("Loaded %d models from %s", len(models), settings_path)

    return AppConfig(
        system_prompt=system_prompt,
        synthesizer_model=synthesizer_model,
        timeout_sec=timeout_sec,
        models=models,
        providers=providers,
        credentials=Credentials(**keys),
    )
