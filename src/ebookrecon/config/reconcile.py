"""Reconciliation run configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Final

from ebookrecon.domain.identity import DEFAULT_IDENTITY_MARKER, AddressForms

from .env import read_env_var
from .errors import ConfigurationError, MissingConfigurationError
from .outputs import OutputPaths

DEFAULT_PROXY_PREFIX: Final[str] = "http://proxy.lib.trentu.ca/login?url="
DEFAULT_PLATFORM_URL: Final[str] = "http://books.scholarsportal.info/"
DEFAULT_OUTPUT_DIR: Final[Path] = Path("reports")

INPUT_DIR_ENV: Final[str] = "EBOOKRECON_INPUT_DIR"
OUTPUT_DIR_ENV: Final[str] = "EBOOKRECON_OUTPUT_DIR"
PROXY_PREFIX_ENV: Final[str] = "EBOOKRECON_PROXY_PREFIX"
PLATFORM_URL_ENV: Final[str] = "EBOOKRECON_PLATFORM_URL"
IDENTITY_MARKER_ENV: Final[str] = "EBOOKRECON_IDENTITY_MARKER"


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    """Holds the inputs, outputs and URL conventions for one run."""

    input_dir: Path
    output_dir: Path
    proxy_prefix: str = DEFAULT_PROXY_PREFIX
    platform_url: str = DEFAULT_PLATFORM_URL
    identity_marker: str = DEFAULT_IDENTITY_MARKER
    outputs: OutputPaths = field(default_factory=OutputPaths)

    @property
    def address_forms(self) -> AddressForms:
        return AddressForms(proxy_prefix=self.proxy_prefix, platform_url=self.platform_url)

    def output_path(self, name: str) -> Path:
        return self.outputs.resolve(self.output_dir, name)

    def discovery_exclusions(self) -> tuple[Path, ...]:
        """Paths input discovery must skip so earlier outputs are never read back."""

        if self.input_dir.is_relative_to(self.output_dir):
            return tuple(
                self.outputs.resolve(self.output_dir, item.name) for item in fields(self.outputs)
            )
        return (self.output_dir,)


def get_reconcile_config(
    *,
    input_dir: Path | None = None,
    output_dir: Path | None = None,
    proxy_prefix: str | None = None,
    platform_url: str | None = None,
    identity_marker: str | None = None,
) -> ReconcileConfig:
    """Build the run configuration from overrides, then the environment, then defaults."""

    env_input = read_env_var(INPUT_DIR_ENV)
    resolved_input = input_dir or (Path(env_input) if env_input else Path.cwd())
    resolved_input = resolved_input.expanduser().resolve()
    if not resolved_input.is_dir():
        raise ConfigurationError(f"Input directory does not exist: {resolved_input}")

    env_output = read_env_var(OUTPUT_DIR_ENV)
    resolved_output = output_dir or (Path(env_output) if env_output else DEFAULT_OUTPUT_DIR)

    config = ReconcileConfig(
        input_dir=resolved_input,
        output_dir=resolved_output.expanduser().resolve(),
        proxy_prefix=_pick(proxy_prefix, PROXY_PREFIX_ENV, DEFAULT_PROXY_PREFIX),
        platform_url=_pick(platform_url, PLATFORM_URL_ENV, DEFAULT_PLATFORM_URL),
        identity_marker=_pick(identity_marker, IDENTITY_MARKER_ENV, DEFAULT_IDENTITY_MARKER),
    )
    if not config.platform_url:
        raise MissingConfigurationError("Platform URL must not be blank")
    if not config.identity_marker:
        raise MissingConfigurationError("Identity marker must not be blank")
    return config


def _pick(override: str | None, env_name: str, default: str) -> str:
    if override is not None:
        return override.strip()
    return read_env_var(env_name, default) or default
