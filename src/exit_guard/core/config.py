"""Server configuration: loading, validation and defaults."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from exit_guard.contracts.load import validate_instance
from exit_guard.model import ExitPolicy
from exit_guard.policy.exit_policy import parse_policy
from exit_guard.core.settings import Settings

_logger = logging.getLogger(__name__)

SCHEMA_NAME = "server_config.schema.json"

_JSON_SUFFIXES = (".json",)
_YAML_SUFFIXES = (".yaml", ".yml")


class ConfigError(Exception):
    """Configuration file missing, unparsable or invalid."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


@dataclass(frozen=True)
class ServerConfig:
    """Immutable server configuration.

    File values override ``Settings`` (environment) defaults.
    """

    name: str = "exit-guard"
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    exit_policy: ExitPolicy = ExitPolicy.FORWARD
    cors_origins: tuple[str, ...] = field(default_factory=lambda: ("*",))
    log_level: str = "INFO"

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ServerConfig":
        s = settings if settings is not None else Settings()
        return cls(
            name=s.APP_NAME,
            host=s.HOST,
            port=s.PORT,
            debug=s.DEBUG,
            exit_policy=parse_policy(s.EXIT_GUARD_POLICY),
            cors_origins=tuple(s.CORS_ORIGINS),
            log_level=s.LOG_LEVEL.upper(),
        )

    def merged(self, overrides: dict[str, Any]) -> "ServerConfig":
        """Return a copy with *overrides* (already validated) applied."""
        values = asdict(self)
        for key, value in overrides.items():
            if key == "exit_policy":
                value = parse_policy(value)
            elif key == "cors_origins":
                value = tuple(value)
            values[key] = value
        return ServerConfig(**values)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["exit_policy"] = self.exit_policy.value
        d["cors_origins"] = list(self.cors_origins)
        return d


def _parse(path: Path, text: str) -> Any:
    suffix = path.suffix.lower()
    if suffix in _JSON_SUFFIXES:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(path, f"invalid JSON: {exc}") from exc
    if suffix in _YAML_SUFFIXES:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(path, f"invalid YAML: {exc}") from exc
        # An empty YAML document means "all defaults".
        return {} if data is None else data
    raise ConfigError(path, f"unsupported config format {suffix or '(none)'!r}")


def read_config(path: Path | str, *, settings: Settings | None = None) -> ServerConfig:
    """Read, validate and merge a JSON or YAML configuration file.

    Raises ``ConfigError`` when the file cannot be read, parsed or fails
    schema validation.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(path, f"cannot read config file ({exc.strerror or exc})") from exc

    data = _parse(path, text)
    try:
        validate_instance(data, SCHEMA_NAME)
    except jsonschema.ValidationError as exc:
        where = "/".join(str(p) for p in exc.absolute_path) or "(root)"
        raise ConfigError(path, f"{where}: {exc.message}") from exc

    config = ServerConfig.from_settings(settings).merged(data)
    _logger.debug("Loaded config from %s: %s", path, config)
    return config
