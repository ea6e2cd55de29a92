"""
Configuration management for smartlist
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger


@dataclass
class ApiConfig:
    """Configuration for the GraphQL API that hosts search and the matching engine."""

    endpoint: str = "http://localhost:8080/graphql"
    token: str = ""
    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class LimitsConfig:
    """Hard ceilings shared by the rule model, seed selector and validator.

    Frozen so a single instance can be injected everywhere without any
    component being able to move a ceiling at runtime.
    """

    max_rules: int = 50
    max_seed_tracks: int = 10
    max_playlist_limit: int = 10000
    default_playlist_limit: int = 100
    max_name_length: int = 255
    max_description_length: int = 2000

    def validate(self) -> None:
        """Validate limit values.

        Raises:
            ValueError: If a ceiling is not a positive integer or the default
                playlist limit falls outside [1, max_playlist_limit]
        """
        for name in (
            "max_rules",
            "max_seed_tracks",
            "max_playlist_limit",
            "default_playlist_limit",
            "max_name_length",
            "max_description_length",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got: {value!r}")

        if not 1 <= self.default_playlist_limit <= self.max_playlist_limit:
            raise ValueError(
                f"default_playlist_limit must be between 1 and "
                f"{self.max_playlist_limit}, got: {self.default_playlist_limit}"
            )


@dataclass
class SearchConfig:
    """Configuration for the seed-track search box."""

    debounce_ms: int = 300
    min_query_length: int = 2
    result_limit: int = 10


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = None  # Default: ~/.local/share/smartlist/smartlist.log
    console_output: bool = False


@dataclass
class Config:
    """Main configuration object."""

    api: ApiConfig = field(default_factory=ApiConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "smartlist"
    return Path.home() / ".config" / "smartlist"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "smartlist"
    return Path.home() / ".local" / "share" / "smartlist"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            if config_path.exists():
                return config_path
            return None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/smartlist (or ~/.config/smartlist)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# smartlist configuration

[api]
# GraphQL endpoint serving track search and playlist mutations
endpoint = "http://localhost:8080/graphql"

# Bearer token (prefer SMARTLIST_API_TOKEN in ~/.config/smartlist/.env)
# token = ""

# Request timeout in seconds
timeout_seconds = 10.0

[limits]
# Maximum number of rules in one smart playlist
max_rules = 50

# Maximum number of seed tracks in a similar_to rule
max_seed_tracks = 10

# Maximum number of tracks a smart playlist may hold
max_playlist_limit = 10000

# Track limit for newly created smart playlists
default_playlist_limit = 100

max_name_length = 255
max_description_length = 2000

[search]
# Delay after the last keystroke before a seed search is sent
debounce_ms = 300

# Queries shorter than this are never sent
min_query_length = 2

# Number of results requested per search
result_limit = 10

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/smartlist/smartlist.log)
# log_file = "/path/to/smartlist.log"

# Also output logs to console
console_output = false
""".strip()


def _parse_limits(limits_data: dict, defaults: LimitsConfig) -> LimitsConfig:
    """Build LimitsConfig from a TOML table, falling back to defaults when invalid."""
    limits = LimitsConfig(
        max_rules=limits_data.get("max_rules", defaults.max_rules),
        max_seed_tracks=limits_data.get("max_seed_tracks", defaults.max_seed_tracks),
        max_playlist_limit=limits_data.get(
            "max_playlist_limit", defaults.max_playlist_limit
        ),
        default_playlist_limit=limits_data.get(
            "default_playlist_limit", defaults.default_playlist_limit
        ),
        max_name_length=limits_data.get("max_name_length", defaults.max_name_length),
        max_description_length=limits_data.get(
            "max_description_length", defaults.max_description_length
        ),
    )
    try:
        limits.validate()
    except ValueError as e:
        logger.warning(f"Invalid limits configuration: {e}. Using default limits.")
        return LimitsConfig()
    return limits


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, or return defaults when no file exists.

    Environment variables override TOML values:
    - SMARTLIST_API_URL
    - SMARTLIST_API_TOKEN

    Args:
        config_path: Explicit config file (default: see get_config_path)

    Returns:
        Parsed configuration
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    path = config_path or get_config_path()
    config = Config()

    if path.exists():
        try:
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Error loading configuration from {path}: {e}")
            toml_data = {}

        if "api" in toml_data:
            api_data = toml_data["api"]
            config.api = ApiConfig(
                endpoint=api_data.get("endpoint", config.api.endpoint),
                token=api_data.get("token", config.api.token),
                timeout_seconds=float(
                    api_data.get("timeout_seconds", config.api.timeout_seconds)
                ),
            )

        if "limits" in toml_data:
            config.limits = _parse_limits(toml_data["limits"], config.limits)

        if "search" in toml_data:
            search_data = toml_data["search"]
            config.search = SearchConfig(
                debounce_ms=search_data.get("debounce_ms", config.search.debounce_ms),
                min_query_length=search_data.get(
                    "min_query_length", config.search.min_query_length
                ),
                result_limit=search_data.get(
                    "result_limit", config.search.result_limit
                ),
            )

        if "logging" in toml_data:
            logging_data = toml_data["logging"]
            log_file = logging_data.get("log_file")
            if log_file:
                log_file = str(Path(log_file).expanduser())
            config.logging = LoggingConfig(
                level=logging_data.get("level", config.logging.level).upper(),
                log_file=log_file,
                console_output=logging_data.get(
                    "console_output", config.logging.console_output
                ),
            )

    api_url = os.environ.get("SMARTLIST_API_URL")
    api_token = os.environ.get("SMARTLIST_API_TOKEN")

    if api_url:
        config.api.endpoint = api_url
    if api_token:
        config.api.token = api_token

    return config


def write_default_config(config_path: Optional[Path] = None) -> Path:
    """Write the default configuration file if none exists yet.

    Returns:
        Path of the (possibly pre-existing) config file
    """
    path = config_path or get_config_dir() / "config.toml"
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(create_default_config() + "\n")
        logger.info(f"Created default configuration at: {path}")
    return path


def ensure_directories() -> None:
    """Ensure all necessary directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
