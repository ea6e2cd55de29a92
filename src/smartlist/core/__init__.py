"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML + .env)
- Logging setup (loguru)
- Console management (Rich)

The core layer has no dependencies on domain, api or ui modules.
"""

from .config import (
    ApiConfig,
    Config,
    LimitsConfig,
    LoggingConfig,
    SearchConfig,
    create_default_config,
    ensure_directories,
    get_config_dir,
    get_config_path,
    get_data_dir,
    load_config,
    write_default_config,
)
from .console import get_console, get_error_console, print_table, safe_print
from .output import log, setup_from_config, setup_loguru
