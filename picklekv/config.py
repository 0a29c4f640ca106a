# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load store defaults from environment variables / .env file.
#   Only PickleDb.from_config() and the CLI read this; the store
#   itself takes explicit arguments.
#
# CLASSES:
# --------
# - StoreConfig (dataclass)
#     db_path: str                 (default "data/picklekv.db")
#     dump_policy: str             (default "auto")
#     dump_interval_seconds: float (default 5.0)
#     codec: str                   (default "json")
#
# FUNCTIONS:
# ----------
# - get_config() -> StoreConfig
#     Load .env using python-dotenv, construct StoreConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Drop the cached singleton (tests, reloading .env).
#
# ENVIRONMENT:
# ------------
#   PICKLEKV_DB_PATH, PICKLEKV_DUMP_POLICY,
#   PICKLEKV_DUMP_INTERVAL, PICKLEKV_CODEC
#
# USAGE:
# ------
#   from picklekv.config import get_config
#   config = get_config()
#   print(config.db_path)
#
# ==============================================

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from picklekv.errors import ConfigError
from picklekv.persistence.dump_policy import DumpPolicy


@dataclass
class StoreConfig:
    """Defaults used when opening a store from configuration."""
    db_path: str = "data/picklekv.db"
    dump_policy: str = "auto"
    dump_interval_seconds: float = 5.0
    codec: str = "json"

    def dump_policy_value(self) -> DumpPolicy:
        """Build the DumpPolicy described by dump_policy / dump_interval_seconds."""
        return DumpPolicy.parse(self.dump_policy, self.dump_interval_seconds)


# Singleton instance
_config_instance: Optional[StoreConfig] = None


def _float_env(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got '{raw}'") from None
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be finite, got '{raw}'")
    return value


def get_config(env_file: Optional[Path] = None) -> StoreConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Args:
        env_file: Optional .env path. Defaults to ".env" in the working directory.

    Returns:
        StoreConfig: Store configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    load_dotenv(dotenv_path=env_file or Path.cwd() / ".env")

    config = StoreConfig(
        db_path=os.getenv("PICKLEKV_DB_PATH", "data/picklekv.db"),
        dump_policy=os.getenv("PICKLEKV_DUMP_POLICY", "auto"),
        dump_interval_seconds=_float_env("PICKLEKV_DUMP_INTERVAL", "5.0"),
        codec=os.getenv("PICKLEKV_CODEC", "json"),
    )

    # Fail early on bad policy names / intervals
    config.dump_policy_value()

    _config_instance = config
    return _config_instance


def reset_config() -> None:
    """Forget the cached configuration."""
    global _config_instance
    _config_instance = None
