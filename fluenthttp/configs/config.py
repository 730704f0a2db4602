from dataclasses import dataclass
import os
import logging
from typing import Optional

import yaml
from dotenv import load_dotenv
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

logger = logging.getLogger(__name__)

ENV_PREFIX = "FLUENTHTTP_"


@dataclass
class Config:
    debug: bool
    rich_logging: bool
    connect_timeout: Optional[float]
    read_timeout: Optional[float]
    allow_redirects: bool
    verify_ssl: bool
    buffer_size: int
    user_agent: str


def setup_logging(config: "Config") -> None:
    """Configure logging level based on ``config.debug``."""
    level = logging.DEBUG if config.debug else logging.INFO
    if config.rich_logging:
        install_rich_traceback()
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=[RichHandler(rich_tracebacks=True)],
        )
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    logger.debug("Logging initialized at level %s", logging.getLevelName(level))
    # Connection pool chatter from the transport is rarely useful
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def load_config(path: Optional[str] = None) -> Config:
    """Load configuration from YAML file and environment variables."""
    load_dotenv()
    logger.debug("Loading configuration from %s", path or "default config.yml")

    # If no path provided, use default relative to this config.py file
    if path is None:
        config_dir = os.path.dirname(os.path.abspath(__file__))
        path = os.path.join(config_dir, "config.yml")

    data = {}
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.debug("Loaded YAML configuration from %s", path)

    def _env(name: str) -> Optional[str]:
        return os.getenv(ENV_PREFIX + name.upper())

    def _env_bool(name: str, default: bool) -> bool:
        val = _env(name)
        if val is None:
            return bool(data.get(name, default))
        return val.lower() in {"1", "true", "yes", "on"}

    def _env_int(name: str, default: int) -> int:
        val = _env(name)
        if val is None:
            return int(data.get(name, default))
        try:
            return int(val)
        except ValueError:
            return default

    def _env_float(name: str) -> Optional[float]:
        val = _env(name)
        if val is None:
            val = data.get(name)
        if val in (None, ""):
            return None
        try:
            return float(val)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid %s value %r", name, val)
            return None

    return Config(
        debug=_env_bool("debug", False),
        rich_logging=_env_bool("rich_logging", True),
        connect_timeout=_env_float("connect_timeout"),
        read_timeout=_env_float("read_timeout"),
        allow_redirects=_env_bool("allow_redirects", True),
        verify_ssl=_env_bool("verify_ssl", True),
        buffer_size=_env_int("buffer_size", 4096),
        user_agent=_env("user_agent") or data.get("user_agent", "fluenthttp/0.1.0"),
    )
