"""
poolstat Configuration Module

Centralizes environment variable loading for the parser, the zpool
command runner and the API server.
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    """Server and application configuration settings"""
    debug: bool = False
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000
    enable_docs: bool = True

    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class ZpoolConfig:
    """zpool invocation and parsing settings"""
    zpool_binary: str = "zpool"
    command_timeout: float = 30.0

    # bound on concurrent `zpool status` calls while hydrating list rows
    hydration_concurrency: int = 4

    strict_parsing: bool = True
    alias_capacity_to_dedup: bool = True


class PoolStatConfig:
    """
    Configuration loaded from environment variables.

    Every key may also be given with a ``POOLSTAT_`` prefix. Invalid values
    fall back to their defaults with a warning.
    """

    def __init__(self):
        self.server = ServerConfig()
        self.zpool = ZpoolConfig()

        self._load_environment_variables()
        self._validate_configuration()

    def _load_environment_variables(self):
        # ==== SERVER CONFIG ====
        self.server.debug = self._get_bool("DEBUG", self.server.debug)
        self.server.log_level = self._get_string("LOG_LEVEL", self.server.log_level).upper()
        self.server.host = self._get_string("HOST", self.server.host)
        self.server.port = self._get_int("PORT", self.server.port)
        self.server.enable_docs = self._get_bool("ENABLE_DOCS", self.server.enable_docs)
        self.server.cors_origins = self._get_string("CORS_ORIGINS", "*").split(",")

        # ==== ZPOOL CONFIG ====
        self.zpool.zpool_binary = self._get_string("ZPOOL_BINARY", self.zpool.zpool_binary)
        self.zpool.command_timeout = self._get_float("COMMAND_TIMEOUT", self.zpool.command_timeout)
        self.zpool.hydration_concurrency = self._get_int(
            "HYDRATION_CONCURRENCY", self.zpool.hydration_concurrency
        )
        self.zpool.strict_parsing = self._get_bool("STRICT_PARSING", self.zpool.strict_parsing)
        self.zpool.alias_capacity_to_dedup = self._get_bool(
            "ALIAS_CAPACITY_TO_DEDUP", self.zpool.alias_capacity_to_dedup
        )

    def _get_string(self, key: str, default: str) -> str:
        for prefix in ["", "POOLSTAT_"]:
            value = os.getenv(f"{prefix}{key}")
            if value is not None:
                return value
        return default

    def _get_int(self, key: str, default: int) -> int:
        value = self._get_string(key, str(default))
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Invalid integer value for {key}: {value}, using default: {default}")
            return default

    def _get_float(self, key: str, default: float) -> float:
        value = self._get_string(key, str(default))
        try:
            return float(value)
        except ValueError:
            logger.warning(f"Invalid number for {key}: {value}, using default: {default}")
            return default

    def _get_bool(self, key: str, default: bool) -> bool:
        value = self._get_string(key, str(default)).lower()
        return value in ("true", "1", "yes", "on")

    def _validate_configuration(self):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.server.log_level not in valid_levels:
            logger.warning(f"Invalid log level: {self.server.log_level}, using INFO")
            self.server.log_level = "INFO"

        if not (1 <= self.server.port <= 65535):
            logger.warning(f"Invalid port: {self.server.port}, using default: 8000")
            self.server.port = 8000

        if self.zpool.command_timeout <= 0:
            logger.warning(f"Invalid command timeout: {self.zpool.command_timeout}, using 30")
            self.zpool.command_timeout = 30.0

        if self.zpool.hydration_concurrency < 1:
            logger.warning(f"Invalid hydration concurrency: {self.zpool.hydration_concurrency}, using 1")
            self.zpool.hydration_concurrency = 1

    def to_factory_config(self) -> dict:
        """Settings consumed by the service factory."""
        return {
            'log_level': self.server.log_level,
            'zpool_binary': self.zpool.zpool_binary,
            'command_timeout': self.zpool.command_timeout,
            'hydration_concurrency': self.zpool.hydration_concurrency,
            'strict_parsing': self.zpool.strict_parsing,
            'alias_capacity_to_dedup': self.zpool.alias_capacity_to_dedup,
        }

    def get_summary(self) -> dict:
        return {
            "server": {
                "debug": self.server.debug,
                "log_level": self.server.log_level,
                "host": self.server.host,
                "port": self.server.port,
                "enable_docs": self.server.enable_docs,
                "cors_origins": self.server.cors_origins,
            },
            "zpool": self.to_factory_config(),
        }


@lru_cache()
def get_config() -> PoolStatConfig:
    """Get the process configuration, loaded once."""
    return PoolStatConfig()


def reload_config() -> PoolStatConfig:
    """Re-read the environment."""
    get_config.cache_clear()
    return get_config()
