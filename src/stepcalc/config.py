"""
Service configuration for stepcalc.

This module defines the ServiceConfig dataclass that captures the configurable
parameters of the HTTP endpoint and CLI, read from the environment or a .env
file instead of being hardcoded in the entry points.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import load_dotenv

from stepcalc.constants import (
    DEFAULT_EXPRESSION_PARAM,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    ENV_DEBUG,
    ENV_EXPRESSION_PARAM,
    ENV_HOST,
    ENV_LOG_LEVEL,
    ENV_PORT,
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


@dataclass
class ServiceConfig:
    """
    Configuration for the stepcalc service.

    Attributes:
        host: Interface the HTTP server binds to.
        port: TCP port of the HTTP server.
        debug: Run Flask in debug mode.
        log_level: Root logging level name (DEBUG, INFO, ...).
        expression_param: Request parameter carrying the expression.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    debug: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    expression_param: str = DEFAULT_EXPRESSION_PARAM

    def __post_init__(self):
        """Coerce values coming from the environment as strings, then validate."""
        if isinstance(self.port, str):
            self.port = int(self.port)
        if isinstance(self.debug, str):
            self.debug = self.debug.strip().lower() in _TRUE_VALUES
        self.log_level = str(self.log_level).strip().upper()

        if not 0 < self.port < 65536:
            raise ValueError(f"Port out of range: {self.port}")
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")
        if not self.expression_param:
            raise ValueError("expression_param cannot be empty")

    @classmethod
    def from_mapping(cls, env: Mapping[str, str]) -> "ServiceConfig":
        """Build a config from STEPCALC_* keys; missing keys keep defaults."""
        return cls(
            host=env.get(ENV_HOST, DEFAULT_HOST),
            port=env.get(ENV_PORT, DEFAULT_PORT),
            debug=env.get(ENV_DEBUG, False),
            log_level=env.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
            expression_param=env.get(ENV_EXPRESSION_PARAM, DEFAULT_EXPRESSION_PARAM),
        )

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "ServiceConfig":
        """
        Create configuration from the process environment.

        Args:
            env_file: Optional .env file. When omitted, python-dotenv searches
                for one from the working directory. Variables already set in
                the environment take precedence over the file.

        Returns:
            ServiceConfig populated from STEPCALC_* variables.
        """
        if env_file is not None:
            load_dotenv(dotenv_path=Path(env_file), override=False)
        else:
            load_dotenv(override=False)
        return cls.from_mapping(os.environ)
