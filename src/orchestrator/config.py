"""
Orchestrator configuration.

Immutable settings for the integration pipeline and the command line.
Values can be overridden from the environment (NUMINT_* variables).
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from src.core.expression.compiler import DEFAULT_VARIABLE

ENV_PREFIX = "NUMINT_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false, yes/no, on/off), got {raw!r}")


@dataclass(frozen=True)
class OrchestratorConfig:
    """
    Configuration for the integration pipeline.

    Attributes:
        variable: Name of the free variable in expressions (default "x")
        simpson_auto_increment: Increment an odd Simpson partition count by
            one before integrating (default True). When False the odd count
            reaches the quadrature engine, which rejects it with ArgumentError.
        log_level: Logging level name for the command line (default "WARNING")
    """
    variable: str = DEFAULT_VARIABLE
    simpson_auto_increment: bool = True
    log_level: str = "WARNING"

    def __post_init__(self):
        if not self.variable.isidentifier():
            raise ValueError(f"variable must be an identifier, got {self.variable!r}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "OrchestratorConfig":
        """
        Build configuration from NUMINT_VARIABLE, NUMINT_SIMPSON_AUTO_INCREMENT
        and NUMINT_LOG_LEVEL. Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        variable = env.get(f"{ENV_PREFIX}VARIABLE", defaults.variable).strip()
        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).strip().upper()

        raw_increment = env.get(f"{ENV_PREFIX}SIMPSON_AUTO_INCREMENT")
        if raw_increment is None:
            simpson_auto_increment = defaults.simpson_auto_increment
        else:
            simpson_auto_increment = _parse_bool(f"{ENV_PREFIX}SIMPSON_AUTO_INCREMENT", raw_increment)

        return cls(
            variable=variable,
            simpson_auto_increment=simpson_auto_increment,
            log_level=log_level,
        )
