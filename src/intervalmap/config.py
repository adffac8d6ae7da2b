import logging
import os
from dataclasses import dataclass
from typing import Any, Final

from .exceptions import ConfigurationException
from .utils import io_util

CONFIG_FILE: Final = "config.toml"
_BENCHMARK_POSITIVE_FIELDS: Final = (
    "repeat",
    "number",
    "operations",
    "key_space",
    "value_space",
)


@dataclass(frozen=True)
class BenchmarkConfig:
    repeat: int
    number: int
    operations: int
    key_space: int
    value_space: int
    seed: int


@dataclass(frozen=True)
class Config:
    log_level: str
    benchmark: BenchmarkConfig


def _parse_log_level(conf: dict[str, Any]) -> str:
    level = os.getenv("LOG_LEVEL") or conf.get("logging", {}).get("level", "INFO")
    level = str(level).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationException(f"Unknown log level '{level}'.")
    return level


def _parse_benchmark(conf: dict[str, Any]) -> BenchmarkConfig:
    section = conf.get("benchmark")
    if not isinstance(section, dict):
        raise ConfigurationException("Missing [benchmark] section.")

    for name in _BENCHMARK_POSITIVE_FIELDS:
        value = section.get(name)
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ConfigurationException(
                f"benchmark.{name} must be a positive integer, got {value!r}."
            )

    seed = section.get("seed", 0)
    if not isinstance(seed, int) or isinstance(seed, bool):
        raise ConfigurationException(f"benchmark.seed must be an integer, got {seed!r}.")

    return BenchmarkConfig(
        repeat=section["repeat"],
        number=section["number"],
        operations=section["operations"],
        key_space=section["key_space"],
        value_space=section["value_space"],
        seed=seed,
    )


def parse_config(conf: dict[str, Any]) -> Config:
    """
    Build a validated Config from an already-decoded TOML document.

    Raises:
        ConfigurationException: If a value is missing or out of range.
    """
    return Config(log_level=_parse_log_level(conf), benchmark=_parse_benchmark(conf))


def _load_config() -> Config:
    """
    Load and parse the bundled config.toml file.
    """
    return parse_config(io_util.load_resource_toml(CONFIG_FILE))


config = _load_config()
