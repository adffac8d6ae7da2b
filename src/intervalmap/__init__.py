from .exceptions import (
    CanonicalFormError,
    ConfigurationException,
    IntervalMapException,
)
from .interval_map import CompressedIntervalMap

__all__ = [
    "CanonicalFormError",
    "CompressedIntervalMap",
    "ConfigurationException",
    "IntervalMapException",
]
