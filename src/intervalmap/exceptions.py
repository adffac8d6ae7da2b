class IntervalMapException(Exception):
    """
    Base exception class.

    All intervalmap-specific exceptions should subclass this class.
    """


class CanonicalFormError(IntervalMapException):
    """
    Raised by an explicit invariant check when the stored breakpoints are not
    the minimal representation of the mapped function.
    """

    def __init__(self, description: str, index: int) -> None:
        super().__init__(f"{self.__class__.__name__}: {description}")
        self.index = index


class ConfigurationException(IntervalMapException):
    """
    Exception for invalid configuration values
    """
