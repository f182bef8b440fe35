"""Exceptions raised by process configuration and rate evaluation."""


class ConfigurationError(ValueError):
    """Process definition is invalid and the simulation cannot start."""

    def __init__(self, message="Invalid process configuration."):
        super().__init__(message)


class PhysicalValueError(ArithmeticError):
    """A computed rate is negative or not finite."""

    def __init__(self, message="Computed rate is not a physical value."):
        super().__init__(message)
