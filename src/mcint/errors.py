"""Errors raised when an integration request is malformed."""


class IntegrationError(ValueError):
    """Base class for invalid integration inputs."""


class InvalidRangeError(IntegrationError):
    """Interval is not exactly two finite bounds with a < b."""


class InvalidFunctionError(IntegrationError):
    """Integrand cannot be compiled or evaluated as a real function of x."""


class InvalidSampleCountError(IntegrationError):
    """Sample count is not a positive integer."""


class InvalidSeedError(IntegrationError):
    """Seed is not an integer."""
