# sbsa/common/errors.py
"""Single error kind for every precondition failure in SBSA."""


class DomainError(ValueError):
    """
    Raised when an input lies outside the domain of a pure SBSA function:
    out-of-bound coordinates, non-positive quantization steps, addresses
    beyond capacity, negative frequencies, non-finite numbers, invalid bounds.

    Subclasses ValueError so callers that already catch ValueError keep working.
    """
