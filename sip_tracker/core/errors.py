"""Errors raised by the calculation core."""


class ContractViolation(ValueError):
    """Raised when the core receives input the validation layer should have rejected."""


def require(condition: bool, message: str) -> None:
    if not condition:
        raise ContractViolation(message)
