import logging

_logger = logging.getLogger(__name__)


class ContractViolation(Exception):
    """Base class for programmer errors raised by the tree containers.

    These are never caught inside the library; a caller that trips one has
    used an operation outside its documented domain.
    """


class PreconditionViolation(ContractViolation, ValueError):
    pass


class InvariantViolation(ContractViolation, AssertionError):
    pass


def require(condition: bool, message: str) -> None:
    if not condition:
        _logger.debug("precondition violated: %s", message)
        raise PreconditionViolation(message)


def ensure(condition: bool, message: str) -> None:
    if not condition:
        _logger.debug("invariant violated: %s", message)
        raise InvariantViolation(message)
