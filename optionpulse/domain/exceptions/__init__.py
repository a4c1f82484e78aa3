"""Domain exceptions."""
from optionpulse.domain.exceptions.domain_errors import (
    DomainError,
    InvalidSignalError,
    RiskManagementError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "InvalidSignalError",
    "RiskManagementError",
    "ValidationError",
]
