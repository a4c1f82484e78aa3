"""Application DTOs."""
from optionpulse.application.dto.status_dto import StatusResponseDTO

__all__ = ["StatusResponseDTO"]
