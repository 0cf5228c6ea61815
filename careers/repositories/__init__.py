"""Repository implementations for domain models."""

from .availability import AvailabilityRepository

__all__ = ["AvailabilityRepository"]
