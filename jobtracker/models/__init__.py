"""Database models."""

from jobtracker.models.application import ApplicationRecord

__all__ = ["ApplicationRecord"]
