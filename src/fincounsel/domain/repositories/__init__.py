"""Repository protocols."""

from .analysis import AnalysisRepository
from .client import ClientRepository

__all__ = ["AnalysisRepository", "ClientRepository"]
