"""SQLModel repository implementations."""

from .analysis import SQLModelAnalysisRepository
from .client import SQLModelClientRepository

__all__ = ["SQLModelAnalysisRepository", "SQLModelClientRepository"]
