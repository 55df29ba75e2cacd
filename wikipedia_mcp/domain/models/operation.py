"""
Operation result model - the explicit success/failure value returned at the operation boundary.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .page import PaginatedChunk


@dataclass(frozen=True)
class OperationResult:
    """Result of one Wikipedia operation."""
    success: bool
    operation: str
    text: str = ""
    error: Optional[str] = None
    chunk: Optional[PaginatedChunk] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, operation: str, text: str, chunk: Optional[PaginatedChunk] = None) -> OperationResult:
        return cls(success=True, operation=operation, text=text, chunk=chunk)

    @classmethod
    def failed(cls, operation: str, error: str, **metadata: Any) -> OperationResult:
        return cls(success=False, operation=operation, error=error, metadata=dict(metadata))
