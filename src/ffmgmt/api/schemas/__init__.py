"""Pydantic models for API I/O."""

from .report import (
    AnalyzeResponse,
    SlotAssignmentResponse,
    SlotResolveRequest,
    SlotResolveResponse,
    SlotRuleResponse,
    WeekRequest,
    WeekResponse,
)

__all__ = [
    "AnalyzeResponse",
    "SlotAssignmentResponse",
    "SlotResolveRequest",
    "SlotResolveResponse",
    "SlotRuleResponse",
    "WeekRequest",
    "WeekResponse",
]
