"""Failure classes raised inside the generator.

None of these reach the caller of ``Level``: each is caught by the component
that owns recovery and turned into a smaller level (fewer rooms, a missing
corridor, a dropped door).
"""
from __future__ import annotations


class GenerationError(Exception):
    pass


class RetryBudgetExhausted(GenerationError):
    def __init__(self, what: str, attempts: int):
        super().__init__(f"{what} gave up after {attempts} attempts")
        self.what = what
        self.attempts = attempts


class CapacityExceeded(GenerationError):
    def __init__(self, what: str, capacity: int):
        super().__init__(f"{what} is full (capacity {capacity})")
        self.what = what
        self.capacity = capacity


class InvariantViolation(GenerationError):
    pass


class CorridorAbandoned(GenerationError):
    """Random early stop of an optional corridor."""
