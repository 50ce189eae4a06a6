from __future__ import annotations


class ProjectionError(Exception):
    """Base class for every error raised by the projection engine."""


class InvalidArgumentError(ProjectionError, ValueError):
    """An input is outside its contract (negative count, bad percentage, bad price)."""


class UnknownPlanError(ProjectionError, KeyError):
    def __init__(self, plan_id: object) -> None:
        super().__init__(plan_id)
        self.plan_id = plan_id

    def __str__(self) -> str:
        return f"Unknown pricing plan: {self.plan_id!r}"


class ConfigurationError(ProjectionError):
    """Configuration records are malformed (wrong target count, empty equity table)."""
