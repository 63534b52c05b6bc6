from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by schedsim."""


class InvalidConfigurationError(SchedulerError, ValueError):
    """Raised for a non-positive quantum or an unknown algorithm name."""


class WorkloadError(SchedulerError, ValueError):
    """Raised when a structured (JSON / CSV) workload entry is invalid."""


class IncompleteTaskError(SchedulerError):
    """Raised when metrics are requested for a task that never finished."""


class SimulationError(SchedulerError):
    """Internal invariant violation inside an engine."""
