class PlannerError(Exception):
    """Base class for planner errors."""


class LoadFailure(PlannerError):
    """Startup fetch failed: transport error, bad status or undecodable body."""


class SaveFailure(PlannerError):
    """Save request could not be delivered (transport-level only)."""


class NotReady(PlannerError):
    """Mutation attempted before the initial load finished."""
