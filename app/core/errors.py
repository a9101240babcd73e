# app/core/errors.py
"""
Domain errors raised by the scheduler core.

The HTTP mapping for each of these lives in app.main; nothing in here
knows about FastAPI.
"""


class SchedulerError(Exception):
    """Base class for all scheduler domain errors."""


class Unauthenticated(SchedulerError):
    """No principal was presented with the request."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)
        self.message = message


class Forbidden(SchedulerError):
    """
    Authenticated principal whose role lacks the required permission.

    Only the role and the permission are carried; never tenant data.
    """

    def __init__(self, role: str, required_permission: str):
        super().__init__(f"Role {role} lacks permission {required_permission}")
        self.role = role
        self.required_permission = required_permission


class InvalidRange(SchedulerError):
    """Date or date range missing, malformed, reversed or too wide."""


class ResourceNotFound(SchedulerError):
    """A referenced tech or service does not exist in the caller's tenant."""

    def __init__(self, kind: str, resource_id: object):
        super().__init__(f"{kind} {resource_id} not found")
        self.kind = kind
        self.resource_id = resource_id


class OutOfRange(SchedulerError):
    """An interval lies entirely after business hours."""


class UnknownRoleError(SchedulerError, KeyError):
    """Role is not part of the capability matrix."""
