# services/errors.py
"""
Domain errors raised by the service layer.

They subclass the matching builtins so callers outside the HTTP layer can
catch LookupError / PermissionError / ValueError as usual. main.py maps them
to 404 / 403 / 409 / 400 responses; other ValueErrors are treated as bugs.
"""


class NotFoundError(LookupError):
     """Record does not exist or is not visible to the caller."""


class AccessDeniedError(PermissionError):
     """Caller may read the record but not change it."""


class ConflictError(ValueError):
     """Write would break a uniqueness rule, e.g. a second payment for the same month."""


class ValidationError(ValueError):
     """Request is well-formed but breaks a business rule, e.g. sharing with oneself."""
