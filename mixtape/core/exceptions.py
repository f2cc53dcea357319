# ============================================================================
# FILE: mixtape/core/exceptions.py
# ============================================================================
"""
Error taxonomy shared by every service.

Each error carries the HTTP status it maps to and a short `kind` string that
clients branch on ("conflict" vs "invalid_duration" drive different prompts).
"""


class MixtapeError(Exception):
    """Base class, never raised directly"""
    status_code = 500
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotAuthenticatedError(MixtapeError):
    """Missing, malformed or expired credentials"""
    status_code = 401
    kind = "not_authenticated"


class ForbiddenError(MixtapeError):
    """Caller is known but not allowed to do this"""
    status_code = 403
    kind = "forbidden"


class NotFoundError(MixtapeError):
    status_code = 404
    kind = "not_found"

    def __init__(self, entity: str, entity_id=None):
        message = f"{entity} not found" if entity_id is None else f"{entity} {entity_id} not found"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(MixtapeError):
    """Duplicate song in playlist, duplicate clone, taken username, lost write race"""
    status_code = 409
    kind = "conflict"


class InvalidDurationError(MixtapeError):
    """Playlist total would fall outside the allowed duration window"""
    status_code = 400
    kind = "invalid_duration"

    def __init__(self, message: str, total_duration_sec: int = None):
        super().__init__(message)
        self.total_duration_sec = total_duration_sec


class ValidationError(MixtapeError):
    status_code = 422
    kind = "validation_error"
