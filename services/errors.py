# errors.py

from enum import Enum


class ToggleStep(str, Enum):
    VALIDATE = 'validate'
    CHECK_POST = 'check_post'
    READ_STATUS = 'read_status'
    READ_COUNTERS = 'read_counters'
    WRITE_STATUS = 'write_status'
    RECOUNT = 'recount'
    PUSH_COUNTERS = 'push_counters'
    QUERY = 'query'


class ReactionError(Exception):
    """Base failure of a reaction operation.

    ``step`` names the step that failed. ``message`` is the client-safe text,
    the exception's own args keep the detail for logs.
    """
    status_code = 500
    message = 'Reaction could not be updated'

    def __init__(self, detail=None, step=None):
        super().__init__(detail or self.message)
        self.detail = detail or self.message
        self.step = step

    def __str__(self):
        if self.step is None:
            return self.detail
        return f'{self.detail} (step: {self.step.value})'


class InvalidInput(ReactionError):
    status_code = 400
    message = 'Invalid user, post or reaction'


class NotFound(ReactionError):
    status_code = 404
    message = 'Post not found'


class StoreUnavailable(ReactionError):
    status_code = 503
    message = 'Reaction store unavailable'
