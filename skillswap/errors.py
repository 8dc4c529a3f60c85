"""Error taxonomy for SkillSwap.

All errors raised by the engine derive from SkillSwapError so the API layer can
map them to responses in one place.
"""


class SkillSwapError(Exception):
    """Base class for SkillSwap errors."""


class ValidationError(SkillSwapError):
    """Input is malformed or violates a precondition (e.g. empty message, skill not owned)."""


class NotFoundError(SkillSwapError):
    """A referenced user, swap request, message or report does not exist."""


class AuthorizationError(SkillSwapError):
    """The acting user may not perform this operation."""


class InvalidStateError(SkillSwapError):
    """A transition was attempted from the wrong source state."""


class RepositoryError(SkillSwapError):
    """The backing store failed; the original exception is chained as __cause__."""
