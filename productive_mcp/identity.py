"""Resolution of the "me" shorthand to the configured person id."""
from .errors import NoActorConfigured

ME = "me"


def resolve_actor(token: str | None, configured_actor: str | None = None) -> str | None:
    """Return ``configured_actor`` for ``"me"``, any other token unchanged."""
    if token != ME:
        return token
    if not configured_actor:
        raise NoActorConfigured(
            'Cannot use "me" reference - PRODUCTIVE_USER_ID is not configured in environment'
        )
    return configured_actor
