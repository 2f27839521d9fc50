import pytest

from productive_mcp.errors import NoActorConfigured
from productive_mcp.identity import resolve_actor


def test_me_without_configured_actor_fails():
    with pytest.raises(NoActorConfigured):
        resolve_actor("me", None)


def test_me_resolves_to_configured_actor():
    assert resolve_actor("me", "42") == "42"


def test_explicit_id_wins():
    assert resolve_actor("99", "42") == "99"
    assert resolve_actor("99") == "99"


def test_absent_token_stays_absent():
    assert resolve_actor(None, "42") is None
