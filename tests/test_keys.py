import logging

import pytest

from rotation_watch.errors import ConfigurationError
from rotation_watch.keys import KeyResolver

ALL_ENV = {"RIOT_KEY": "from-riot-key", "RIOT_API_KEY": "from-api-key", "RIOT_TOKEN": "from-token"}


def _raise():
    raise RuntimeError("secret RIOT_KEY is not bound to this function")


def test_when_secretAvailable_then_secretWins():
    resolver = KeyResolver(read_secret=lambda: "from-secret", environ=ALL_ENV)

    assert resolver.resolve() == "from-secret"


def test_when_secretRaises_then_warnAndFallBackToEnv(caplog):
    resolver = KeyResolver(read_secret=_raise, environ=ALL_ENV)

    with caplog.at_level(logging.WARNING, logger="rotation_watch.keys"):
        assert resolver.resolve() == "from-riot-key"

    assert "falling back" in caplog.text


@pytest.mark.parametrize(
    "environ, expected",
    [
        (ALL_ENV, "from-riot-key"),
        ({"RIOT_API_KEY": "from-api-key", "RIOT_TOKEN": "from-token"}, "from-api-key"),
        ({"RIOT_TOKEN": "from-token"}, "from-token"),
        ({"RIOT_KEY": "", "RIOT_API_KEY": "", "RIOT_TOKEN": "from-token"}, "from-token"),
    ],
    ids=["allSet", "noRiotKey", "onlyToken", "emptyStringsSkipped"],
)
def test_when_secretEmpty_then_envVarsCheckedInPriorityOrder(environ, expected):
    resolver = KeyResolver(read_secret=lambda: "", environ=environ)

    assert resolver.resolve() == expected


def test_when_nothingConfigured_then_resolveReturnsNone():
    assert KeyResolver(read_secret=lambda: None, environ={}).resolve() is None


def test_when_nothingConfigured_then_requireRaises():
    with pytest.raises(ConfigurationError):
        KeyResolver(environ={}).require()


def test_when_noEnvironGiven_then_processEnvironmentIsUsed(monkeypatch):
    monkeypatch.delenv("RIOT_KEY", raising=False)
    monkeypatch.delenv("RIOT_API_KEY", raising=False)
    monkeypatch.setenv("RIOT_TOKEN", "from-process-env")

    assert KeyResolver().resolve() == "from-process-env"
