import logging
import os
from typing import Callable, Mapping

from rotation_watch.config import RIOT_KEY_ENV_VARS
from rotation_watch.errors import ConfigurationError

log = logging.getLogger(__name__)


class KeyResolver:
    """
    Finds the Riot API key.

    The managed secret wins. If reading it fails (not bound to this function,
    emulator without secrets) we log and fall back to the environment
    variables in RIOT_KEY_ENV_VARS order. Empty strings count as unset.
    """

    def __init__(
        self,
        read_secret: Callable[[], str | None] | None = None,
        environ: Mapping[str, str] | None = None,
        env_vars: tuple[str, ...] = RIOT_KEY_ENV_VARS,
    ) -> None:
        self._read_secret = read_secret
        self._environ = os.environ if environ is None else environ
        self._env_vars = env_vars

    def resolve(self) -> str | None:
        if self._read_secret is not None:
            try:
                value = self._read_secret()
            except Exception as exc:
                log.warning("Unable to read Riot key secret, falling back to env: %s", exc)
            else:
                if value:
                    return value

        for name in self._env_vars:
            value = self._environ.get(name)
            if value:
                return value
        return None

    def require(self) -> str:
        key = self.resolve()
        if not key:
            raise ConfigurationError("Riot API key is not configured")
        return key
