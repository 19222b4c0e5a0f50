# Service wiring.

# Long-lived handles (Firestore client, FCM app, key resolver) are built once
# per process by build_services() and passed down explicitly. Per-invocation
# resources, meaning the aiohttp session and the RiotClient around it, are
# opened and closed inside each run_* coroutine. Nothing is shared between
# invocations except the Services object.

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable

import aiohttp
from firebase_admin import firestore

from rotation_watch.config import USER_AGENT
from rotation_watch.http_client import RiotClient
from rotation_watch.keys import KeyResolver
from rotation_watch.models import JobOutcome
from rotation_watch.notifier import TopicNotifier
from rotation_watch.proxy import ProxyResponse, RotationProxy
from rotation_watch.store import RotationStore
from rotation_watch.watcher import RotationWatcher

log = logging.getLogger(__name__)


@dataclass
class Services:
    keys: KeyResolver
    store: RotationStore
    notifier: TopicNotifier


def build_services(app: Any, read_secret: Callable[[], str | None] | None = None) -> Services:
    return Services(
        keys=KeyResolver(read_secret=read_secret),
        store=RotationStore(firestore.client(app=app)),
        notifier=TopicNotifier(app=app),
    )


@asynccontextmanager
async def riot_client() -> AsyncIterator[RiotClient]:
    async with aiohttp.ClientSession(headers={"User-Agent": USER_AGENT}) as session:
        yield RiotClient(session)


async def run_poll(services: Services) -> JobOutcome:
    async with riot_client() as client:
        watcher = RotationWatcher(client, services.keys, services.store, services.notifier)
        outcome = await watcher.run_once()
    log.info("Rotation poll finished: %s", outcome.value)
    return outcome


async def run_callable_proxy(services: Services) -> dict[str, Any]:
    async with riot_client() as client:
        return await RotationProxy(client, services.keys).call()


async def run_http_proxy(services: Services, method: str) -> ProxyResponse:
    async with riot_client() as client:
        return await RotationProxy(client, services.keys).get(method)
