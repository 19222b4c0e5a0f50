from fakes import FakeNotifier, FakeStore
from rotation_watch.config import USER_AGENT
from rotation_watch.http_client import RiotClient
from rotation_watch.keys import KeyResolver
from rotation_watch.models import JobOutcome
from rotation_watch.notifier import TopicNotifier
from rotation_watch.services import Services, build_services, riot_client, run_http_proxy, run_poll
from rotation_watch.store import RotationStore


def test_when_servicesBuilt_then_handlesShareTheApp(mocker):
    app = object()
    firestore_client = mocker.patch("rotation_watch.services.firestore.client")

    services = build_services(app, read_secret=lambda: "from-secret")

    firestore_client.assert_called_once_with(app=app)
    assert isinstance(services.store, RotationStore)
    assert isinstance(services.notifier, TopicNotifier)
    assert services.keys.resolve() == "from-secret"


async def test_when_riotClientOpened_then_sessionCarriesUserAgent():
    async with riot_client() as client:
        assert isinstance(client, RiotClient)
        assert client._session.headers["User-Agent"] == USER_AGENT


async def test_when_httpProxyGetsPost_then_405BeforeAnyLookup():
    services = Services(keys=KeyResolver(environ={}), store=FakeStore(), notifier=FakeNotifier())

    response = await run_http_proxy(services, "POST")

    assert response.status == 405


async def test_when_pollRunsWithoutKey_then_missingKeyOutcome():
    store = FakeStore()
    services = Services(keys=KeyResolver(environ={}), store=store, notifier=FakeNotifier())

    outcome = await run_poll(services)

    assert outcome is JobOutcome.MISSING_KEY
    assert store.writes == []
