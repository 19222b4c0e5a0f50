import pytest

from fakes import TEST_KEY, FakeNotifier, FakeStore
from rotation_watch.keys import KeyResolver


@pytest.fixture
def keys():
    return KeyResolver(environ={"RIOT_API_KEY": TEST_KEY})


@pytest.fixture
def no_keys():
    return KeyResolver(environ={})


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def notifier():
    return FakeNotifier()
