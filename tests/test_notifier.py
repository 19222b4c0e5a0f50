import pytest

from rotation_watch.config import NOTIFICATION_BODY, NOTIFICATION_TITLE, ROTATION_TOPIC
from rotation_watch.notifier import TopicNotifier


@pytest.fixture
def send(mocker):
    return mocker.patch("rotation_watch.notifier.messaging.send", return_value="projects/p/messages/42")


def test_when_rotationChanged_then_oneTopicMessageSent(send):
    app = object()

    message_id = TopicNotifier(app=app).publish_rotation_changed()

    assert message_id == "projects/p/messages/42"
    send.assert_called_once()
    message = send.call_args.args[0]
    assert message.topic == ROTATION_TOPIC
    assert message.token is None
    assert message.notification.title == NOTIFICATION_TITLE
    assert message.notification.body == NOTIFICATION_BODY
    assert send.call_args.kwargs == {"app": app}


def test_when_sendFails_then_errorPropagatesToCaller(send):
    send.side_effect = RuntimeError("fcm unavailable")

    with pytest.raises(RuntimeError):
        TopicNotifier().publish("news", "title", "body")
