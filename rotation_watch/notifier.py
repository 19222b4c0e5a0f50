# Notification dispatcher: the output layer of the scheduled job.

# One broadcast per detected change, addressed to an FCM topic. Fan-out to
# devices, retries and delivery receipts belong to Firebase Cloud Messaging;
# from here a publish is fire-and-forget and returns FCM's message id.

import logging
from typing import Any

from firebase_admin import messaging

from rotation_watch.config import NOTIFICATION_BODY, NOTIFICATION_TITLE, ROTATION_TOPIC

log = logging.getLogger(__name__)


class TopicNotifier:

    def __init__(self, app: Any = None) -> None:
        self._app = app

    def publish(self, topic: str, title: str, body: str) -> str:
        message = messaging.Message(
            notification=messaging.Notification(title=title, body=body),
            topic=topic,
        )
        message_id = messaging.send(message, app=self._app)
        log.info("Published to topic %r: %s", topic, message_id)
        return message_id

    def publish_rotation_changed(self) -> str:
        return self.publish(ROTATION_TOPIC, NOTIFICATION_TITLE, NOTIFICATION_BODY)
