"""Testes do NotificationRouter."""

from __future__ import annotations

import pytest

from api.normalizers.nylas.classifier import build_notification
from app.bootstrap.dependencies import CATEGORY_HANDLERS, create_notification_router
from app.coordinators.nylas.router import (
    DEFAULT_HANDLER,
    FULL_PAYLOAD_EVENT,
    UNROUTABLE_HANDLER,
    NotificationRouter,
)
from app.protocols.models import NotificationCategory
from tests.fakes.fake_notification_sink import RecordingSink


def _notification(raw_type: str | None, obj: object = None, notification_id: str = "n-1"):
    payload: dict[str, object] = {"id": notification_id, "data": {"object": obj}}
    if raw_type is not None:
        payload["type"] = raw_type
    return build_notification(payload)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def router(sink: RecordingSink) -> NotificationRouter:
    return create_notification_router(sink)


class TestHandledCategories:
    def test_default_table(self, router: NotificationRouter) -> None:
        assert router.handled_categories == frozenset(
            {
                NotificationCategory.MESSAGE_CREATED,
                NotificationCategory.MESSAGE_UPDATED,
                NotificationCategory.EVENT_CREATED,
            }
        )

    def test_unrecognized_cannot_have_handler(self, sink: RecordingSink) -> None:
        handlers = {NotificationCategory.UNRECOGNIZED: lambda obj: []}

        with pytest.raises(ValueError, match="UNRECOGNIZED"):
            NotificationRouter(handlers, sink)

    def test_table_is_copied(self, sink: RecordingSink) -> None:
        handlers = dict(CATEGORY_HANDLERS)
        router = NotificationRouter(handlers, sink)
        handlers.clear()

        assert NotificationCategory.MESSAGE_CREATED in router.handled_categories


class TestDispatch:
    def test_message_created_is_handled(self, router: NotificationRouter, sink: RecordingSink) -> None:
        obj = {"id": "msg-1", "subject": "Oi", "from": [{"email": "a@x.com", "name": "A"}]}

        outcome = router.dispatch(_notification("message.created", obj))

        assert outcome.handled is True
        assert outcome.category == "message.created"
        assert outcome.handler == "message.created"
        summary = sink.fields_of("message_created")
        assert summary["notification_id"] == "n-1"
        assert summary["subject"] == "Oi"
        assert sink.names()[-1] == FULL_PAYLOAD_EVENT
        assert sink.fields_of(FULL_PAYLOAD_EVENT)["object"] == obj

    def test_transformed_type_uses_same_handler(
        self, router: NotificationRouter, sink: RecordingSink
    ) -> None:
        outcome = router.dispatch(_notification("message.updated.transformed", {"unread": True}))

        assert outcome.handled is True
        assert outcome.category == "message.updated"
        assert sink.fields_of("message_updated")["unread_status"] == "Unread"

    def test_event_created_is_handled(self, router: NotificationRouter, sink: RecordingSink) -> None:
        outcome = router.dispatch(_notification("event.created", {"title": "Daily"}))

        assert outcome.handled is True
        assert sink.fields_of("event_created")["title"] == "Daily"

    @pytest.mark.parametrize("raw_type", ["event.updated", "contact.created", "contact.updated"])
    def test_known_category_without_handler_goes_default(
        self, router: NotificationRouter, sink: RecordingSink, raw_type: str
    ) -> None:
        outcome = router.dispatch(_notification(raw_type, {"id": "x"}))

        assert outcome.handled is False
        assert outcome.handler == DEFAULT_HANDLER
        assert outcome.category == raw_type
        unhandled = sink.fields_of("notification_unhandled")
        assert unhandled["category"] == raw_type
        assert unhandled["known_category"] is True
        assert unhandled["object"] == {"id": "x"}

    def test_unknown_category_goes_default(self, router: NotificationRouter, sink: RecordingSink) -> None:
        outcome = router.dispatch(_notification("folder.deleted", {"id": "f1"}))

        assert outcome.handled is False
        assert outcome.handler == DEFAULT_HANDLER
        assert outcome.category == "folder.deleted"
        unhandled = sink.fields_of("notification_unhandled")
        assert unhandled["known_category"] is False
        assert unhandled["object"] == {"id": "f1"}
        assert FULL_PAYLOAD_EVENT not in sink.names()

    def test_missing_type_is_unroutable(self, router: NotificationRouter, sink: RecordingSink) -> None:
        outcome = router.dispatch(_notification(None))

        assert outcome.handled is False
        assert outcome.category is None
        assert outcome.handler == UNROUTABLE_HANDLER
        assert sink.names() == ["notification_unroutable"]

    def test_handler_sees_only_object(self, sink: RecordingSink) -> None:
        received: list[object] = []

        def _handler(obj: object) -> list[tuple[str, dict]]:
            received.append(obj)
            return [("custom", {"ok": True})]

        router = NotificationRouter({NotificationCategory.CONTACT_CREATED: _handler}, sink)
        router.dispatch(_notification("contact.created", {"id": "c1"}))

        assert received == [{"id": "c1"}]
        assert sink.fields_of("custom") == {"notification_id": "n-1", "ok": True}
