import pytest

from parley.domain.events import EnhancerDismissed, EventBus, MessageSent, ValueCommitted


def test_publish_reaches_subscribers_of_that_type_only() -> None:
    bus = EventBus()
    committed: list[ValueCommitted] = []
    sent: list[MessageSent] = []
    bus.subscribe(ValueCommitted, committed.append)
    bus.subscribe(MessageSent, sent.append)

    bus.publish(ValueCommitted(value="/mod ", cursor_pos=5, enhancer_id="slash-commands"))

    assert len(committed) == 1
    assert committed[0].source == "selection"
    assert sent == []


def test_async_handlers_are_rejected() -> None:
    bus = EventBus()

    async def handler(event: MessageSent) -> None:
        return None

    with pytest.raises(TypeError):
        bus.subscribe(MessageSent, handler)


def test_duplicate_subscription_is_ignored() -> None:
    bus = EventBus()
    received: list[MessageSent] = []
    bus.subscribe(MessageSent, received.append)
    bus.subscribe(MessageSent, received.append)

    bus.publish(MessageSent(text="hi"))

    assert len(received) == 1


def test_failing_handler_does_not_stop_others() -> None:
    bus = EventBus()
    received: list[EnhancerDismissed] = []

    def broken(event: EnhancerDismissed) -> None:
        raise RuntimeError("boom")

    bus.subscribe(EnhancerDismissed, broken)
    bus.subscribe(EnhancerDismissed, received.append)

    bus.publish(EnhancerDismissed(enhancer_id="mentions", reason="escape"))

    assert [event.reason for event in received] == ["escape"]


def test_unsubscribe_and_clear() -> None:
    bus = EventBus()
    received: list[MessageSent] = []
    bus.subscribe(MessageSent, received.append)
    assert bus.has_subscribers(MessageSent)

    bus.unsubscribe(MessageSent, received.append)
    bus.unsubscribe(MessageSent, received.append)
    bus.publish(MessageSent(text="hi"))
    assert received == []

    bus.subscribe(MessageSent, received.append)
    bus.clear()
    assert not bus.has_subscribers(MessageSent)


def test_events_are_timestamped() -> None:
    event = MessageSent(text="hi")

    assert event.timestamp > 0
