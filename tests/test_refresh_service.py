# tests/test_refresh_service.py
from booking_portal.services.refresh_service import RefreshCoordinator


def test_publish_reaches_every_subscriber_until_unsubscribed():
    coordinator = RefreshCoordinator()
    calls = []

    unsubscribe_a = coordinator.subscribe(lambda: calls.append("a"))
    coordinator.subscribe(lambda: calls.append("b"))

    coordinator.publish()
    assert calls == ["a", "b"]

    unsubscribe_a()
    unsubscribe_a()  # second call is a no-op
    coordinator.publish()
    assert calls == ["a", "b", "b"]
    assert coordinator.subscriber_count == 1


def test_failing_subscriber_does_not_stop_the_others():
    coordinator = RefreshCoordinator()
    calls = []

    def broken():
        raise RuntimeError("boom")

    coordinator.subscribe(broken)
    coordinator.subscribe(lambda: calls.append("ok"))

    coordinator.publish()
    assert calls == ["ok"]


def test_subscriber_may_unsubscribe_while_being_notified():
    coordinator = RefreshCoordinator()
    calls = []
    holder = {}

    def once():
        calls.append("once")
        holder["unsubscribe"]()

    holder["unsubscribe"] = coordinator.subscribe(once)
    coordinator.publish()
    coordinator.publish()
    assert calls == ["once"]
