from __future__ import annotations

import pytest

from event_testkit.core.errors import InvalidListener
from event_testkit.events.domain import DecoratedEvent
from event_testkit.listeners.identity import is_event_listener, listener_identity
from event_testkit.listeners.invoker import AppliedEventsLog, ListenerInvoker
from event_testkit.listeners.provider import ListenerMappingProvider
from event_testkit.listeners.registry import ListenerRegistry
from tests.support import (
    InvoiceMailer,
    InvoiceSent,
    NotAListener,
    OrderPlaced,
    OrderProjector,
    OrderShipped,
    ShippingNotifier,
)

STORE = "Acme.Orders:Store"


def test_handles_collects_handlers_per_class() -> None:
    assert set(OrderProjector.handled_event_types()) == {OrderPlaced, OrderShipped}
    assert ShippingNotifier.handled_event_types() == (OrderShipped,)


def test_apply_unwraps_decoration_and_ignores_unhandled_types() -> None:
    projector = OrderProjector()

    assert projector.apply(DecoratedEvent.add_metadata(OrderPlaced(order_id="1"), {"x": 1}))
    assert not projector.apply(InvoiceSent(invoice_id="inv"))
    assert projector.placed == ["1"]


def test_identity_accepts_classes_and_dotted_paths() -> None:
    assert listener_identity(OrderProjector) == "tests.support:OrderProjector"
    assert listener_identity("tests.support.OrderProjector") == "tests.support:OrderProjector"
    assert listener_identity("no.such:Listener") == "no.such:Listener"


def test_capability_check() -> None:
    assert is_event_listener(OrderProjector)
    assert is_event_listener("tests.support:ShippingNotifier")
    assert not is_event_listener(NotAListener)
    assert not is_event_listener("tests.support:OrderPlaced")
    assert not is_event_listener("no.such:Listener")


def test_provider_builds_one_mapping_per_handled_event_type() -> None:
    provider = ListenerMappingProvider({STORE: {"tests.support:ShippingNotifier": {"queueName": "shipping"}}})
    provider.register(STORE, OrderProjector)
    provider.register("Acme.Billing:Store", InvoiceMailer)

    mappings = provider.get_mappings_for_event_store(STORE)

    assert sorted((mapping.event_type, mapping.listener) for mapping in mappings) == [
        ("tests.support:OrderPlaced", "tests.support:OrderProjector"),
        ("tests.support:OrderShipped", "tests.support:OrderProjector"),
        ("tests.support:OrderShipped", "tests.support:ShippingNotifier"),
    ]
    shipping = [mapping for mapping in mappings if mapping.listener.endswith("ShippingNotifier")][0]
    assert shipping.get_option("queueName") == "shipping"
    assert shipping.get_option("queueOptions", {}) == {}
    assert provider.get_mappings_for_event_store("Unknown:Store") == ()


def test_provider_rejects_non_listeners() -> None:
    with pytest.raises(InvalidListener):
        ListenerMappingProvider().register(STORE, NotAListener)


def test_registry_reuses_instances_and_prefers_registered_ones() -> None:
    registry = ListenerRegistry()
    mailer = InvoiceMailer()
    registry.register(mailer)

    assert registry.get(InvoiceMailer) is mailer
    assert registry.get("tests.support:OrderProjector") is registry.get(OrderProjector)
    with pytest.raises(InvalidListener):
        registry.get(NotAListener)


def test_invoker_applies_only_unseen_handled_events(testkit_runtime) -> None:
    store = testkit_runtime.event_store_factory.create(STORE)
    store.setup()
    store.commit("order-1", [OrderPlaced(order_id="1"), InvoiceSent(invoice_id="inv")])
    invoker = ListenerInvoker(testkit_runtime.listener_registry)

    assert invoker.catch_up(OrderProjector, store) == 1

    store.commit("order-1", [OrderShipped(order_id="1")])
    assert invoker.catch_up(OrderProjector, store) == 1
    assert invoker.catch_up(OrderProjector, store) == 0

    projector = testkit_runtime.listener_registry.get(OrderProjector)
    assert projector.placed == ["1"]
    assert projector.shipped == ["1"]
    assert AppliedEventsLog(store.engine).highest_applied_sequence_number("tests.support:OrderProjector") == 3
    assert AppliedEventsLog(store.engine).highest_applied_sequence_number("tests.support:ShippingNotifier") == -1
