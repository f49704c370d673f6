"""Events, listeners and queue doubles shared by the test suite."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from event_testkit import DomainEvent, EventListener, handles
from event_testkit.queue.jobs import deserialize_job
from event_testkit.queue.same_process import SameProcessQueue


class OrderPlaced(DomainEvent):
    order_id: str
    amount: int = 0


class OrderShipped(DomainEvent):
    order_id: str


class InvoiceSent(DomainEvent):
    invoice_id: str


class OrderProjector(EventListener):
    def __init__(self) -> None:
        self.placed: List[str] = []
        self.shipped: List[str] = []

    @handles(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        self.placed.append(event.order_id)

    @handles(OrderShipped)
    def on_order_shipped(self, event: OrderShipped) -> None:
        self.shipped.append(event.order_id)


class ShippingNotifier(EventListener):
    def __init__(self) -> None:
        self.notified: List[str] = []

    @handles(OrderShipped)
    def on_order_shipped(self, event: OrderShipped) -> None:
        self.notified.append(event.order_id)


class InvoiceMailer(EventListener):
    def __init__(self) -> None:
        self.sent: List[str] = []

    @handles(InvoiceSent)
    def on_invoice_sent(self, event: InvoiceSent) -> None:
        self.sent.append(event.invoice_id)


class NotAListener:
    def on_order_placed(self, event: OrderPlaced) -> None:
        pass


class RecordingQueue(SameProcessQueue):
    """Same-process queue that remembers what was submitted to it."""

    def __init__(self, name: str, options: Optional[Dict[str, Any]] = None, *, runtime: Any = None) -> None:
        super().__init__(name, options, runtime=runtime)
        self.submissions: List[Tuple[Any, Dict[str, Any]]] = []

    def submit(self, payload: str, options: Optional[Dict[str, Any]] = None) -> str:
        self.submissions.append((deserialize_job(payload), dict(options or {})))
        return super().submit(payload, options)

    @property
    def listeners(self) -> List[str]:
        return [job.listener for job, _ in self.submissions]
