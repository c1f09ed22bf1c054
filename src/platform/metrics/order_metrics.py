from prometheus_client import Counter, Histogram


class OrderMetrics:
    """Order lifecycle metrics exposed on /metrics"""

    def __init__(self):
        self.orders_created = Counter(
            'orders_created_total',
            'Orders successfully created',
        )

        self.order_items_created = Counter(
            'order_items_created_total',
            'Order lines persisted with newly created orders',
        )

        self.order_creation_rejected = Counter(
            'order_creation_rejected_total',
            'Order creations rejected before commit',
            ['reason'],  # reason: error class name
        )

        self.order_status_transitions = Counter(
            'order_status_transitions_total',
            'Order status changes',
            ['from_status', 'to_status'],
        )

        self.orders_canceled = Counter(
            'orders_canceled_total',
            'Orders canceled with stock restored',
        )

        self.order_total_amount = Histogram(
            'order_total_amount',
            'Order totals at creation',
            buckets=[1, 5, 10, 25, 50, 100, 250, 500, 1000, 5000],
        )

    def record_order_created(self, *, item_count: int, total: float) -> None:
        self.orders_created.inc()
        self.order_items_created.inc(item_count)
        self.order_total_amount.observe(total)

    def record_creation_rejected(self, *, reason: str) -> None:
        self.order_creation_rejected.labels(reason=reason).inc()

    def record_status_transition(self, *, from_status: str, to_status: str) -> None:
        self.order_status_transitions.labels(from_status=from_status, to_status=to_status).inc()

    def record_order_canceled(self) -> None:
        self.orders_canceled.inc()
        self.record_status_transition(from_status='pending', to_status='canceled')


# Global metrics instance
metrics = OrderMetrics()
