from enum import StrEnum


class OrderStatus(StrEnum):
    PENDING = 'pending'
    ACCEPTED = 'accepted'
    DELIVERED = 'delivered'
    CANCELED = 'canceled'
