from .order_refund import refund_order

__all__ = ["refund_order"]
