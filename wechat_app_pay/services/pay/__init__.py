from .notify import notify_reply, parse_pay_notify

__all__ = ["notify_reply", "parse_pay_notify"]
