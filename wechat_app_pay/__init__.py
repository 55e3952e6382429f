"""微信支付 APP 支付 SDK"""

from .client import WeChatAppClient, default_wechat_app_client, init_wx_app_client
from .exceptions import (
    ConfigError,
    NetworkError,
    ResponseParseError,
    SignError,
    VendorError,
    WeChatPayError,
)
from .log import setup_logger
from .models import Charge, Refund, WeChatQueryResult
from .services.pay import notify_reply, parse_pay_notify
from .sign import verify_sign, wechat_gen_sign
from .transport import HTTPSClient, post_wechat

__version__ = "0.1.0"

__all__ = [
    "Charge",
    "ConfigError",
    "HTTPSClient",
    "NetworkError",
    "Refund",
    "ResponseParseError",
    "SignError",
    "VendorError",
    "WeChatAppClient",
    "WeChatPayError",
    "WeChatQueryResult",
    "default_wechat_app_client",
    "init_wx_app_client",
    "notify_reply",
    "parse_pay_notify",
    "post_wechat",
    "setup_logger",
    "verify_sign",
    "wechat_gen_sign",
]
