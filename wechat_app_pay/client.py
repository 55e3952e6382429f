"""微信 APP 支付客户端"""

import threading
import time

from loguru import logger

from .constants import API_CONFIGS, APP_PACKAGE, BODY_MAX_LENGTH, TRADE_TYPE_APP
from .exceptions import ConfigError, SignError, VendorError
from .models import Charge, Refund, WeChatQueryResult
from .services.refund import refund_order
from .services.transfer import wechat_company_change
from .transport import post_wechat
from .utils import random_str, truncated_text, wechat_money_fee_to_string
from .wechat_pay_base import WeChatPayBase

_default_wechat_app_client = None
_init_lock = threading.Lock()


def init_wx_app_client(client: "WeChatAppClient") -> "WeChatAppClient":
    """注册进程内默认客户端，只有第一次调用生效"""
    global _default_wechat_app_client
    if client is None:
        raise ConfigError("默认客户端不能为空")
    with _init_lock:
        if _default_wechat_app_client is None:
            _default_wechat_app_client = client
            logger.info(f"默认微信APP支付客户端初始化完成, 商户号: {client.mch_id}")
        elif client is not _default_wechat_app_client:
            logger.warning("默认微信APP支付客户端已初始化，忽略本次初始化")
        return _default_wechat_app_client


def default_wechat_app_client() -> "WeChatAppClient":
    """默认微信APP支付客户端，未初始化时返回 None"""
    return _default_wechat_app_client


class WeChatAppClient(WeChatPayBase):
    """微信APP支付"""

    def pay(self, charge: Charge) -> dict:
        """
        统一下单并生成APP调起支付所需的参数

        Args:
            charge (Charge): 订单信息

        Returns:
            dict: APP端调起支付的参数 appid、partnerid、prepayid、package、noncestr、timestamp、paySign
        """
        logger.info(f"开始创建APP支付订单 - 商户订单号: {charge.trade_num}, 金额: {charge.money_fee}分")
        api_config = API_CONFIGS["unified_order"]

        m = {
            "appid": self.app_id,
            "mch_id": self.mch_id,
            "nonce_str": random_str(),
            "body": truncated_text(charge.describe, BODY_MAX_LENGTH),
            "out_trade_no": charge.trade_num,
            "total_fee": wechat_money_fee_to_string(charge.money_fee),
            "spbill_create_ip": self.get_client_ip(),
            "notify_url": charge.callback_url,
            "trade_type": TRADE_TYPE_APP,
            "sign_type": self.sign_type,
        }

        try:
            m["sign"] = self.sign(m)
        except SignError as e:
            raise SignError(f"统一下单签名失败: {str(e)}") from e

        result = post_wechat(api_config["url"], m, timeout=self.timeout)
        if not result.prepay_id:
            raise VendorError("统一下单未返回 prepay_id", result=result)
        logger.info(f"统一下单成功 - 商户订单号: {charge.trade_num}, prepay_id: {result.prepay_id}")

        c = {
            "appid": self.app_id,
            "partnerid": self.mch_id,
            "prepayid": result.prepay_id,
            "package": APP_PACKAGE,
            "noncestr": random_str(),
            "timestamp": str(int(time.time())),
        }

        try:
            pay_sign = self.sign(c)
        except SignError as e:
            raise SignError(f"APP调起支付签名失败: {str(e)}") from e
        c["paySign"] = pay_sign.upper()

        return c

    def query_order(self, trade_num: str) -> WeChatQueryResult:
        """查询订单"""
        logger.info(f"开始查询订单状态 - 商户订单号: {trade_num}")

        m = {
            "appid": self.app_id,
            "mch_id": self.mch_id,
            "out_trade_no": trade_num,
            "nonce_str": random_str(),
            "sign_type": self.sign_type,
        }

        try:
            m["sign"] = self.sign(m)
        except SignError as e:
            raise SignError(f"查询订单签名失败: {str(e)}") from e

        result = post_wechat(API_CONFIGS["order_query"]["url"], m, timeout=self.timeout)
        logger.info(f"订单查询结果 - 商户订单号: {trade_num}, 交易状态: {result.trade_state}({result.trade_state_msg})")
        return result

    def pay_to_client(self, charge: Charge) -> WeChatQueryResult:
        """支付到用户的微信零钱"""
        return wechat_company_change(
            self.app_id, self.mch_id, self.key, self.https_client, charge,
            spbill_create_ip=self.spbill_create_ip,
        )

    def refund_apple_order(self, refund: Refund) -> WeChatQueryResult:
        """订单退款申请"""
        return refund_order(self.app_id, self.mch_id, self.key, self.https_client, refund, self.sign_type)

    refund_order = refund_apple_order
