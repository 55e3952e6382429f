"""支付结果通知处理"""

from loguru import logger

from wechat_app_pay.constants import FAIL, SUCCESS
from wechat_app_pay.exceptions import SignError
from wechat_app_pay.models import WeChatQueryResult
from wechat_app_pay.sign import verify_sign
from wechat_app_pay.transport import dict_to_xml, xml_to_dict


def parse_pay_notify(xml_data, key: str) -> WeChatQueryResult:
    """
    解析并验签微信支付结果通知

    通知可能重复发送，业务侧需自行判断订单是否已处理。
    """
    data = xml_to_dict(xml_data)
    logger.info(f"收到支付结果通知 - 商户订单号: {data.get('out_trade_no')}, "
                f"微信支付单号: {data.get('transaction_id')}")

    if not verify_sign(key, data):
        logger.error("支付结果通知验签失败")
        raise SignError("支付结果通知验签失败")

    logger.info("签名验证成功")
    return WeChatQueryResult.from_dict(data)


def notify_reply(ok=True, msg="OK") -> str:
    """生成回复微信支付通知的XML"""
    return dict_to_xml({
        "return_code": SUCCESS if ok else FAIL,
        "return_msg": msg,
    })
