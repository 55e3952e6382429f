"""申请退款"""

from loguru import logger

from wechat_app_pay.constants import API_CONFIGS, SIGN_TYPE_MD5
from wechat_app_pay.exceptions import ConfigError, SignError
from wechat_app_pay.models import Refund, WeChatQueryResult
from wechat_app_pay.sign import wechat_gen_sign
from wechat_app_pay.transport import HTTPSClient, post_wechat
from wechat_app_pay.utils import random_str, wechat_money_fee_to_string


def refund_order(
    app_id: str,
    mch_id: str,
    key: str,
    conn: HTTPSClient,
    refund: Refund,
    sign_type: str = SIGN_TYPE_MD5,
) -> WeChatQueryResult:
    """
    订单退款申请

    接口返回成功仅表示退款申请已受理，退款结果以退款查询或退款通知为准。
    同一退款单号 out_refund_no 多次请求只退一笔。
    """
    api_config = API_CONFIGS["refund"]
    if conn is None:
        error_msg = f"{api_config['desc']}需要配置商户API证书"
        logger.error(error_msg)
        raise ConfigError(error_msg)

    logger.info(f"开始处理退款请求 - 商户订单号: {refund.trade_num}, "
                f"退款单号: {refund.refund_num}, 金额: {refund.refund_fee}分")

    m = {
        "appid": app_id,
        "mch_id": mch_id,
        "nonce_str": random_str(),
        "sign_type": sign_type,
        "out_trade_no": refund.trade_num,
        "out_refund_no": refund.refund_num,
        "total_fee": wechat_money_fee_to_string(refund.total_fee),
        "refund_fee": wechat_money_fee_to_string(refund.refund_fee),
    }
    if refund.describe:
        m["refund_desc"] = refund.describe
    if refund.callback_url:
        m["notify_url"] = refund.callback_url

    try:
        m["sign"] = wechat_gen_sign(key, m, sign_type)
    except SignError as e:
        raise SignError(f"退款签名失败: {str(e)}") from e

    result = post_wechat(api_config["url"], m, conn)
    logger.info(f"退款申请已受理 - 商户退款单号: {result.out_refund_no}, 微信退款单号: {result.refund_id}")
    return result
