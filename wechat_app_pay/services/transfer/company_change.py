"""企业付款到零钱"""

from loguru import logger

from wechat_app_pay.constants import (
    API_CONFIGS,
    BODY_MAX_LENGTH,
    CHECK_NAME_FORCE,
    CHECK_NAME_NONE,
    SIGN_TYPE_MD5,
)
from wechat_app_pay.exceptions import ConfigError, SignError
from wechat_app_pay.models import Charge, WeChatQueryResult
from wechat_app_pay.sign import wechat_gen_sign
from wechat_app_pay.transport import HTTPSClient, post_wechat
from wechat_app_pay.utils import local_ip, random_str, truncated_text, wechat_money_fee_to_string


def wechat_company_change(
    mch_appid: str,
    mchid: str,
    key: str,
    conn: HTTPSClient,
    charge: Charge,
    spbill_create_ip: str = None,
) -> WeChatQueryResult:
    """
    企业付款到用户微信零钱

    重要说明：
        1. 接口需要双向证书
        2. 接口只支持 MD5 签名
        3. 同一笔付款重入时 partner_trade_no 必须保持不变

    Args:
        mch_appid (str): 商户账号appid
        mchid (str): 商户号
        key (str): 商户API密钥
        conn (HTTPSClient): 双向证书链接
        charge (Charge): 付款信息，需提供 trade_num、money_fee、openid、describe
        spbill_create_ip (str, optional): 发起付款的机器IP，默认取本机IP

    Returns:
        WeChatQueryResult: 付款结果，包含 partner_trade_no、payment_no、payment_time
    """
    api_config = API_CONFIGS["transfers"]
    if conn is None:
        error_msg = f"{api_config['desc']}需要配置商户API证书"
        logger.error(error_msg)
        raise ConfigError(error_msg)
    if not charge.openid:
        raise ValueError("企业付款缺少收款用户openid")

    logger.info(f"开始企业付款 - 商户单号: {charge.trade_num}, 金额: {charge.money_fee}分")

    m = {
        "mch_appid": mch_appid,
        "mchid": mchid,
        "nonce_str": random_str(),
        "partner_trade_no": charge.trade_num,
        "openid": charge.openid,
        "amount": wechat_money_fee_to_string(charge.money_fee),
        "spbill_create_ip": spbill_create_ip or local_ip(),
        "desc": truncated_text(charge.describe, BODY_MAX_LENGTH),
    }

    # 是否校验收款用户姓名
    if charge.check_name:
        if not charge.re_user_name:
            raise ValueError("校验用户姓名时必须提供收款用户真实姓名")
        m["check_name"] = CHECK_NAME_FORCE
        m["re_user_name"] = charge.re_user_name
    else:
        m["check_name"] = CHECK_NAME_NONE

    try:
        m["sign"] = wechat_gen_sign(key, m, SIGN_TYPE_MD5)
    except SignError as e:
        raise SignError(f"企业付款签名失败: {str(e)}") from e

    result = post_wechat(api_config["url"], m, conn)
    logger.info(f"企业付款成功 - 商户单号: {result.partner_trade_no}, 微信付款单号: {result.payment_no}")
    return result
