"""微信支付 V2 接口签名

签名规则参考: https://pay.weixin.qq.com/wiki/doc/api/app/app.php?chapter=4_3
"""

import hashlib
import hmac

from loguru import logger

from .constants import SIGN_TYPE_HMAC_SHA256, SIGN_TYPE_MD5
from .exceptions import SignError


def build_sign_string(key: str, params: dict) -> str:
    """构造待签名字符串: 过滤 sign/key 字段和空值, 按键排序拼接, 末尾追加 key"""
    filtered = {
        k: v for k, v in params.items()
        if k not in ("sign", "key") and v not in (None, "")
    }
    if not filtered:
        raise SignError("待签名参数为空")

    params_str = "&".join(f"{k}={v}" for k, v in sorted(filtered.items()))
    return f"{params_str}&key={key}"


def wechat_gen_sign(key: str, params: dict, sign_type: str = SIGN_TYPE_MD5) -> str:
    """
    生成签名

    Args:
        key (str): 商户API密钥
        params (dict): 请求参数
        sign_type (str): 签名类型, MD5 或 HMAC-SHA256

    Returns:
        str: 大写的十六进制签名
    """
    if not key:
        raise SignError("商户API密钥为空")

    sign_str = build_sign_string(key, params)

    try:
        match sign_type:
            case "MD5":
                digest = hashlib.md5(sign_str.encode("utf-8")).hexdigest()
            case "HMAC-SHA256":
                digest = hmac.new(key.encode("utf-8"), sign_str.encode("utf-8"), hashlib.sha256).hexdigest()
            case _:
                raise SignError(f"不支持的签名类型: {sign_type}")
    except (TypeError, ValueError) as e:
        raise SignError(f"计算签名失败: {str(e)}") from e

    return digest.upper()


def verify_sign(key: str, params: dict, sign_type: str = None) -> bool:
    """验证参数中的 sign 字段是否正确"""
    sign = params.get("sign")
    if not sign:
        logger.warning("待验签参数缺少 sign 字段")
        return False

    sign_type = sign_type or params.get("sign_type") or SIGN_TYPE_MD5
    if sign_type not in (SIGN_TYPE_MD5, SIGN_TYPE_HMAC_SHA256):
        logger.warning(f"不支持的签名类型: {sign_type}")
        return False

    expected = wechat_gen_sign(key, params, sign_type)
    return hmac.compare_digest(expected.encode("utf-8"), str(sign).upper().encode("utf-8"))
