"""微信支付 APP 支付相关常量配置"""

# API配置
API_CONFIGS = {
    "unified_order": {
        # 接口请求地址
        "url": "https://api.mch.weixin.qq.com/pay/unifiedorder",
        # 是否需要双向证书
        "need_cert": False,
        # 接口描述
        "desc": "统一下单",
    },
    "order_query": {
        "url": "https://api.mch.weixin.qq.com/pay/orderquery",
        "need_cert": False,
        "desc": "查询订单",
    },
    "refund": {
        "url": "https://api.mch.weixin.qq.com/secapi/pay/refund",
        "need_cert": True,
        "desc": "申请退款",
    },
    "transfers": {
        "url": "https://api.mch.weixin.qq.com/mmpaymkttransfers/promotion/transfers",
        "need_cert": True,
        "desc": "企业付款到零钱",
    },
}

SUCCESS = "SUCCESS"
FAIL = "FAIL"

TRADE_TYPE_APP = "APP"

# APP调起支付时 package 字段固定值
APP_PACKAGE = "Sign=WXPay"

# 签名类型
SIGN_TYPE_MD5 = "MD5"
SIGN_TYPE_HMAC_SHA256 = "HMAC-SHA256"
SIGN_TYPES = {SIGN_TYPE_MD5, SIGN_TYPE_HMAC_SHA256}

# 商品描述最大长度
BODY_MAX_LENGTH = 32

# 企业付款校验用户姓名选项
CHECK_NAME_FORCE = "FORCE_CHECK"
CHECK_NAME_NONE = "NO_CHECK"

# 交易状态映射表
TRADE_STATE_MAP = {
    "SUCCESS": "支付成功",
    "REFUND": "转入退款",
    "NOTPAY": "未支付",
    "CLOSED": "已关闭",
    "REVOKED": "已撤销",
    "USERPAYING": "用户支付中",
    "PAYERROR": "支付失败",
}
