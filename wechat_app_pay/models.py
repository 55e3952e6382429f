"""支付请求与返回结果的数据结构"""

from dataclasses import dataclass, field, fields

from .constants import TRADE_STATE_MAP
from .utils import wechat_money_fee_to_string


@dataclass(frozen=True)
class Charge:
    """
    支付/企业付款订单

    Args:
        trade_num (str): 商户订单号
        money_fee (int): 金额，单位为分
        describe (str): 商品描述 / 付款备注
        callback_url (str): 支付结果回调地址
        openid (str): 企业付款收款用户 openid
        check_name (bool): 企业付款是否校验收款用户真实姓名
        re_user_name (str): 收款用户真实姓名，check_name 为 True 时必填
    """
    trade_num: str
    money_fee: int
    describe: str = ""
    callback_url: str = ""
    openid: str = ""
    check_name: bool = False
    re_user_name: str = ""

    def __post_init__(self):
        wechat_money_fee_to_string(self.money_fee)


@dataclass(frozen=True)
class Refund:
    """退款申请，金额单位为分"""
    trade_num: str
    refund_num: str
    total_fee: int
    refund_fee: int
    describe: str = ""
    callback_url: str = ""

    def __post_init__(self):
        wechat_money_fee_to_string(self.total_fee)
        wechat_money_fee_to_string(self.refund_fee)
        if self.refund_fee > self.total_fee:
            raise ValueError(f"退款金额不能大于订单金额: {self.refund_fee} > {self.total_fee}")


@dataclass
class WeChatQueryResult:
    """微信支付XML返回结果，未出现的字段为空字符串，完整内容保存在 raw 中"""
    return_code: str = ""
    return_msg: str = ""
    result_code: str = ""
    err_code: str = ""
    err_code_des: str = ""
    appid: str = ""
    mch_id: str = ""
    mch_appid: str = ""
    mchid: str = ""
    device_info: str = ""
    nonce_str: str = ""
    sign: str = ""
    sign_type: str = ""
    openid: str = ""
    is_subscribe: str = ""
    trade_type: str = ""
    trade_state: str = ""
    trade_state_desc: str = ""
    bank_type: str = ""
    total_fee: str = ""
    settlement_total_fee: str = ""
    fee_type: str = ""
    cash_fee: str = ""
    cash_fee_type: str = ""
    coupon_fee: str = ""
    coupon_count: str = ""
    transaction_id: str = ""
    out_trade_no: str = ""
    attach: str = ""
    time_end: str = ""
    prepay_id: str = ""
    code_url: str = ""
    partner_trade_no: str = ""
    payment_no: str = ""
    payment_time: str = ""
    out_refund_no: str = ""
    refund_id: str = ""
    refund_fee: str = ""
    settlement_refund_fee: str = ""
    refund_channel: str = ""
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> "WeChatQueryResult":
        known = {f.name for f in fields(cls)} - {"raw"}
        values = {k: v or "" for k, v in data.items() if k in known}
        return cls(**values, raw=dict(data))

    def to_dict(self) -> dict:
        return dict(self.raw)

    @property
    def is_success(self) -> bool:
        return self.return_code == "SUCCESS" and self.result_code == "SUCCESS"

    @property
    def trade_state_msg(self) -> str:
        return TRADE_STATE_MAP.get(self.trade_state, "未知状态")
