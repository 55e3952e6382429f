"""微信支付 SDK 异常定义"""


class WeChatPayError(Exception):
    """微信支付 SDK 异常基类"""


class ConfigError(WeChatPayError, ValueError):
    """配置缺失或证书/密钥内容无效"""


class SignError(WeChatPayError):
    """签名生成或验签失败"""


class NetworkError(WeChatPayError):
    """请求微信支付接口时网络异常"""


class ResponseParseError(WeChatPayError):
    """微信支付返回的XML无法解析"""

    def __init__(self, msg, content=None):
        super().__init__(msg)
        self.content = content


class VendorError(WeChatPayError):
    """微信支付返回了失败的 return_code / result_code"""

    def __init__(self, msg, result=None):
        super().__init__(msg)
        self.result = result

    @property
    def code(self):
        if self.result is None:
            return ""
        return self.result.err_code or self.result.return_code
