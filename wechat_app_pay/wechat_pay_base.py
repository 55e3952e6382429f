import os

from dotenv import load_dotenv
from loguru import logger

from .constants import SIGN_TYPE_MD5, SIGN_TYPES
from .exceptions import ConfigError
from .sign import wechat_gen_sign
from .transport import HTTPSClient
from .utils import local_ip

# 加载环境变量
load_dotenv()


class WeChatPayBase:
    """微信支付基础类，处理配置、证书和签名等公共功能"""

    def __init__(
        self,
        app_id: str,
        mch_id: str,
        key: str,
        private_key=None,
        public_key=None,
        sign_type: str = SIGN_TYPE_MD5,
        spbill_create_ip: str = None,
        timeout: float = None,
    ):
        """
        Args:
            app_id (str): 开放平台审核通过的应用APPID
            mch_id (str): 商户号
            key (str): 商户API密钥
            private_key (bytes, optional): 商户API证书私钥内容，退款和企业付款需要
            public_key (bytes, optional): 商户API证书内容，退款和企业付款需要
            sign_type (str): 签名类型，MD5 或 HMAC-SHA256
            spbill_create_ip (str, optional): 终端IP，默认取本机IP
            timeout (float, optional): 请求超时时间(秒)
        """
        self.app_id = app_id
        self.mch_id = mch_id
        self.key = key
        self.sign_type = sign_type
        self.spbill_create_ip = spbill_create_ip
        self.timeout = timeout
        self.https_client = None
        logger.info("初始化微信支付配置")
        # 验证必要的配置是否存在
        self._validate_config()

        # 加载双向证书
        self._load_https_client(private_key, public_key)

    @classmethod
    def from_env(cls):
        """从环境变量(.env)读取配置"""
        private_key = cls._read_env_file("WECHAT_PRIVATE_KEY_PATH")
        public_key = cls._read_env_file("WECHAT_CERT_PATH")
        timeout = os.getenv("WECHAT_HTTP_TIMEOUT")
        try:
            timeout = float(timeout) if timeout else None
        except ValueError as e:
            raise ConfigError(f"WECHAT_HTTP_TIMEOUT 配置错误: {timeout}") from e

        return cls(
            app_id=os.getenv("WECHAT_APP_ID"),
            mch_id=os.getenv("WECHAT_MCH_ID"),
            key=os.getenv("WECHAT_API_KEY"),
            private_key=private_key,
            public_key=public_key,
            sign_type=os.getenv("WECHAT_SIGN_TYPE") or SIGN_TYPE_MD5,
            spbill_create_ip=os.getenv("WECHAT_SPBILL_CREATE_IP"),
            timeout=timeout,
        )

    @staticmethod
    def _read_env_file(env_name):
        path = os.getenv(env_name)
        if not path:
            return None
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            error_msg = f"读取 {env_name} 指定的文件失败: {str(e)}"
            logger.error(error_msg)
            raise ConfigError(error_msg) from e

    def _validate_config(self):
        """验证配置是否完整"""
        required_configs = [
            ("app_id", self.app_id),
            ("mch_id", self.mch_id),
            ("key", self.key),
        ]

        missing_configs = [name for name, value in required_configs if not value]

        if missing_configs:
            error_msg = f"缺少必要的配置项: {', '.join(missing_configs)}"
            logger.error(error_msg)
            raise ConfigError(error_msg)

        if self.sign_type not in SIGN_TYPES:
            error_msg = f"不支持的签名类型: {self.sign_type}"
            logger.error(error_msg)
            raise ConfigError(error_msg)

    def _load_https_client(self, private_key, public_key):
        """加载商户API证书，私钥和证书需同时提供"""
        if private_key and public_key:
            self.https_client = HTTPSClient(private_key, public_key, timeout=self.timeout)
            logger.info("成功加载商户API证书，已启用双向证书链接")
        elif private_key or public_key:
            logger.warning("商户API证书私钥和证书需同时配置，退款和企业付款接口不可用")

    def get_client_ip(self):
        return self.spbill_create_ip or local_ip()

    def sign(self, params: dict) -> str:
        """使用当前商户密钥生成签名"""
        return wechat_gen_sign(self.key, params, self.sign_type)
