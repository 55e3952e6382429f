"""微信支付 XML 接口请求"""

import os
import shutil
import tempfile
import weakref
import xml.etree.ElementTree as ET

import requests
from Crypto.PublicKey import RSA
from cryptography import x509
from loguru import logger

from .constants import FAIL, SUCCESS
from .exceptions import ConfigError, NetworkError, ResponseParseError, VendorError
from .models import WeChatQueryResult

XML_HEADERS = {
    'Content-Type': 'application/xml; charset=utf-8',
    'Accept': 'application/xml',
}


def dict_to_xml(data_dict: dict) -> str:
    """
    字典转XML
    :param data_dict:
    :return:
    """
    data_xml = []
    for k in sorted(data_dict.keys()):
        v = data_dict.get(k)
        v = "" if v is None else str(v)
        # CDATA 段内不能出现 ]]>，拆成两段
        v = v.replace(']]>', ']]]]><![CDATA[>')
        data_xml.append(f'<{k}><![CDATA[{v}]]></{k}>')
    return '<xml>{}</xml>'.format(''.join(data_xml))


def xml_to_dict(data_xml) -> dict:
    """
    XML转字典
    :param data_xml:
    :return:
    """
    try:
        root = ET.fromstring(data_xml)
    except ET.ParseError as e:
        raise ResponseParseError(f"解析XML失败: {str(e)}", content=data_xml) from e
    return {child.tag: child.text or "" for child in root}


def _to_bytes(content) -> bytes:
    if isinstance(content, str):
        return content.encode('utf-8')
    return bytes(content)


class HTTPSClient:
    """双向证书链接

    微信退款、企业付款接口需要携带商户API证书。requests 只接受证书文件路径，
    因此证书内容会写入私有临时目录，客户端被回收时删除。
    """

    def __init__(self, private_key, public_key, timeout=None):
        """
        Args:
            private_key (bytes | str): 商户API证书私钥内容 (apiclient_key.pem)
            public_key (bytes | str): 商户API证书内容 (apiclient_cert.pem)
            timeout (float, optional): 请求超时时间(秒)，默认不设置
        """
        self.timeout = timeout
        key_bytes = _to_bytes(private_key)
        cert_bytes = _to_bytes(public_key)

        self._load_private_key(key_bytes)
        self._load_certificate(cert_bytes)

        self._cert_dir = tempfile.mkdtemp(prefix='wechat_app_pay_')
        self._finalizer = weakref.finalize(self, shutil.rmtree, self._cert_dir, True)
        self.key_path = self._write_file('apiclient_key.pem', key_bytes)
        self.cert_path = self._write_file('apiclient_cert.pem', cert_bytes)

    @classmethod
    def from_files(cls, key_path, cert_path, timeout=None):
        """从证书文件加载"""
        try:
            with open(key_path, 'rb') as f:
                private_key = f.read()
            with open(cert_path, 'rb') as f:
                public_key = f.read()
        except OSError as e:
            error_msg = f"读取商户API证书失败: {str(e)}"
            logger.error(error_msg)
            raise ConfigError(error_msg) from e
        return cls(private_key, public_key, timeout=timeout)

    def _load_private_key(self, key_bytes):
        """加载商户私钥"""
        try:
            self.private_key = RSA.import_key(key_bytes)
        except (ValueError, IndexError, TypeError) as e:
            error_msg = f"加载商户私钥失败: {str(e)}"
            logger.error(error_msg)
            raise ConfigError(error_msg) from e

    def _load_certificate(self, cert_bytes):
        """加载商户API证书"""
        try:
            self.certificate = x509.load_pem_x509_certificate(cert_bytes)
        except ValueError as e:
            error_msg = f"加载商户API证书失败: {str(e)}"
            logger.error(error_msg)
            raise ConfigError(error_msg) from e
        self.serial_no = format(self.certificate.serial_number, 'X')
        logger.info(f"成功加载商户API证书, 序列号: {self.serial_no}, "
                    f"有效期至: {self.certificate.not_valid_after_utc:%Y-%m-%d}")

    def _write_file(self, name, content):
        path = os.path.join(self._cert_dir, name)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'wb') as f:
            f.write(content)
        return path

    def post(self, url, data) -> requests.Response:
        """携带商户证书发送 POST 请求"""
        if not self._finalizer.alive:
            raise ConfigError("双向证书链接已关闭")
        missing = [p for p in (self.cert_path, self.key_path) if not os.path.exists(p)]
        if missing:
            error_msg = f"商户API证书临时文件不存在: {', '.join(missing)}"
            logger.error(error_msg)
            raise ConfigError(error_msg)
        return requests.post(
            url,
            data=data,
            headers=XML_HEADERS,
            cert=(self.cert_path, self.key_path),
            timeout=self.timeout,
        )

    def close(self):
        """删除临时证书文件"""
        self._finalizer()


def post_wechat(url, params: dict, conn: HTTPSClient = None, timeout=None) -> WeChatQueryResult:
    """
    向微信支付接口发送XML请求并解析返回结果

    Args:
        url (str): 接口地址
        params (dict): 已签名的请求参数
        conn (HTTPSClient, optional): 双向证书链接，为空时使用普通HTTPS请求
        timeout (float, optional): 普通HTTPS请求的超时时间

    Returns:
        WeChatQueryResult: 解析后的返回结果
    """
    body = dict_to_xml(params).encode('utf-8')
    logger.debug(f"发送微信支付请求 - URL: {url}")
    logger.debug(f"请求参数: {body.decode('utf-8')}")

    try:
        if conn is None:
            response = requests.post(url, data=body, headers=XML_HEADERS, timeout=timeout)
        else:
            response = conn.post(url, body)
        response.raise_for_status()
    except (requests.RequestException, OSError) as e:
        error_msg = f"请求微信支付接口失败: {str(e)}"
        logger.error(error_msg)
        raise NetworkError(error_msg) from e

    logger.info(f"微信支付响应状态码: {response.status_code}")
    logger.debug(f"微信支付响应内容: {response.text}")

    result = WeChatQueryResult.from_dict(xml_to_dict(response.content))

    if result.return_code != SUCCESS:
        # 通信失败
        error_msg = f"通信失败: {result.return_msg or result.return_code or FAIL}"
        logger.error(f"{error_msg}, URL: {url}")
        raise VendorError(error_msg, result=result)

    if result.result_code != SUCCESS:
        # 业务结果失败
        error_msg = f"业务失败({result.err_code}): {result.err_code_des}"
        logger.error(f"{error_msg}, URL: {url}")
        raise VendorError(error_msg, result=result)

    return result
