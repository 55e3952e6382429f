"""请求字段辅助函数"""

import random
import socket
import string

# 商品描述中需要过滤的特殊符号
SPECIAL_SYMBOLS = set("`~!@#$%^&*()-_+={}[]\\|;:'\",<>./?")


def random_str(length=32):
    """
    生成随机字符串
    :param length: 字符串长度
    :return:
    """
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def _route_ip():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        # UDP connect 不发包，只取出口网卡地址
        sock.connect(("8.8.8.8", 80))
        return sock.getsockname()[0]
    except OSError:
        return None
    finally:
        sock.close()


def _hostname_ips():
    try:
        infos = socket.getaddrinfo(socket.gethostname(), None, socket.AF_INET)
    except OSError:
        return []
    return [info[4][0] for info in infos]


def local_ip():
    """获取本机第一个非回环 IPv4 地址，获取失败时返回 127.0.0.1

    优先取默认路由的出口地址，没有默认路由时依次检查主机名解析出的地址。
    """
    for ip in [_route_ip(), *_hostname_ips()]:
        if ip and not ip.startswith("127."):
            return ip
    return "127.0.0.1"


def filter_special_symbol(text: str) -> str:
    return ''.join(' ' if ch in SPECIAL_SYMBOLS else ch for ch in text)


def truncated_text(text: str, length: int) -> str:
    """过滤特殊符号并按字符数截断"""
    text = filter_special_symbol(text or "")
    if len(text) > length:
        return text[:length]
    return text


def wechat_money_fee_to_string(fee) -> str:
    """金额(单位:分)转为微信接口需要的字符串"""
    if isinstance(fee, bool) or not isinstance(fee, int):
        raise ValueError(f"金额必须为整数(单位:分): {fee!r}")
    if fee < 0:
        raise ValueError(f"金额不能为负数: {fee}")
    return str(fee)
