import sys

from loguru import logger


def setup_logger(level="INFO", log_dir="logs"):
    """配置日志: 控制台彩色输出 + 按天切割的日志文件"""
    logger.remove()  # 清除默认的控制台输出
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    )
    if log_dir:
        logger.add(
            f"{log_dir}/wechat_app_pay_{{time:YYYY-MM-DD}}.log",
            rotation="00:00",
            retention="30 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=level,
            encoding="utf-8",
        )
    return logger
