from .company_change import wechat_company_change

__all__ = ["wechat_company_change"]
