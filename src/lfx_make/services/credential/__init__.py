"""
模块名称：凭据服务导出入口

本模块对外导出凭据服务，统一导入路径。
"""

from .service import CredentialRecord, CredentialService

__all__ = ["CredentialRecord", "CredentialService"]
