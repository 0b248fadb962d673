"""
模块名称：凭据服务（轻量实现）

本模块提供凭据记录的内存存储，供节点按凭据 ID 读取明文字段。
主要功能：
- 新增/读取/删除凭据记录；
- 按凭据 ID 返回字段字典（`get_credential_data`）。

设计背景：宿主平台负责持久化与加解密，插件侧只需要按 ID 取值的读接口；
本实现用于独立运行与测试场景。
注意事项：记录不会持久化，进程重启即丢失。
"""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, Field, SecretStr

from lfx_make.log.logger import logger
from lfx_make.services.base import Service


class CredentialRecord(BaseModel):
    """一条凭据记录。

    契约：`credential_name` 对应凭据描述的 `name`（如 `makeApi`），
    `data` 中的值以 `SecretStr` 保存，避免在日志或 repr 中泄漏。
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = ""
    credential_name: str
    data: dict[str, SecretStr] = Field(default_factory=dict)

    def plain_data(self) -> dict[str, Any]:
        return {key: value.get_secret_value() for key, value in self.data.items()}


class CredentialService(Service):
    """In-memory credential store keyed by credential id."""

    name = "credential_service"

    def __init__(self) -> None:
        super().__init__()
        self._credentials: dict[str, CredentialRecord] = {}
        self.set_ready()
        logger.debug("Credential service initialized (in-memory only)")

    def add_credential(self, credential_name: str, data: dict[str, Any], *, name: str = "") -> CredentialRecord:
        """新增凭据记录并返回（含生成的 ID）。"""
        record = CredentialRecord(
            name=name or credential_name,
            credential_name=credential_name,
            data={key: SecretStr(str(value)) for key, value in data.items() if value is not None},
        )
        self._credentials[record.id] = record
        logger.debug(f"Credential '{record.name}' ({credential_name}) stored")
        return record

    def get_credential(self, credential_id: str) -> CredentialRecord | None:
        return self._credentials.get(credential_id)

    def get_credential_data(self, credential_id: str) -> dict[str, Any]:
        """按 ID 返回明文字段字典。

        契约：未知 ID 返回空字典（由调用方决定如何提示缺失凭据）。
        """
        record = self._credentials.get(credential_id)
        if record is None:
            logger.debug(f"Credential '{credential_id}' not found")
            return {}
        return record.plain_data()

    def delete_credential(self, credential_id: str) -> None:
        if self._credentials.pop(credential_id, None) is not None:
            logger.debug(f"Credential '{credential_id}' deleted")

    def list_credentials(self, credential_name: str | None = None) -> list[CredentialRecord]:
        """列出凭据记录，可按凭据类型过滤。"""
        return [
            record
            for record in self._credentials.values()
            if credential_name is None or record.credential_name == credential_name
        ]

    async def teardown(self) -> None:
        self._credentials.clear()
        logger.debug("Credential service teardown")
