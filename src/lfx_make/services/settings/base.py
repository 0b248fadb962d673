"""
模块名称：settings.base

本模块定义运行配置模型，集中处理环境变量与默认值。

关键组件：
- Settings：统一的运行时配置模型

注意事项：环境变量前缀为 `LFX_MAKE_`，例如 `LFX_MAKE_MCP_SSE_READ_TIMEOUT=120`。
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """lfx-make 运行配置集合。

    契约：
    - 输入：环境变量、构造参数
    - 输出：可读写的配置对象
    - 失败语义：无效配置会抛出 ValidationError
    """

    model_config = SettingsConfigDict(validate_assignment=True, extra="ignore", env_prefix="LFX_MAKE_")

    dev: bool = False
    """是否以开发模式运行。"""

    mcp_client_name: str = "lfx-make-sse-client"
    """MCP 握手时上报的客户端名称。"""
    mcp_client_version: str = "1.0.0"
    """MCP 握手时上报的客户端版本。"""
    mcp_sse_timeout: float = Field(default=5.0, gt=0)
    """SSE 建连与普通 HTTP 请求的超时时间（秒）。"""
    mcp_sse_read_timeout: float = Field(default=300.0, gt=0)
    """SSE 事件流两次事件之间的最长等待时间（秒）。"""
    mcp_verify_ssl: bool = True
    """是否校验 MCP 服务器的 SSL 证书。"""

    make_zone_host_template: str = "{zone}.make.com"
    """Make 区域代码到主机名的模板，`{zone}` 会被替换为区域代码。"""

    load_error_max_length: int = Field(default=100, gt=0)
    """下拉加载失败时错误描述的最大长度。"""

    @field_validator("make_zone_host_template")
    @classmethod
    def validate_zone_host_template(cls, value: str) -> str:
        """模板必须包含 `{zone}` 占位符。"""
        if "{zone}" not in value:
            msg = "make_zone_host_template must contain the '{zone}' placeholder"
            raise ValueError(msg)
        return value
