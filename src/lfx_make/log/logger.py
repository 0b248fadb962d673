"""日志配置模块。

本模块基于 structlog 构建 lfx-make 的日志输出。
主要功能包括：
- 按环境变量选择日志级别、输出文件与渲染格式
- 遮盖事件中出现的 Make MCP Token
- 生产环境剥离异常详情
- 将 httpx/mcp 的标准 logging 记录转发到 structlog

注意事项：模块导入时以 CRITICAL 级别完成一次默认配置，宿主可随时调用 `configure()` 覆盖。
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, TextIO, TypedDict

import structlog
from platformdirs import user_cache_dir
from typing_extensions import NotRequired

from lfx_make.base.make.util import redact_sse_url
from lfx_make.settings import DEV

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DEFAULT_LOG_LEVEL = "ERROR"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5
ENV_PREFIX = "LFX_MAKE_"


class LogConfig(TypedDict):
    """`configure()` 可接受的日志参数。"""

    log_level: NotRequired[str]
    log_file: NotRequired[Path]
    disable: NotRequired[bool]
    log_env: NotRequired[str]
    log_format: NotRequired[str]


def _env(name: str, default: str = "") -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def remove_exception_in_production(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """非 DEV 模式下移除异常详情。"""
    if DEV is False:
        event_dict.pop("exception", None)
        event_dict.pop("exc_info", None)
    return event_dict


def redact_make_tokens(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """遮盖字符串字段中 SSE 地址里的 Token。"""
    for key, value in event_dict.items():
        if isinstance(value, str) and "/mcp/api/v1/u/" in value:
            event_dict[key] = redact_sse_url(value)
    return event_dict


def _parse_rotation(log_rotation: str | None) -> int:
    """解析 `"<n> MB"` 形式的轮转大小，无法识别时回退 10MB。"""
    parts = (log_rotation or "").split()
    if len(parts) != 2 or parts[1].upper() != "MB":  # noqa: PLR2004
        return DEFAULT_MAX_BYTES
    try:
        size_mb = int(parts[0])
    except ValueError:
        return DEFAULT_MAX_BYTES
    return size_mb * 1024 * 1024 if size_mb > 0 else DEFAULT_MAX_BYTES


def _resolve_level(log_level: str | None) -> tuple[str, int]:
    """参数优先，其次 `LFX_MAKE_LOG_LEVEL`，最后默认 ERROR。"""
    if log_level is None:
        env_level = _env("LOG_LEVEL").upper()
        log_level = env_level if env_level in VALID_LOG_LEVELS else DEFAULT_LOG_LEVEL
    level_name = log_level.upper() if log_level.upper() in VALID_LOG_LEVELS else DEFAULT_LOG_LEVEL
    return level_name, getattr(logging, level_name)


def _build_processors(log_env: str, log_format: str | None) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if DEV:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )
    processors.extend([remove_exception_in_production, redact_make_tokens, _select_renderer(log_env, log_format)])
    return processors


def _select_renderer(log_env: str, log_format: str | None) -> Any:
    """按部署环境选择渲染器。

    - `container`/`container_json`：JSON 行
    - `container_csv`：固定键顺序的 key=value
    - 其他：`LFX_MAKE_PRETTY_LOGS` 为真时彩色控制台（指定格式则 key=value），否则 JSON
    """
    log_env = log_env.lower()
    if log_env in {"container", "container_json"}:
        return structlog.processors.JSONRenderer()
    if log_env == "container_csv":
        key_order = ["timestamp", "level", "event"]
        if DEV:
            key_order += ["filename", "func_name", "lineno"]
        return structlog.processors.KeyValueRenderer(key_order=key_order, drop_missing=True)
    if _env("PRETTY_LOGS", "true").lower() != "true":
        return structlog.processors.JSONRenderer()
    if log_format:
        return structlog.processors.KeyValueRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def _attach_file_handler(log_file: Path, level: int, log_rotation: str | None) -> None:
    # 注意：目标目录不存在时改写到用户缓存目录
    if not log_file.parent.exists():
        cache_dir = Path(user_cache_dir("lfx-make"))
        cache_dir.mkdir(parents=True, exist_ok=True)
        log_file = cache_dir / "lfx-make.log"

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=_parse_rotation(log_rotation),
        backupCount=BACKUP_COUNT,
    )
    file_handler.setFormatter(logging.Formatter("%(message)s"))
    logging.root.addHandler(file_handler)
    logging.root.setLevel(level)


def configure(
    *,
    log_level: str | None = None,
    log_file: Path | None = None,
    disable: bool | None = False,
    log_env: str | None = None,
    log_format: str | None = None,
    log_rotation: str | None = None,
    cache: bool | None = None,
    output_file: TextIO | None = None,
) -> None:
    """配置日志系统。

    契约：未显式传入的参数从 `LFX_MAKE_LOG_*` 环境变量读取。
    副作用：替换全局 structlog 配置；指定 `log_file` 时向 root logger 挂载轮转文件处理器。
    注意：级别未变化且未指定 `output_file` 时直接返回，避免重复挂载处理器。
    """
    level_name, level = _resolve_level(log_level)
    if structlog.is_configured():
        wrapper_class = structlog.get_config().get("wrapper_class")
        if getattr(wrapper_class, "min_level", None) == level and output_file is None:
            return

    if log_file is None and _env("LOG_FILE"):
        log_file = Path(_env("LOG_FILE"))
    if log_env is None:
        log_env = _env("LOG_ENV")
    if log_format is None:
        log_format = _env("LOG_FORMAT") or None

    # 注意：禁用即提升到 CRITICAL
    min_level = logging.CRITICAL if disable else level
    wrapper_class = structlog.make_filtering_bound_logger(min_level)
    wrapper_class.min_level = min_level

    if log_file:
        logger_factory: Any = structlog.stdlib.LoggerFactory()
    else:
        logger_factory = structlog.PrintLoggerFactory(file=output_file if output_file is not None else sys.stdout)

    structlog.configure(
        processors=_build_processors(log_env, log_format),
        wrapper_class=wrapper_class,
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=cache if cache is not None else True,
    )
    if log_file:
        _attach_file_handler(log_file, level, log_rotation)

    global logger  # noqa: PLW0603
    logger = structlog.get_logger()
    logger.debug(f"Logger set up with log level: {level_name}")


class InterceptHandler(logging.Handler):
    """把标准 logging 记录（httpx、mcp）转交给同名 structlog logger。"""

    def emit(self, record: logging.LogRecord) -> None:
        method_name = logging.getLevelName(record.levelno).lower()
        structlog_logger = structlog.get_logger(record.name)
        log_method = getattr(structlog_logger, method_name, structlog_logger.debug)
        log_method(record.getMessage())


def intercept_library_loggers(names: tuple[str, ...] = ("httpx", "mcp")) -> None:
    """将第三方库的标准日志重定向到 structlog。"""
    for name in names:
        library_logger = logging.getLogger(name)
        library_logger.handlers = [InterceptHandler()]
        library_logger.propagate = False


logger: structlog.BoundLogger = structlog.get_logger()
configure(log_level="CRITICAL", cache=False)
