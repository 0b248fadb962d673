"""日志模块入口。

本模块导出日志配置函数与全局 logger 实例。
"""

from lfx_make.log.logger import configure, intercept_library_loggers, logger

__all__ = ["configure", "intercept_library_loggers", "logger"]
