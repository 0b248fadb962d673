"""进程级开关（在设置服务加载前即可读取）。"""

import os

DEV = os.getenv("LFX_MAKE_DEV", "false").lower() == "true"
