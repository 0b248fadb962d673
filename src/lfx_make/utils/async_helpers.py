"""模块名称：同步调用异步协程的桥接工具

主要功能：在同步调用链（如 LangChain 的 `tool.invoke`）中执行协程。
注意事项：会创建线程与事件循环，避免在热路径频繁调用。
"""

import asyncio
import concurrent.futures


def run_until_complete(coro, loop: asyncio.AbstractEventLoop | None = None):
    """在同步代码中运行协程。

    契约：
    - 若指定的 `loop` 正在其他线程运行，则把协程提交到该循环并阻塞等待结果
      （MCP 会话绑定在创建它的事件循环上）；
    - 若指定的 `loop` 就是当前线程正在运行的循环，阻塞等待只会卡死该循环，直接抛 `RuntimeError`；
    - 否则若当前线程已有运行中的事件循环，则新建线程与事件循环执行；
    - 否则直接 `asyncio.run`。
    副作用：可能创建线程与新事件循环；异常原样向上抛出。
    """
    try:
        running_loop = asyncio.get_running_loop()
    except RuntimeError:
        running_loop = None

    if loop is not None and loop.is_running() and loop is not running_loop:
        return asyncio.run_coroutine_threadsafe(coro, loop).result()

    if loop is not None and loop is running_loop:
        coro.close()
        msg = "MCP session is bound to the running event loop; use ainvoke()"
        raise RuntimeError(msg)

    if running_loop is None:
        return asyncio.run(coro)

    # 注意：已有运行中的事件循环时，不能在同一线程阻塞执行，改用新线程+新事件循环。
    def run_in_new_loop():
        new_loop = asyncio.new_event_loop()
        asyncio.set_event_loop(new_loop)
        try:
            return new_loop.run_until_complete(coro)
        finally:
            new_loop.close()

    with concurrent.futures.ThreadPoolExecutor() as executor:
        future = executor.submit(run_in_new_loop)
        return future.result()
