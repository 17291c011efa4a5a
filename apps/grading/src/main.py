"""Grading CLI 入口

遵循 P&A 架構：CLI → Driving Adapter → Application Service
"""

import asyncio
import inspect

import fire

from apps.grading.src.lifespan import startup, shutdown, get_injector
from apps.grading.src.adapters.driving.cli.grading_controller import (
    GradingController,
)


def main() -> None:
    """同步入口，支援 async 方法"""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    try:
        startup()

        controller = GradingController(get_injector())
        result = fire.Fire(controller)

        # 如果結果是 coroutine，需要 await 它
        if inspect.iscoroutine(result):
            loop.run_until_complete(result)
    finally:
        shutdown()
        loop.close()


if __name__ == "__main__":
    main()
