import asyncio
import inspect
import logging
import threading
from typing import Any, Callable, Optional

from ..exceptions import SessionTeardownError
from .constants import DEFAULT_KILL_GRACE_PERIOD_SECONDS, DEFAULT_KILL_SETTLE_PERIOD_SECONDS

logger = logging.getLogger(__name__)


class SessionLifecycleManager:
    """
    Tears down driver sessions in bounded time.

    quit() is raced against `grace_period` seconds; whichever finishes first,
    a further `settle_period` seconds elapse before kill_session() returns so
    the browser process and its temporary profile are gone by then. Total
    wall-clock time never exceeds grace_period + settle_period, even when
    quit() hangs forever.
    """

    def __init__(self, grace_period: float = DEFAULT_KILL_GRACE_PERIOD_SECONDS,
                 settle_period: float = DEFAULT_KILL_SETTLE_PERIOD_SECONDS):
        if grace_period < 0 or settle_period < 0:
            raise ValueError("grace_period and settle_period must be non-negative.")
        self.grace_period = grace_period
        self.settle_period = settle_period

    async def kill_session(self, driver: Optional[Any]) -> None:
        if driver is None:
            return

        quit_method = getattr(driver, 'quit', None)
        if not callable(quit_method):
            raise SessionTeardownError("Unable to find a quit method on the web driver.")

        # Selenium leaves session_id as None once the session is gone
        if hasattr(driver, 'session_id') and driver.session_id is None:
            logger.debug("WebDriver session already closed; nothing to kill.")
            return

        quit_task = asyncio.ensure_future(_call_quit(quit_method))
        quit_task.add_done_callback(_log_quit_outcome)

        done, _ = await asyncio.wait({quit_task}, timeout=self.grace_period)
        if not done:
            logger.warning(f"WebDriver quit() did not finish within {self.grace_period}s; continuing teardown.")

        await asyncio.sleep(self.settle_period)


def _run_in_daemon_thread(func: Callable[[], Any]) -> "asyncio.Future[Any]":
    """
    Runs a blocking call in its own daemon thread and returns a future for its result.

    Unlike the loop's default executor, the thread is never joined, so a quit()
    that hangs forever can't hold up interpreter or event loop shutdown.
    """
    loop = asyncio.get_running_loop()
    future: "asyncio.Future[Any]" = loop.create_future()

    def settle(result: Any, error: Optional[BaseException]) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def run() -> None:
        result, error = None, None
        try:
            result = func()
        except Exception as e:
            error = e
        try:
            loop.call_soon_threadsafe(settle, result, error)
        except RuntimeError:
            logger.debug(f"Event loop closed before WebDriver quit() returned (error: {error!r}).")

    threading.Thread(target=run, name='webdriver-quit', daemon=True).start()
    return future


async def _call_quit(quit_method: Any) -> None:
    if inspect.iscoroutinefunction(quit_method):
        await quit_method()
        return
    # Some clients hand back an awaitable from a plain quit()
    result = await _run_in_daemon_thread(quit_method)
    if inspect.isawaitable(result):
        await result


def _log_quit_outcome(task: "asyncio.Future[Any]") -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.warning(f"Error while quitting WebDriver: {error}")
    else:
        logger.info("WebDriver session closed.")


async def kill_session(driver: Optional[Any],
                       grace_period: float = DEFAULT_KILL_GRACE_PERIOD_SECONDS,
                       settle_period: float = DEFAULT_KILL_SETTLE_PERIOD_SECONDS) -> None:
    await SessionLifecycleManager(grace_period, settle_period).kill_session(driver)
