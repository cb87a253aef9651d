"""
Deferred Scheduling

Hands zero-argument tasks to an asyncio event loop so they run on a later
turn of the loop, never inside the caller's stack frame.

Backends, from cheapest to most expensive:
- EventLoopScheduler: `call_soon` on a running loop
- TimerScheduler: `call_later` on a running loop
- BackgroundLoopScheduler: a private loop on a daemon thread, for code that
  has no loop of its own

There is no synchronous fallback. When nothing suitable exists a
SchedulerUnavailableError is raised at setup time.
"""

from __future__ import annotations
import asyncio
import inspect
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, Set, runtime_checkable

from pydantic import ValidationError

from deferred_events.config.settings import Settings, get_log_level, get_settings
from deferred_events.core.exceptions import SchedulerUnavailableError
from deferred_events.core.types.event_types import NO_CONTEXT, EventCallback
from deferred_events.loggers import Logger

Task = Callable[[], Any]


@runtime_checkable
class Scheduler(Protocol):
    """Anything that can run a task on a later loop turn"""

    def schedule(self, task: Task) -> None: ...


@dataclass(frozen=True, eq=False)
class PendingInvocation:
    """
    A callback paired with the context captured when its event fired.

    Calling the invocation performs the bound call: `callback(context)` when a
    context was recorded, `callback()` otherwise.
    """

    callback: EventCallback
    context: Any = NO_CONTEXT

    def __call__(self) -> Any:
        if self.context is NO_CONTEXT:
            return self.callback()
        return self.callback(self.context)


def _scheduler_logger() -> Logger:
    return Logger(name="scheduler", type="scheduler", level=get_log_level())


class _LoopScheduler:
    """Shared plumbing for schedulers that submit to one asyncio loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise SchedulerUnavailableError(
                    f"{type(self).__name__} needs a running event loop"
                ) from e
        self.loop = loop
        self.logger = _scheduler_logger()

        # Strong references to awaitables returned by tasks until they finish
        self._pending: Set[asyncio.Future] = set()

    @property
    def is_closed(self) -> bool:
        return self.loop.is_closed()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def _on_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self.loop
        except RuntimeError:
            return False

    def _run(self, task: Task) -> None:
        result = task()
        if inspect.isawaitable(result):
            future = asyncio.ensure_future(result, loop=self.loop)
            self._pending.add(future)
            future.add_done_callback(self._finish)

    def _finish(self, future: asyncio.Future) -> None:
        self._pending.discard(future)
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            self.loop.call_exception_handler(
                {
                    "message": "Unhandled exception in deferred callback",
                    "exception": exc,
                    "future": future,
                }
            )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} loop={self.loop!r}>"


class EventLoopScheduler(_LoopScheduler):
    """Runs tasks on the next iteration of an asyncio loop."""

    def schedule(self, task: Task) -> None:
        if self._on_loop_thread():
            self.loop.call_soon(self._run, task)
        else:
            self.loop.call_soon_threadsafe(self._run, task)


class TimerScheduler(_LoopScheduler):
    """Runs tasks from the loop's timer queue after `delay` seconds."""

    def __init__(
        self, loop: Optional[asyncio.AbstractEventLoop] = None, delay: float = 0.0
    ):
        super().__init__(loop)
        self.delay = delay

    def schedule(self, task: Task) -> None:
        if self._on_loop_thread():
            self.loop.call_later(self.delay, self._run, task)
        else:
            self.loop.call_soon_threadsafe(
                self.loop.call_later, self.delay, self._run, task
            )


class BackgroundLoopScheduler(_LoopScheduler):
    """
    Owns an event loop running forever on a daemon thread.

    Tasks are submitted with `call_soon_threadsafe`, so any thread may
    schedule. Call `close()` to stop the loop and join its thread.
    """

    def __init__(self, thread_name: str = "deferred-events-loop"):
        super().__init__(asyncio.new_event_loop())
        self._thread = threading.Thread(
            target=self._serve, name=thread_name, daemon=True
        )
        self._thread.start()
        self.logger.debug(f"Started background event loop on thread '{thread_name}'")

    @property
    def thread(self) -> threading.Thread:
        return self._thread

    def _serve(self) -> None:
        asyncio.set_event_loop(self.loop)
        try:
            self.loop.run_forever()
        finally:
            self.loop.close()

    def schedule(self, task: Task) -> None:
        self.loop.call_soon_threadsafe(self._run, task)

    def close(self, timeout: Optional[float] = None) -> None:
        """Stop the loop. Tasks still queued at this point are discarded."""
        if self.loop.is_closed():
            return
        if threading.current_thread() is self._thread:
            self.loop.stop()
            return
        self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join(timeout)
        self.logger.debug("Background event loop stopped")


def detect_scheduler(settings: Optional[Settings] = None) -> Scheduler:
    """
    Pick the cheapest scheduler the current environment supports.

    Args:
        settings: Settings to read the backend choice from, defaults to the
            global settings

    Returns:
        A scheduler ready to accept tasks

    Raises:
        SchedulerUnavailableError: if no asynchronous primitive is available or
            the settings choosing one are invalid
    """
    if settings is None:
        try:
            settings = get_settings()
        except ValidationError as e:
            raise SchedulerUnavailableError(
                f"Invalid deferred_events settings: {e}"
            ) from e
    backend = settings.scheduler.backend
    logger = _scheduler_logger()

    if backend == "background":
        return BackgroundLoopScheduler()

    if backend not in ("auto", "loop", "timer"):
        raise SchedulerUnavailableError(f"Unknown scheduler backend '{backend}'")

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None:
        if backend == "timer":
            logger.debug(f"Using timer scheduler on {loop!r}")
            return TimerScheduler(loop, delay=settings.scheduler.timer_delay)
        logger.debug(f"Using call_soon scheduler on {loop!r}")
        return EventLoopScheduler(loop)

    if backend == "auto" and settings.scheduler.allow_background_loop:
        logger.warning("No running event loop, starting a background loop")
        return BackgroundLoopScheduler()

    raise SchedulerUnavailableError(
        "Unsupported environment for async events: no running event loop "
        f"(scheduler backend '{backend}'). Create the registry inside a running "
        "asyncio loop, pass an explicit scheduler, or enable the background loop."
    )


# Process-wide default scheduler
_default_scheduler: Optional[Scheduler] = None
_owns_default = False
_default_lock = threading.Lock()


def _is_stale(scheduler: Scheduler) -> bool:
    """Detected schedulers go stale when their loop closes or another loop runs."""
    loop = getattr(scheduler, "loop", None)
    if loop is None:
        return False
    if loop.is_closed():
        return True
    if isinstance(scheduler, BackgroundLoopScheduler):
        return False
    try:
        running = asyncio.get_running_loop()
    except RuntimeError:
        return False
    return running is not loop


def get_default_scheduler() -> Scheduler:
    """Get the process-wide scheduler, detecting one on first use."""
    global _default_scheduler, _owns_default
    with _default_lock:
        if _default_scheduler is None or _is_stale(_default_scheduler):
            _default_scheduler = detect_scheduler()
            _owns_default = True
        return _default_scheduler


def set_default_scheduler(scheduler: Scheduler) -> None:
    """Install a scheduler to be used by every registry without its own."""
    global _default_scheduler, _owns_default
    with _default_lock:
        _default_scheduler = scheduler
        _owns_default = False


def reset_default_scheduler() -> None:
    """Forget the default scheduler, closing a background loop it started."""
    global _default_scheduler, _owns_default
    with _default_lock:
        if _owns_default and isinstance(_default_scheduler, BackgroundLoopScheduler):
            _default_scheduler.close()
        _default_scheduler = None
        _owns_default = False


def schedule_async(task: Task) -> None:
    """Run `task` on a later loop turn through the default scheduler."""
    get_default_scheduler().schedule(task)
