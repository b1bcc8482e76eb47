import asyncio
import logging
from collections import deque
from contextlib import contextmanager

logger = logging.getLogger(__name__)


def loop_defer(callback):
    """Run ``callback`` soon on the running asyncio loop, if there is one.

    Returns the loop the callback was handed to, or ``None``.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.debug('No running event loop; call drain() to run queued reactions')
        return None
    loop.call_soon(callback)
    return loop


def manual_defer(callback):
    return False


def report_unhandled(promise, reason):
    logger.warning('Unhandled promise rejection: %r', reason)


def is_stale(arranged):
    """Whether a drain handed to ``arranged`` can no longer be relied on."""
    if not isinstance(arranged, asyncio.AbstractEventLoop):
        return False
    if arranged.is_closed():
        return True
    try:
        running = asyncio.get_running_loop()
    except RuntimeError:
        return False
    return running is not arranged


class Scheduler:
    """FIFO queue of zero-argument tasks, drained exhaustively.

    ``defer(callback)`` arranges for ``callback`` to run once the current
    synchronous code has unwound and returns a truthy value when it did (an
    event loop when it used one). When nothing was arranged the owner calls
    :meth:`drain` itself.
    """

    def __init__(self, defer=None, on_unhandled=None):
        self.queue = deque()
        self.rejections = []
        self.defer = defer if defer is not None else loop_defer
        self.on_unhandled = on_unhandled if on_unhandled is not None else report_unhandled
        self.draining = False
        self.scheduled = None

    def __len__(self):
        return len(self.queue)

    def enqueue(self, task):
        self.queue.append(task)
        self.arrange()

    def track(self, promise):
        self.rejections.append(promise)
        self.arrange()

    def arrange(self):
        if self.draining:
            return
        if self.scheduled is not None and not is_stale(self.scheduled):
            return
        self.scheduled = self.defer(self.drain) or None

    def drain(self):
        if self.draining:
            return
        self.draining = True
        self.scheduled = None
        try:
            while self.queue:
                task = self.queue.popleft()
                task()
        finally:
            self.draining = False
            if self.queue:
                logger.debug('Drain interrupted with %d task(s) left', len(self.queue))
                self.arrange()
        self.flush_rejections()

    def flush_rejections(self):
        rejections, self.rejections = self.rejections, []
        for promise in rejections:
            if not promise.handled:
                self.on_unhandled(promise, promise.result)


_scheduler = None


def get_scheduler():
    global _scheduler
    if _scheduler is None:
        _scheduler = Scheduler()
    return _scheduler


def set_scheduler(scheduler):
    global _scheduler
    previous = _scheduler
    _scheduler = scheduler
    return previous


@contextmanager
def scheduling(scheduler):
    previous = set_scheduler(scheduler)
    try:
        yield scheduler
    finally:
        set_scheduler(previous)
