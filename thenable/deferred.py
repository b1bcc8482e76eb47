from .promise import Promise


class Deferred:
    """The producer side of a :class:`Promise`.

    Hands out ``resolve`` and ``reject`` so that code other than the executor,
    such as a timer callback, can settle ``promise`` later.

    Attributes:
        promise (Promise): the promise being settled.
        resolve (function)
        reject (function)
    """

    def __init__(self, scheduler=None):
        self.promise = Promise(self._executor, scheduler)

    def _executor(self, resolve, reject):
        self.resolve = resolve
        self.reject = reject
