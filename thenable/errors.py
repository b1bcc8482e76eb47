class PromiseException(Exception):
    """Carries a rejection reason that is not itself an exception.

    Raising ``PromiseException(value)`` from an executor or a handler rejects
    with ``value``, not with the exception instance.
    """

    def __init__(self, value):
        super().__init__(value)
        self.value = value

    def __str__(self):
        return repr(self.value)


class CyclicResolutionError(TypeError):
    """A promise was resolved with itself."""
