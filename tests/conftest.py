import pytest

from thenable import Scheduler, manual_defer, scheduling


class RecordingReporter:
    """Collects unhandled rejections instead of logging them."""

    def __init__(self):
        self.reasons = []

    def __call__(self, promise, reason):
        self.reasons.append(reason)


@pytest.fixture
def unhandled():
    return RecordingReporter()


@pytest.fixture(autouse=True)
def scheduler(unhandled):
    with scheduling(Scheduler(defer=manual_defer, on_unhandled=unhandled)) as scheduler:
        yield scheduler


class Thenable:
    """A foreign thenable that settles when its ``then`` is called."""

    def __init__(self, value=None, reason=None, rejects=False):
        self.value = value
        self.reason = reason
        self.rejects = rejects
        self.calls = 0

    def then(self, on_fulfilled, on_rejected):
        self.calls += 1
        if self.rejects:
            on_rejected(self.reason)
        else:
            on_fulfilled(self.value)


@pytest.fixture
def thenable():
    return Thenable
