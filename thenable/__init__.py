from .combinators import all_promises, all_settled, race
from .deferred import Deferred
from .errors import CyclicResolutionError, PromiseException
from .promise import FULFILLED, PENDING, REJECTED, Promise
from .scheduler import (Scheduler, get_scheduler, loop_defer, manual_defer,
                        report_unhandled, scheduling, set_scheduler)


__all__ = [
    'Promise', 'Deferred', 'Scheduler',
    'PromiseException', 'CyclicResolutionError',
    'PENDING', 'FULFILLED', 'REJECTED',
    'all_promises', 'race', 'all_settled',
    'get_scheduler', 'set_scheduler', 'scheduling',
    'loop_defer', 'manual_defer', 'report_unhandled',
]
