import asyncio

from .errors import CyclicResolutionError, PromiseException
from .scheduler import get_scheduler

PENDING = 'pending'
FULFILLED = 'fulfilled'
REJECTED = 'rejected'


def empty(resolve, reject):
    pass

def identity(value):
    return value

def thrower(reason):
    raise PromiseException(reason)

def fulfill(promise, value):
    settle(promise, FULFILLED, value)

def reject(promise, reason):
    settle(promise, REJECTED, reason)

def settle(promise, state, result):
    if promise.state != PENDING:
        return
    promise.state = state
    promise.result = result
    promise.follows = None
    jobs, promise.jobs = promise.jobs, []
    for job in jobs:
        schedule_job(promise, job)
    if state == REJECTED and not promise.handled:
        promise.scheduler.track(promise)

def schedule_job(promise, job):
    promise.scheduler.enqueue(lambda: execute_job(promise, job))

def execute_job(promise, job):
    handler = job['fulfilled'] if promise.state == FULFILLED else job['rejected']
    try:
        value = handler(promise.result)
    except PromiseException as e:
        job['resolver'].reject(e.value)
        return
    except Exception as e:
        job['resolver'].reject(e)
        return
    job['resolver'].resolve(value)

def is_cycle(promise, value):
    target = value
    while target is not None:
        if target is promise:
            return True
        target = target.follows
    return False

def resolve_with(promise, value):
    if value is promise:
        reject(promise, CyclicResolutionError('promise resolved with itself'))
        return
    if isinstance(value, Promise):
        if is_cycle(promise, value):
            reject(promise, CyclicResolutionError('promise resolution cycle'))
            return
        promise.follows = value

    try:
        then = getattr(value, 'then', None)
    except Exception as e:
        reject(promise, e)
        return

    if not callable(then):
        fulfill(promise, value)
        return

    resolver = Resolver(promise)

    def adopt():
        try:
            then(resolver.resolve, resolver.reject)
        except PromiseException as e:
            resolver.reject(e.value)
        except Exception as e:
            resolver.reject(e)

    promise.scheduler.enqueue(adopt)


class Resolver:
    """One-shot resolve/reject pair bound to a single promise."""

    def __init__(self, promise):
        self.promise = promise
        self.done = False

    def resolve(self, value=None):
        if self.done:
            return
        self.done = True
        resolve_with(self.promise, value)

    def reject(self, reason=None):
        if self.done:
            return
        self.done = True
        reject(self.promise, reason)


class Promise:
    def __init__(self, fn, scheduler=None):
        self.state = PENDING
        self.result = None
        self.jobs = []
        self.handled = False
        self.follows = None
        self.scheduler = scheduler if scheduler is not None else get_scheduler()

        resolver = Resolver(self)
        try:
            fn(resolver.resolve, resolver.reject)
        except PromiseException as e:
            resolver.reject(e.value)
        except Exception as e:
            resolver.reject(e)

    def __repr__(self):
        if self.state == PENDING:
            return '<Promise pending>'
        return '<Promise %s: %r>' % (self.state, self.result)

    @staticmethod
    def resolve(value=None, scheduler=None):
        if isinstance(value, Promise):
            return value
        promise = Promise(empty, scheduler)
        resolve_with(promise, value)
        return promise

    @staticmethod
    def reject(reason=None, scheduler=None):
        promise = Promise(empty, scheduler)
        reject(promise, reason)
        return promise

    @staticmethod
    def all(inputs, scheduler=None):
        from .combinators import all_promises
        return all_promises(inputs, scheduler)

    @staticmethod
    def race(inputs, scheduler=None):
        from .combinators import race
        return race(inputs, scheduler)

    @staticmethod
    def all_settled(inputs, scheduler=None):
        from .combinators import all_settled
        return all_settled(inputs, scheduler)

    def then(self, on_fulfilled=None, on_rejected=None):
        downstream = Promise(empty, self.scheduler)
        job = {
            'resolver': Resolver(downstream),
            'fulfilled': on_fulfilled if callable(on_fulfilled) else identity,
            'rejected': on_rejected if callable(on_rejected) else thrower,
        }
        self.handled = True
        if self.state == PENDING:
            self.jobs.append(job)
        else:
            schedule_job(self, job)
        return downstream

    def catch(self, on_rejected):
        return self.then(None, on_rejected)

    def finally_(self, on_finally):
        if not callable(on_finally):
            return self.then(on_finally, on_finally)

        scheduler = self.scheduler

        def fulfilled(value):
            return Promise.resolve(on_finally(), scheduler).then(lambda _: value)

        def rejected(reason):
            return Promise.resolve(on_finally(), scheduler).then(lambda _: thrower(reason))

        return self.then(fulfilled, rejected)

    def __await__(self):
        future = asyncio.get_running_loop().create_future()

        def fulfilled(value):
            if not future.done():
                future.set_result(value)

        def rejected(reason):
            if not future.done():
                if not isinstance(reason, BaseException):
                    reason = PromiseException(reason)
                future.set_exception(reason)

        self.then(fulfilled, rejected)
        return future.__await__()
