from .promise import Promise, Resolver, empty
from .scheduler import get_scheduler


def all_promises(inputs, scheduler=None):
    """Fulfill with every input's value, in input order, or reject with the first rejection."""
    inputs = list(inputs)
    scheduler = scheduler if scheduler is not None else get_scheduler()
    aggregate = Promise(empty, scheduler)
    resolver = Resolver(aggregate)
    results = [None] * len(inputs)
    remaining = [len(inputs)]

    if not inputs:
        resolver.resolve(results)
        return aggregate

    def collect(index):
        def on_fulfilled(value):
            results[index] = value
            remaining[0] -= 1
            if remaining[0] == 0:
                resolver.resolve(results)
        return on_fulfilled

    for index, item in enumerate(inputs):
        Promise.resolve(item, scheduler).then(collect(index), resolver.reject)
    return aggregate


def race(inputs, scheduler=None):
    """Settle like whichever input settles first. Empty input never settles."""
    scheduler = scheduler if scheduler is not None else get_scheduler()
    aggregate = Promise(empty, scheduler)
    resolver = Resolver(aggregate)
    for item in inputs:
        Promise.resolve(item, scheduler).then(resolver.resolve, resolver.reject)
    return aggregate


def all_settled(inputs, scheduler=None):
    """Wait for every input and describe each outcome. Never rejects."""
    scheduler = scheduler if scheduler is not None else get_scheduler()
    outcomes = []
    for item in inputs:
        outcomes.append(Promise.resolve(item, scheduler).then(
            lambda value: {'status': 'fulfilled', 'value': value},
            lambda reason: {'status': 'rejected', 'reason': reason}))
    return all_promises(outcomes, scheduler)
