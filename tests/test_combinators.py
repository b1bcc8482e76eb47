from thenable import FULFILLED, PENDING, REJECTED, Deferred, Promise, all_promises


def test_all_of_nothing_fulfills_immediately():
    promise = Promise.all([])
    assert (promise.state, promise.result) == (FULFILLED, [])


def test_all_keeps_input_order(scheduler):
    promise = Promise.all([1, Promise.resolve(2), 3])
    scheduler.drain()
    assert (promise.state, promise.result) == (FULFILLED, [1, 2, 3])


def test_all_orders_by_position_not_completion(scheduler):
    first, second = Deferred(), Deferred()
    promise = Promise.all([first.promise, second.promise])

    second.resolve('b')
    scheduler.drain()
    assert promise.state == PENDING

    first.resolve('a')
    scheduler.drain()
    assert promise.result == ['a', 'b']


def test_all_rejects_with_first_rejection(scheduler):
    promise = Promise.all([Promise.resolve(1), Promise.reject('x'), Promise.resolve(3)])
    scheduler.drain()
    assert (promise.state, promise.result) == (REJECTED, 'x')


def test_all_ignores_later_settlements(scheduler):
    slow = Deferred()
    promise = Promise.all([slow.promise, Promise.reject('fast')])
    scheduler.drain()
    assert promise.result == 'fast'

    slow.reject('slow')
    scheduler.drain()
    assert (promise.state, promise.result) == (REJECTED, 'fast')


def test_all_accepts_thenables_and_generators(scheduler, thenable):
    promise = all_promises(value for value in [thenable(value='t'), 'plain'])
    scheduler.drain()
    assert promise.result == ['t', 'plain']


def test_all_marks_inputs_handled(scheduler, unhandled):
    Promise.all([Promise.reject('a'), Promise.reject('b')]).catch(lambda reason: None)
    scheduler.drain()
    assert unhandled.reasons == []


def test_race_takes_first_fulfillment(scheduler):
    slow = Deferred()
    promise = Promise.race([slow.promise, Promise.resolve('fast')])
    scheduler.drain()
    assert (promise.state, promise.result) == (FULFILLED, 'fast')

    slow.reject('late')
    scheduler.drain()
    assert promise.result == 'fast'


def test_race_takes_first_rejection(scheduler):
    promise = Promise.race([Promise.reject('first'), Promise.resolve('second')])
    scheduler.drain()
    assert (promise.state, promise.result) == (REJECTED, 'first')


def test_race_of_nothing_stays_pending(scheduler):
    promise = Promise.race([])
    scheduler.drain()
    assert promise.state == PENDING


def test_all_settled_describes_each_outcome(scheduler):
    promise = Promise.all_settled([Promise.resolve(1), Promise.reject('x'), 3])
    scheduler.drain()

    assert promise.state == FULFILLED
    assert promise.result == [
        {'status': 'fulfilled', 'value': 1},
        {'status': 'rejected', 'reason': 'x'},
        {'status': 'fulfilled', 'value': 3},
    ]


def test_all_settled_of_nothing(scheduler):
    promise = Promise.all_settled([])
    assert promise.result == []
