# coflow

Structured concurrency helpers built on `asyncio`. The package has no
dependencies outside the standard library.

## Installation

```
pip install coflow
```

To run the test suite:

```
pip install "coflow[test]"
pytest
```

## Modules

### `coflow.task`

- `Task(coro)` wraps a coroutine without starting it. The coroutine starts
  when the task is first awaited, or when the task is handed to `spawn`.
  - Awaiting a finished task again returns the same outcome.
  - Awaiting a task while another coroutine is already awaiting it raises
    `CobaltError(ErrorCode.ALREADY_AWAITED)`.
  - `Task.cancel(ct=CancellationType.ALL)` requests cancellation. If the task
    has not started yet, the request is kept and applied once it starts. The
    call does nothing once the task has finished.
  - `Task.done()` and `Task.started()` report the task's state.
- `run(task)` runs a fresh task to completion on a new event loop and returns
  its result.
- `spawn(loop, task, callback=None)` starts a fresh task on `loop` and may be
  called from any thread.
  - `loop` is an event loop, or an object whose `get_executor()` returns one,
    such as a `Thread`.
  - When the task finishes, `callback(exception, value)` is called on the
    loop's thread.
  - The return value is a `concurrent.futures.Future` that carries the same
    outcome.

### `coflow.join`

- `join(*awaitables)` awaits all of its arguments concurrently and gives back
  a tuple of their values, in order.
- `join_all(iterable)` does the same for an iterable and gives back a list.

Both fail fast. The first exception cancels every awaitable that is still
running. Once all of them have finished, that first exception is raised.
Cancelling the join itself cancels everything it is still waiting on.

### `coflow.scoped`

`await with_(arg, func, teardown=None)` works as follows:

1. It calls `func(arg)`. `func` may return a value or an awaitable.
2. It then always runs `teardown(arg, exc)`, where `exc` is the exception
   from `func`, or `None`.
3. If no `teardown` is given, it calls `arg.await_exit(exc)` instead.

If `func` raised, that exception is re-raised, even if the teardown also
raised. If only the teardown raised, its exception is raised. Otherwise
`with_` returns `func`'s result.

### `coflow.thread`

`Thread(func, *args)` starts `func(*args)` right away, on a new event loop in
a separate OS thread.

- `join()` blocks until the thread has finished. `joinable()` tells whether
  `join()` may still be called.
- `detach()` lets the thread run on without being joined.
- `cancel(ct)` sends a cancellation request to the coroutine running there.
- `get_executor()` returns the thread's event loop. Once the coroutine has
  finished, it raises `BadExecutor`.
- `get_id()` returns the OS thread identifier.
- Awaiting a `Thread` from another event loop yields the coroutine's result.
  A thread whose loop was stopped before the coroutine finished yields
  `None`. A thread can be awaited only once; awaiting it a second time raises
  `CobaltError(ErrorCode.MOVED_FROM)`.

### `coflow.results`

- `Result` holds either a value or an exception. It has `has_value()`,
  `has_error()` and `unwrap()`.
- `capture(func, *args)` calls `func(*args)` and wraps the outcome in a
  `Result`.
- `capture_async(awaitable)` awaits `awaitable` and wraps the outcome in a
  `Result`.

### `coflow.cancellation`

- `CancellationType` has the flags `NONE`, `TERMINAL`, `PARTIAL`, `TOTAL`
  and `ALL`.
- `CancellationSignal` forwards `emit(ct)` to at most one handler. Handlers
  are managed with `connect(handler)`, `disconnect()` and `is_connected()`.

### `coflow.errors`

- `ErrorCode` lists the error conditions the library reports.
- `error_message(code)` returns the message for a code.
- `CobaltError(code)` is the exception that carries a code, and
  `make_error(code)` builds one.
- `BadExecutor` is raised when an executor is requested from an object that
  no longer has one.

## Example

```python
import asyncio
from coflow.task import Task, run
from coflow.join import join

async def delayed(ms):
    await asyncio.sleep(ms / 1000)
    return ms

async def main():
    return await join(Task(delayed(100)), Task(delayed(50)))

print(run(Task(main())))  # (100, 50)
```

Running a coroutine on its own thread:

```python
import asyncio
from coflow.thread import Thread

async def work(n):
    await asyncio.sleep(0.1)
    return n * 2

async def main():
    return await Thread(work, 21)

print(asyncio.run(main()))  # 42
```

## What it does not do

There is no helper that collects a per-awaitable outcome without failing
fast. To get that, wrap each awaitable in `capture_async` and pass the
wrappers to `join`. Each element of the result is then a `Result`.

There is also no managed group of tasks with a bounded size. Keep your own
list of `Task` objects, and use `join_all` to wait for them.