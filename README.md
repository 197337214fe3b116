# auctionkit

Coordination primitives for Python threads. The main one is an auction for
identical units. Next to it are an elevator-ordered disk lock, FIFO
semaphores and mutexes, message-passing tasks and a few classic containers.
Everything uses only the standard library.

## Modules

### `auctionkit.auction`

`Auction(units)` sells `units` identical items to the highest bidders.

- `offer(price, timeout=-1)` places a bid from the calling thread and blocks
  until the bid is settled. The timeout is in milliseconds, and zero or
  negative means no limit. It returns `True` if the bid won a unit. It
  returns `False` if a better bid pushed it out or its timeout ran out. When
  the auction holds more bids than units, the lowest bid is rejected at once.
  That can be the new bid itself, in which case `offer` returns `False`
  straight away.
- `award()` gives a unit to every pending bid and wakes their threads. It
  returns `(total, unsold)`, the amount collected and the units left over.
- The properties `units` and `pending` report the units on sale and the
  number of bids that are waiting.
- `OfferState` enumerates `PENDING`, `REJECTED` and `AWARDED`.

### `auctionkit.disk`

`Disk()` is held by one thread at a time.

- `request(track, timeout=-1)` returns `True` once the disk is held and
  `False` if it could not be had in time. The timeout is in milliseconds:
  negative waits without limit and zero does not wait.
- `release()` hands the disk to the waiting request with the lowest track at
  or beyond the current one. When no such request is left, it starts again
  from the lowest track (C-SCAN). It raises `RuntimeError` if the disk is
  not in use.
- The properties `busy`, `track` and `waiting` describe the current state.

### `auctionkit.sync`

- `Semaphore(tickets=0)` has `wait()` and `post()`. A posted ticket goes
  straight to the first waiter.
- `Mutex()` has `lock()` and `unlock()` and works as a context manager. It is
  not reentrant. It is handed to waiters in FIFO order. Calling `unlock()`
  from a thread that does not own it raises `RuntimeError`.
- `Condition(mutex)` has `wait()`, `signal()` and `broadcast()`. A thread
  that is signalled resumes once the signalling thread releases the mutex.

### `auctionkit.nsystem`

- `Task(target, *args)` runs `target(*args)` in its own thread. It returns
  once that thread has started.
- `task.send(msg)` blocks the sender until the receiver answers.
- `receive(timeout=-1)` takes the next message for the calling task and
  returns `(sender, message)`, or `(None, None)` on timeout. The timeout is
  in milliseconds.
- The receiver answers with `sender.reply(rc)`. That value becomes the
  result of `send`.
- `task.wait()` returns the value the function returned, or raises the
  exception it raised.
- `current_task()` returns the task for the calling thread. It also works in
  threads that were not started as tasks.
- `Monitor()` combines a mutex with an implicit condition. It has `enter()`,
  `exit()`, `wait()`, `notify_all()` and `make_condition()`, and works as a
  context manager.

### `auctionkit.pss`

- `HashMap(capacity, hash_fun, equals_fun)`: a chained hash map with
  `define`, `query`, `delete`, `in`, iteration and `len`.
- Hash helpers: `hash_ptr`, `pointer_equals`, `hash_string`,
  `equals_strings`.
- `Queue`: a FIFO queue whose items are compared by identity.
- `FullPriQueue(compare, initial_size=16)`: a binary heap ordered by a
  comparator.
- `PriQueue`: a priority queue that returns the lowest numeric priority
  first. It has `put`, `get`, `peek`, `best` and `delete`.
- `sort(seq, left, right, compare, swap)`: a generic in-place quicksort.

### `auctionkit.kernel_queues`

- `ThreadQueue`: a FIFO that holds each object at most once.
- `TimeQueue`: entries ordered by wake time.
- `EventLog(size, min_size)`: a circular in-memory text log. `dump(path)`
  writes it to a file, oldest entries first.

## Examples

```python
import threading
import time
from auctionkit.auction import Auction

auction = Auction(2)
results = {}

def bidder(name, price):
    results[name] = auction.offer(price)

threads = [threading.Thread(target=bidder, args=(n, p))
           for n, p in [("ana", 7), ("maria", 3), ("erika", 5)]]
for t in threads:
    t.start()
time.sleep(0.5)                  # let the bids arrive
total, unsold = auction.award()  # (12.0, 0); maria was outbid
for t in threads:
    t.join()
```

```python
from auctionkit.nsystem import Task, receive

def doubler():
    sender, msg = receive()
    sender.reply(msg * 2)
    return 0

task = Task(doubler)
print(task.send(21))  # 42
task.wait()
```

## Demo

The package installs a command that runs a set of auction scenarios in
threads and checks their outcomes:

```
auctionkit-demo
auctionkit-demo --parallel 5 --rounds 10
```

`--parallel` sets how many copies of the scenarios run at the same time in
the robustness test (default 30). `--rounds` sets how many pairs of auctions
run in the stress test (default 50). The command exits with status 1 if a
scenario fails. Some scenarios use fixed pauses of one or more seconds, so a
full run takes a while.

## What it does not do

Blocking and waking use ordinary Python threads. The package has no
scheduler of its own, so it offers no time slicing, no priority scheduling
and no choice of cores. It also provides no sleep, timer or I/O calls beyond
the timeouts described above.