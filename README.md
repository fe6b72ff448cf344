# blockconfirm

Data types for tracking blockchain events and transactions through to
confirmation, and a buffer that passes block hash events on to a consumer
without ever being held up by it.

## Installing

```
pip install .
```

The tests need the `test` extra:

```
pip install .[test]
pytest
```

## Modules

### `blockconfirm.chaintypes`

The shared data types:

- `BlockHashEvent`: a batch of new block hashes (`block_hashes`), with a
  `gap_potential` flag that says some events may have been missed.
- `BlockInfo`: a block header (`block_number`, `block_hash`, `parent_hash`,
  `transaction_hashes`). `without_transactions()` returns a copy with an empty
  list of transaction hashes.
- `EventID`: names an event log by listener, transaction hash, block hash,
  block number, transaction index and log index.
- `TransactionReceipt`: `block_number`, `block_hash`, `transaction_index` and
  `success`.
- `NotificationType`: `NEW_EVENT_LOG`, `REMOVED_EVENT_LOG`,
  `NEW_TRANSACTION`, `REMOVED_TRANSACTION` and `LISTENER_REMOVED`.
- `EventInfo`, `TransactionInfo` and `RemovedListenerInfo`: what a
  notification carries, including the callbacks to run when a receipt arrives
  or an item is confirmed. `RemovedListenerInfo.completed` is a
  `threading.Event`.
- `Notification`: one request about an event, a transaction or a listener.
  `validate()` raises `InvalidConfirmationRequest` when the fields its type
  needs are missing. For an event log that is the event id, listener id,
  transaction hash and block hash. For a transaction it is the transaction
  hash. For a listener removal it is the `completed` event. The error message
  starts with the code `FF21016`.
- `Connector`: a protocol for chain queries. It has
  `block_info_by_hash(block_hash)`,
  `block_info_by_number(block_number, expected_parent_hash)` and
  `transaction_receipt(transaction_hash)`.
- `ConnectorError(message, reason=None)`: what a connector raises on failure.
  Its `not_found` property is true when `reason` is `ErrorReason.NOT_FOUND`.

```python
from blockconfirm.chaintypes import ConnectorError, ErrorReason

raise ConnectorError("block not found", ErrorReason.NOT_FOUND)
```

### `blockconfirm.blocklistener`

`buffer_channel(target, cancelled)` starts a `BlockBuffer` on a background
thread. It forwards each `BlockHashEvent` to `target.new_block_hashes()`, a
`queue.Queue`, until the `threading.Event` `cancelled` is set. `target` is
anything with that method (`BlockHashConsumer`). It can also be `None`, in
which case events are taken and dropped.

If the consumer's queue is full, the buffer holds on to the last event it
could not deliver and keeps taking new ones. Each new event is then discarded,
and the held event is marked `gap_potential = True`. The held event is a
private copy, so marking it does not change the caller's object. The held
event is delivered as soon as the queue has room.

```python
import queue
import threading

from blockconfirm.blocklistener import buffer_channel
from blockconfirm.chaintypes import BlockHashEvent


class Consumer:
    def __init__(self):
        self.events = queue.Queue(maxsize=1)

    def new_block_hashes(self):
        return self.events


consumer = Consumer()
cancelled = threading.Event()
buffer = buffer_channel(consumer, cancelled)

buffer.put(BlockHashEvent(block_hashes=["0xabc"]))  # returns once the event is taken
cancelled.set()
buffer.wait(timeout=5)  # True once the worker thread has exited
```

`BlockBuffer.put(event)` returns `False` if the worker has already exited and
the event was not taken.

## What this package does not do

It has no component that counts confirmations. Nothing here walks the chain,
fetches receipts, handles forks or calls the `confirmed` and `receipt`
callbacks. The types and the `Connector` protocol describe that work, but
carrying it out is left to the code that uses them. The package also has no
command-line program and no storage.