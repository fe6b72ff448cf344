"""Data types shared between the block listener, the confirmation manager and connectors."""

from __future__ import annotations

import dataclasses
import enum
import threading
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

INVALID_CONFIRMATION_REQUEST_CODE = "FF21016"


@dataclass
class BlockHashEvent:
    """A batch of new block hashes reported by a connector."""

    block_hashes: list[str] = field(default_factory=list)
    gap_potential: bool = False


class ErrorReason(str, enum.Enum):
    """Well-known reasons a connector can attach to a failure."""

    NOT_FOUND = "not_found"


class ConnectorError(Exception):
    """Raised by a connector when a request fails."""

    def __init__(self, message: str, reason: ErrorReason | None = None) -> None:
        super().__init__(message)
        self.reason = reason

    @property
    def not_found(self) -> bool:
        """True when the connector reported that the item does not exist."""
        return self.reason is ErrorReason.NOT_FOUND


class InvalidConfirmationRequest(ValueError):
    """Raised when a notification is missing the fields its type requires."""

    def __init__(self, notification: Notification) -> None:
        super().__init__(
            f"{INVALID_CONFIRMATION_REQUEST_CODE}: Invalid confirmation request {notification!r}"
        )
        self.notification = notification


@dataclass
class EventID:
    """Identifies an event log emitted on the chain for a listener."""

    listener_id: uuid.UUID | None = None
    transaction_hash: str = ""
    block_hash: str = ""
    block_number: int = 0
    transaction_index: int = 0
    log_index: int = 0


@dataclass
class BlockInfo:
    """Header details of a block."""

    block_number: int
    block_hash: str
    parent_hash: str
    transaction_hashes: list[str] = field(default_factory=list)

    def without_transactions(self) -> BlockInfo:
        """Return a copy of this block without its transaction hashes."""
        return dataclasses.replace(self, transaction_hashes=[])


@dataclass
class TransactionReceipt:
    """The receipt of a mined transaction."""

    block_number: int
    block_hash: str
    transaction_index: int = 0
    success: bool = False


class NotificationType(enum.IntEnum):
    """Kinds of notification the confirmation manager accepts."""

    NEW_EVENT_LOG = 0
    REMOVED_EVENT_LOG = 1
    NEW_TRANSACTION = 2
    REMOVED_TRANSACTION = 3
    LISTENER_REMOVED = 4


ConfirmedCallback = Callable[[list[BlockInfo]], None]
ReceiptCallback = Callable[[TransactionReceipt], None]


@dataclass
class EventInfo:
    """An event awaiting confirmation, with the callback to run once confirmed."""

    id: EventID | None
    confirmed: ConfirmedCallback | None = None


@dataclass
class TransactionInfo:
    """A transaction awaiting a receipt and confirmation."""

    transaction_hash: str = ""
    receipt: ReceiptCallback | None = None
    confirmed: ConfirmedCallback | None = None


@dataclass
class RemovedListenerInfo:
    """A listener being removed; ``completed`` is set once its pending work is purged."""

    listener_id: uuid.UUID | None = None
    completed: threading.Event | None = None


@dataclass
class Notification:
    """A request to the confirmation manager."""

    notification_type: NotificationType | int
    event: EventInfo | None = None
    transaction: TransactionInfo | None = None
    removed_listener: RemovedListenerInfo | None = None

    def validate(self) -> None:
        """Raise InvalidConfirmationRequest if required fields for the type are missing."""
        kind = self.notification_type
        if kind in (NotificationType.NEW_EVENT_LOG, NotificationType.REMOVED_EVENT_LOG):
            event = self.event
            if (
                event is None
                or event.id is None
                or event.id.listener_id is None
                or not event.id.transaction_hash
                or not event.id.block_hash
            ):
                raise InvalidConfirmationRequest(self)
        elif kind in (NotificationType.NEW_TRANSACTION, NotificationType.REMOVED_TRANSACTION):
            if self.transaction is None or not self.transaction.transaction_hash:
                raise InvalidConfirmationRequest(self)
        elif kind == NotificationType.LISTENER_REMOVED:
            if self.removed_listener is None or self.removed_listener.completed is None:
                raise InvalidConfirmationRequest(self)


class Connector(Protocol):
    """The blockchain queries the confirmation manager needs.

    Each method raises ConnectorError on failure, with reason NOT_FOUND when
    the requested item does not exist.
    """

    def block_info_by_hash(self, block_hash: str) -> BlockInfo:
        """Return the header of the block with the given hash."""
        ...

    def block_info_by_number(self, block_number: int, expected_parent_hash: str) -> BlockInfo:
        """Return the header of the block at the given height."""
        ...

    def transaction_receipt(self, transaction_hash: str) -> TransactionReceipt:
        """Return the receipt of the given transaction."""
        ...