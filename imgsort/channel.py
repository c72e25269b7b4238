"""Zero-capacity handoff channel connecting two pipeline stages."""

import queue
import threading
from typing import Generic, Iterator, TypeVar
import logging

from .errors import ChannelClosedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Marks the end of the stream inside the queue
_CLOSED = object()


class HandoffChannel(Generic[T]):
    """
    Synchronous channel between one producer and one consumer.

    ``send`` returns only once the consumer has taken the item, so a
    producer can never run ahead of its consumer. Closing the channel is
    the only way the consumer learns that the producer is done.
    """

    def __init__(self, name: str = "channel") -> None:
        """
        Initialize an open, empty channel.

        Args:
            name: Label used in log messages
        """
        self.name = name
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=1)
        self._lock = threading.Lock()
        self._closed = False
        self._drained = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, item: T) -> None:
        """
        Hand one item to the consumer, blocking until it is received.

        Raises:
            ChannelClosedError: If the channel was closed
        """
        if self._closed:
            raise ChannelClosedError(f"send on closed channel: {self.name}")
        self._queue.put(item)
        self._queue.join()

    def close(self) -> None:
        """Signal that no more items will be sent."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        logger.debug(f"Closing {self.name}")
        self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[T]:
        """Yield items in the order they were sent until the channel is closed."""
        while not self._drained:
            item = self._queue.get()
            self._queue.task_done()
            if item is _CLOSED:
                self._drained = True
                return
            yield item  # type: ignore[misc]
