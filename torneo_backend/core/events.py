# events.py
# In-process publish/subscribe for collection snapshots.

from collections import defaultdict
from typing import Any, Callable, Dict, List

Listener = Callable[[str, Any], None]


class SnapshotHub:
    """
    Delivers the fresh value of a collection to every subscriber after a write.
    Listeners registered for "*" receive every collection.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def subscribe(self, collection: str, listener: Listener) -> Callable[[], None]:
        """Registers a listener and returns the function that removes it."""
        self._listeners[collection].append(listener)

        def unsubscribe():
            if listener in self._listeners[collection]:
                self._listeners[collection].remove(listener)

        return unsubscribe

    def publish(self, collection: str, value: Any) -> None:
        for listener in list(self._listeners[collection]) + list(self._listeners["*"]):
            listener(collection, value)

