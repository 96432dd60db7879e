"""Request generations for discarding stale responses."""


class RequestTracker:
    """Hands out a token per fetch; only the newest one is current.

    A view calls :meth:`begin` before awaiting the backend and applies the
    result only if :meth:`is_current` still holds afterwards. Unmounting
    calls :meth:`invalidate`, so nothing in flight can touch the view until
    the next mount calls :meth:`reset`.
    """

    def __init__(self):
        self._generation = 0
        self._active = True

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, token: int) -> bool:
        return self._active and token == self._generation

    def invalidate(self) -> None:
        self._generation += 1
        self._active = False

    def reset(self) -> None:
        self._active = True
