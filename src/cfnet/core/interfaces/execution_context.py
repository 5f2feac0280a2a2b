from abc import ABC, abstractmethod
from typing import Any, Callable


class ExecutionContext(ABC):
    """Where completion callbacks of typed requests are delivered."""

    @abstractmethod
    async def deliver(self, callback: Callable[..., Any], *args: Any) -> None:
        """Run ``callback(*args)`` on this context and wait until it has run.

        Must not call the callback inline from the caller's frame, even when
        the caller already runs on this context.
        """
        pass
