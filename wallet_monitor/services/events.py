"""Balance change notifications.

The change detector hands every detected change to a
:class:`BalanceChangeNotifier`; downstream consumers register callbacks on it
instead of listening on a global event bus.
"""

import logging
from typing import Awaitable, Callable, List, Optional

from wallet_monitor.models import BalanceAlert

WALLET_BALANCE_CHANGED = "wallet.balance.changed"

# Payload of a balance change notification
BalanceChangedEvent = BalanceAlert

BalanceChangeHandler = Callable[[BalanceChangedEvent], Awaitable[None]]


class BalanceChangeNotifier:
    """Callback registry for balance change notifications."""
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._handlers: List[BalanceChangeHandler] = []
    
    def subscribe(self, handler: BalanceChangeHandler) -> None:
        """Register an async handler."""
        if handler not in self._handlers:
            self._handlers.append(handler)
    
    def unsubscribe(self, handler: BalanceChangeHandler) -> None:
        """Remove a previously registered handler."""
        if handler in self._handlers:
            self._handlers.remove(handler)
    
    async def publish(self, event: BalanceChangedEvent) -> None:
        """
        Deliver an event to every handler in registration order.
        
        A failing handler is logged and does not prevent delivery to the others.
        """
        for handler in list(self._handlers):
            try:
                await handler(event)
            except Exception:
                self.logger.exception(
                    f"{WALLET_BALANCE_CHANGED} handler {getattr(handler, '__name__', handler)} failed"
                )


def make_logging_handler(logger: logging.Logger) -> BalanceChangeHandler:
    """Build a handler that logs every balance change."""
    
    async def log_balance_change(event: BalanceChangedEvent) -> None:
        logger.warning(
            f"Balance changed for {event.address} on {event.network}: "
            f"{event.previous_balance} -> {event.current_balance} {event.symbol}"
        )
    
    return log_balance_change
