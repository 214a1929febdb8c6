"""Background driver that runs the watchlist evaluation cycle on a timer."""

import asyncio
import logging
from typing import Optional

from wallet_monitor.services.wallet_service import WalletService


class WatchlistPoller:
    """Periodically evaluates the watchlist through a :class:`WalletService`."""
    
    def __init__(
        self,
        wallet_service: WalletService,
        interval: float,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the poller.
        
        Args:
            wallet_service: Service running the evaluation cycle
            interval: Seconds between cycles, must be positive
            logger: Optional logger instance
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.wallet_service = wallet_service
        self.interval = interval
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.cycles = 0
        self._task: Optional[asyncio.Task] = None
    
    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()
    
    async def start(self) -> None:
        """Start the polling task."""
        if not self.running:
            self._task = asyncio.create_task(self._poll_loop())
            self.logger.info(f"Watchlist poller started, interval {self.interval}s")
    
    async def stop(self) -> None:
        """Stop the polling task."""
        if self.running:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
    
    async def run_once(self) -> None:
        """Run a single evaluation cycle and log its outcome."""
        report = await self.wallet_service.get_watched_wallets()
        self.cycles += 1
        if report.failures:
            self.logger.warning(
                f"Watchlist cycle finished with {len(report.failures)} failed wallet(s)"
            )
        self.logger.debug(
            f"Watchlist cycle evaluated {len(report.wallets)} wallet(s), "
            f"{report.alerts_created} alert(s)"
        )
    
    async def _poll_loop(self) -> None:
        while True:
            try:
                await asyncio.sleep(self.interval)
                await self.run_once()
            except asyncio.CancelledError:
                break
            except Exception as e:
                self.logger.error(f"Error in watchlist poll: {str(e)}")
