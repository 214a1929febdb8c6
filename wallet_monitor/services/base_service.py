"""
Base service class for wallet monitor services.

This module provides a base class for all services, with common
functionality for logging, timing and bounded concurrency.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, List, Optional


class BaseService:
    """
    Base service class with common functionality.
    
    This class provides:
    - Logging
    - Timing of operations
    - Concurrency-limited gathering
    """
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the base service.
        
        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(self.__class__.__name__)
    
    async def gather_with_concurrency(
        self,
        concurrency_limit: int,
        *tasks: Awaitable[Any],
        return_exceptions: bool = False
    ) -> List[Any]:
        """
        Execute tasks with a concurrency limit.
        
        Args:
            concurrency_limit: Maximum number of tasks to run concurrently
            tasks: Tasks to execute
            return_exceptions: Return exceptions as results instead of raising
            
        Returns:
            List of results from the tasks, in input order
        """
        semaphore = asyncio.Semaphore(concurrency_limit)
        
        async def _wrapped_task(task):
            async with semaphore:
                return await task
        
        return await asyncio.gather(
            *[_wrapped_task(task) for task in tasks],
            return_exceptions=return_exceptions
        )
    
    def log_timing(self, operation_name: str) -> "TimingContextManager":
        """
        Create a context manager to log timing information.
        
        Args:
            operation_name: Name of the operation
            
        Returns:
            Timing context manager
        """
        return TimingContextManager(operation_name, self.logger)


class TimingContextManager:
    """Context manager to log timing information."""
    
    def __init__(self, operation_name: str, logger: logging.Logger):
        self.operation_name = operation_name
        self.logger = logger
        self.start_time = 0.0
    
    async def __aenter__(self) -> "TimingContextManager":
        self.start_time = time.monotonic()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        elapsed = time.monotonic() - self.start_time
        if exc_val is not None:
            self.logger.warning(
                f"{self.operation_name} failed after {elapsed:.2f}s: {str(exc_val)}"
            )
        else:
            self.logger.debug(f"{self.operation_name} completed in {elapsed:.2f}s")
