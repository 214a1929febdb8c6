"""
Error handling utilities for the wallet monitor.

This module defines the exception hierarchy shared by the chain providers,
the cache layer, the store and the HTTP surface.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for the wallet monitor API."""
    
    # General errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    
    # Input errors
    INVALID_ADDRESS = "INVALID_ADDRESS"
    
    # Data source errors
    PROVIDER_UNAVAILABLE = "PROVIDER_UNAVAILABLE"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    
    # Internal errors
    CACHE_COMPUTE_FAILURE = "CACHE_COMPUTE_FAILURE"
    STORAGE_ERROR = "STORAGE_ERROR"


class WalletMonitorError(Exception):
    """Base exception for all wallet monitor errors."""
    
    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize a new wallet monitor error.
        
        Args:
            message: Error message
            code: Error code
            status_code: HTTP status code
            details: Additional error details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)
    
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the error to a dictionary.
        
        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details
        }


class ConfigurationError(WalletMonitorError):
    """Exception for invalid or missing configuration."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code=ErrorCode.CONFIGURATION_ERROR,
            status_code=500,
            details=details
        )


class InvalidAddressError(WalletMonitorError):
    """Exception for wallet addresses with invalid syntax."""
    
    def __init__(self, address: str, network: Optional[str] = None):
        if network:
            message = f"Invalid {network} address: {address}"
        else:
            message = f"Invalid wallet address: {address}"
        details: Dict[str, Any] = {"address": address}
        if network:
            details["network"] = network
        super().__init__(
            message=message,
            code=ErrorCode.INVALID_ADDRESS,
            status_code=400,
            details=details
        )
        self.address = address


class ProviderUnavailableError(WalletMonitorError):
    """Exception raised when a data source cannot be used (e.g. missing API key)."""
    
    def __init__(self, message: str, network: str, capability: str):
        super().__init__(
            message=message,
            code=ErrorCode.PROVIDER_UNAVAILABLE,
            status_code=503,
            details={"network": network, "capability": capability}
        )


class UpstreamError(WalletMonitorError):
    """Exception for failed RPC, explorer or indexer calls."""
    
    def __init__(
        self,
        message: str,
        service_name: str,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.UPSTREAM_ERROR,
        status_code: int = 502
    ):
        error_details = details or {}
        error_details["service_name"] = service_name
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
            details=error_details
        )


class UpstreamTimeoutError(UpstreamError):
    """Exception for upstream calls that timed out."""
    
    def __init__(self, message: str, service_name: str, timeout: float):
        super().__init__(
            message=message,
            service_name=service_name,
            details={"timeout": timeout},
            code=ErrorCode.UPSTREAM_TIMEOUT,
            status_code=504
        )


class CacheComputeError(WalletMonitorError):
    """Exception wrapping an unexpected failure of a cache compute function."""
    
    def __init__(self, message: str, key: str):
        super().__init__(
            message=message,
            code=ErrorCode.CACHE_COMPUTE_FAILURE,
            status_code=500,
            details={"key": key}
        )


class StorageError(WalletMonitorError):
    """Exception for failures of the backing key-value store."""
    
    def __init__(self, message: str, operation: str):
        super().__init__(
            message=message,
            code=ErrorCode.STORAGE_ERROR,
            status_code=503,
            details={"operation": operation}
        )
