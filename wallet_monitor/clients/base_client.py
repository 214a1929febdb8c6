"""Base HTTP client shared by the chain clients.

This module wraps a single ``httpx.AsyncClient`` and turns transport, HTTP and
JSON-RPC failures into :class:`UpstreamError` / :class:`UpstreamTimeoutError`.
Requests are not retried here; retrying is left to the caller.
"""

# Standard library imports
import json
from typing import Any, Dict, Optional

# Third-party library imports
import httpx

# Internal imports
from wallet_monitor.logging_config import get_logger
from wallet_monitor.utils.errors import UpstreamError, UpstreamTimeoutError

# Get logger
logger = get_logger(__name__)


class BaseHttpClient:
    """Base client for JSON over HTTP endpoints."""
    
    service_name = "http"
    
    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        headers: Optional[Dict[str, str]] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the client.
        
        Args:
            base_url: Endpoint URL
            timeout: Request timeout in seconds
            headers: Headers sent with every request
            http_client: Optional pre-built ``httpx.AsyncClient`` (tests inject one
                with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Accept": "application/json", **(headers or {})}
        self._http_client = http_client
        self._owns_client = http_client is None
    
    @property
    def http_client(self) -> httpx.AsyncClient:
        """Shared HTTP client, created on first use."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                limits=httpx.Limits(max_keepalive_connections=10, max_connections=20)
            )
        return self._http_client
    
    async def _request_json(
        self,
        method: str,
        path: str = "",
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Any] = None
    ) -> Any:
        """Send a request and decode its JSON body.
        
        Raises:
            UpstreamTimeoutError: If the request timed out
            UpstreamError: On network errors, non-2xx responses or invalid JSON
        """
        url = f"{self.base_url}{path}"
        try:
            response = await self.http_client.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=self.headers
            )
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            logger.warning(f"{self.service_name} request timed out: {method} {url}")
            raise UpstreamTimeoutError(
                f"{self.service_name} request timed out after {self.timeout}s",
                service_name=self.service_name,
                timeout=self.timeout
            ) from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"{self.service_name} returned HTTP {e.response.status_code}: {method} {url}")
            raise UpstreamError(
                f"{self.service_name} returned HTTP {e.response.status_code}",
                service_name=self.service_name,
                details={"status_code": e.response.status_code}
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"{self.service_name} request failed: {str(e)}")
            raise UpstreamError(
                f"{self.service_name} request failed: {str(e)}",
                service_name=self.service_name
            ) from e
        except json.JSONDecodeError as e:
            raise UpstreamError(
                f"{self.service_name} returned invalid JSON",
                service_name=self.service_name
            ) from e
    
    async def close(self) -> None:
        """Close the client and release resources."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class JsonRpcClient(BaseHttpClient):
    """Client for JSON-RPC 2.0 endpoints (EVM nodes, Solana nodes, toncenter)."""
    
    service_name = "json-rpc"
    
    async def _make_request(self, method: str, params: Optional[Any] = None) -> Any:
        """Make a JSON-RPC request.
        
        Args:
            method: The RPC method to call
            params: The parameters to pass to the method
            
        Returns:
            The ``result`` member of the response
            
        Raises:
            UpstreamError: If the node returns an error object
        """
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params if params is not None else []
        }
        
        result = await self._request_json("POST", json_body=payload)
        
        if not isinstance(result, dict):
            raise UpstreamError(
                f"Unexpected {method} response shape",
                service_name=self.service_name
            )
        
        if result.get("error") is not None:
            error = result["error"]
            if isinstance(error, dict):
                message = error.get("message", "Unknown error")
            else:
                message = str(error)
            raise UpstreamError(
                f"{self.service_name} error in {method}: {message}",
                service_name=self.service_name,
                details={"rpc_error": error, "method": method}
            )
        
        if "result" not in result:
            raise UpstreamError(
                f"{self.service_name} response to {method} has no result",
                service_name=self.service_name
            )
        
        return result["result"]
