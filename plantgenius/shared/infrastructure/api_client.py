# 📄 File: plantgenius/shared/infrastructure/api_client.py

# 🧭 Purpose (Layman Explanation):
# The messenger that talks to the PlantGenius backend, where profiles, subscriptions
# and daily scan counts are kept, and turns any trouble into a clear error message.

# 🧪 Purpose (Technical Summary):
# Async JSON HTTP client for the document-store REST API with retry on transport
# failures, bearer-token authentication, request logging and normalized error mapping
# (non-2xx -> APIError with the body's message or "API Error: {status}").

# 🔗 Dependencies:
# - httpx: Async HTTP client
# - tenacity: Retry logic and backoff strategies

# 🔄 Connected Modules / Calls From:
# Used by: profile/subscription/scan repository implementations, PaystackService

import logging
import time
from typing import Any, Dict, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from plantgenius.shared.config.settings import Settings, get_settings
from plantgenius.shared.core.exceptions import APIError, ExternalServiceError, NotFoundError
from plantgenius.shared.utils.logging import get_logger

logger = get_logger(__name__)


def extract_error_message(response: httpx.Response) -> str:
    """Human-readable message from an error body, or a status fallback."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value

    return f"API Error: {response.status_code}"


class StoreAPIClient:
    """
    Async HTTP client for the PlantGenius backend.

    Features:
    - Lazy httpx.AsyncClient creation, closed with aclose()
    - Retry with exponential backoff on transport errors only
    - Bearer token authentication once a session exists
    - Normalized APIError / NotFoundError for non-2xx responses
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT
        self.max_retries = max(1, max_retries if max_retries is not None else settings.API_MAX_RETRIES)
        self.user_agent = f"{settings.APP_NAME}/{settings.APP_VERSION}"
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._access_token: Optional[str] = None

    def set_access_token(self, token: Optional[str]) -> None:
        """Attach (or clear) the bearer token sent with every request."""
        self._access_token = token

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    'User-Agent': self.user_agent,
                    'Accept': 'application/json',
                    'Content-Type': 'application/json',
                },
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get(self, endpoint: str) -> Any:
        return await self.request("GET", endpoint)

    async def post(self, endpoint: str, data: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("POST", endpoint, data)

    async def patch(self, endpoint: str, data: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("PATCH", endpoint, data)

    async def request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a JSON request and return the decoded body.

        Raises:
            NotFoundError: on 404
            APIError: on any other non-2xx status
            ExternalServiceError: when the backend is unreachable after retries
        """
        headers = {}
        if self._access_token:
            headers['Authorization'] = f'Bearer {self._access_token}'

        start_time = time.monotonic()
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
                retry=retry_if_exception_type(httpx.TransportError),
                before_sleep=before_sleep_log(logger.logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    response = await self.client.request(
                        method, endpoint, json=data, headers=headers
                    )
        except httpx.TransportError as e:
            logger.error("Backend unreachable", method=method, endpoint=endpoint, error=str(e))
            raise ExternalServiceError(
                f"Network error contacting backend: {e}",
                service="plantgenius-api",
            ) from e

        duration_ms = (time.monotonic() - start_time) * 1000

        if response.is_success:
            logger.debug(
                "Backend request succeeded",
                method=method,
                endpoint=endpoint,
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise APIError(
                    "Invalid JSON in backend response",
                    status_code=response.status_code,
                    endpoint=endpoint,
                ) from e

        message = extract_error_message(response)
        logger.error(
            "Backend API error",
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
            error_message=message,
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(message, endpoint=endpoint)
        raise APIError(message, status_code=response.status_code, endpoint=endpoint)
