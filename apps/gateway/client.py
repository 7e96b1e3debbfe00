"""
This module handles communication with the OmniStack gateway.

Every wrapper module in this package builds on GatewayClient:
- Attach the client's API key headers
- Encode query parameters and JSON bodies
- Raise GatewayError on any failure
"""

import logging
from typing import Any, Dict, Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """
    Raised for every failed gateway call

    Attributes:
        message: Human readable message (from the response body when present)
        status_code: HTTP status, or None for timeouts/connection failures
        payload: Decoded error body, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def __str__(self):
        if self.status_code:
            return f"{self.message} (status {self.status_code})"
        return self.message


def clean_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop None values and send booleans the way the gateway expects them."""
    cleaned = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        cleaned[key] = value
    return cleaned


class GatewayClient:

    def __init__(self, api_key: str, base_url: Optional[str] = None, timeout: Optional[int] = None):

        self.api_key = api_key
        self.base_url = (base_url or settings.OMNI_GATEWAY_URL).rstrip('/')
        self.timeout = timeout or settings.OMNI_GATEWAY_TIMEOUT

    def _get_headers(self) -> Dict[str, str]:

        return {
            'Content-Type': 'application/json',
            'x-api-key': self.api_key,
            'client-x-api-key': self.api_key,
        }

    def request(self, method: str, endpoint: str, params: Optional[Dict] = None, data: Any = None) -> Any:

        url = f"{self.base_url}{endpoint}"

        try:
            logger.info(f"Making {method} request to {url}")
            response = requests.request(
                method,
                url,
                headers=self._get_headers(),
                params=clean_params(params),
                json=data,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            error_message = "Request timeout - OmniStack gateway did not respond"
            logger.error(f"{error_message}: {method} {url}")
            raise GatewayError(error_message)
        except requests.exceptions.ConnectionError:
            error_message = "Connection error - Could not reach OmniStack gateway"
            logger.error(f"{error_message}: {method} {url}")
            raise GatewayError(error_message)
        except requests.exceptions.RequestException as e:
            error_message = f"Request error: {str(e)}"
            logger.error(error_message)
            raise GatewayError(error_message)

        logger.info(f"Response status: {response.status_code}")

        if 200 <= response.status_code < 300:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError:
                raise GatewayError("Gateway returned invalid JSON", response.status_code, response.text)

        # API returned error
        error_message = f"Gateway returned {response.status_code}"
        payload = None
        try:
            payload = response.json()
        except ValueError:
            payload = response.text or None

        if isinstance(payload, dict):
            error_message = payload.get('message') or payload.get('error') or error_message
            if isinstance(error_message, list):
                error_message = ', '.join(str(item) for item in error_message)

        logger.error(f"Gateway error on {method} {endpoint}: {error_message}")
        raise GatewayError(str(error_message), response.status_code, payload)

    def get(self, endpoint: str, params: Optional[Dict] = None, data: Any = None) -> Any:
        return self.request('GET', endpoint, params=params, data=data)

    def post(self, endpoint: str, params: Optional[Dict] = None, data: Any = None) -> Any:
        return self.request('POST', endpoint, params=params, data=data)

    def put(self, endpoint: str, params: Optional[Dict] = None, data: Any = None) -> Any:
        return self.request('PUT', endpoint, params=params, data=data)

    def patch(self, endpoint: str, params: Optional[Dict] = None, data: Any = None) -> Any:
        return self.request('PATCH', endpoint, params=params, data=data)

    def delete(self, endpoint: str, params: Optional[Dict] = None, data: Any = None) -> Any:
        return self.request('DELETE', endpoint, params=params, data=data)


def create_gateway(api_key: str) -> GatewayClient:
    return GatewayClient(api_key)


class GatewayAPI:
    """Base of the wrapper objects returned by the create_*_api factories."""

    def __init__(self, api_key: str):
        self.api = create_gateway(api_key)
