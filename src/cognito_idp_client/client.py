"""
Cognito IDP API Client

This module executes ``JsonOperation`` descriptors against the Cognito
Identity Provider JSON 1.1 endpoint, with retries for transient failures,
mapping of service error replies and lazy iteration of list operations.

Request signing is not done here: pass a ``requests`` auth object (for
example a SigV4 signer) as ``auth`` for operations that need developer
credentials. Public user operations such as ``InitiateAuth`` and ``SignUp``
work without one.
"""

from __future__ import annotations
import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional, Union

import requests

from .operation import JsonOperation
from .runtime.naming import redact
from .runtime.errors import (
    CognitoIdpError,
    ConnectionFailedError,
    ErrorCode,
    ErrorHandler,
    ProtocolViolation,
    RequestTimeoutError,
    TransportError,
    error_from_response,
)


@dataclass
class ClientConfig:
    """
    Configuration for the Cognito IDP client.

    ``debug`` logs request and reply bodies, with secrets masked. It sets the
    level of the shared ``cognito_idp_client.client`` logger, so it applies
    to every client in the process.
    """

    region: str = "us-east-1"
    endpoint: Optional[str] = None
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 0.5
    retry_backoff: float = 2.0
    debug: bool = False
    verify_ssl: bool = True
    user_agent: str = "cognito-idp-client-python/0.1.0"

    @property
    def resolved_endpoint(self) -> str:
        """Endpoint URL, derived from the region unless set explicitly."""
        return self.endpoint or f"https://cognito-idp.{self.region}.amazonaws.com/"

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """
        Build a configuration from environment variables.

        Reads ``AWS_REGION`` (or ``AWS_DEFAULT_REGION``),
        ``COGNITO_IDP_ENDPOINT``, ``COGNITO_IDP_TIMEOUT`` and
        ``COGNITO_IDP_MAX_RETRIES``. Keyword arguments take precedence.
        """
        values: Dict[str, Any] = {}
        region = os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION")
        if region:
            values["region"] = region
        if os.environ.get("COGNITO_IDP_ENDPOINT"):
            values["endpoint"] = os.environ["COGNITO_IDP_ENDPOINT"]
        if os.environ.get("COGNITO_IDP_TIMEOUT"):
            values["timeout"] = float(os.environ["COGNITO_IDP_TIMEOUT"])
        if os.environ.get("COGNITO_IDP_MAX_RETRIES"):
            values["max_retries"] = int(os.environ["COGNITO_IDP_MAX_RETRIES"])
        values.update(overrides)
        return cls(**values)


Transport = Callable[[JsonOperation], Dict[str, Any]]


class CognitoIdpClient:
    """
    Cognito IDP API Client

    Example:
        ```python
        from cognito_idp_client import CognitoIdpClient, operations

        with CognitoIdpClient("eu-west-1") as client:
            tokens = client.request(operations.initiate_auth(
                client_id, "USER_PASSWORD_AUTH",
                {"USERNAME": "alice", "PASSWORD": password},
            ))

            for device in client.stream(operations.admin_list_devices(pool_id, "alice")):
                print(device["DeviceKey"])
        ```
    """

    def __init__(self, config: Union[str, ClientConfig, None] = None,
                 auth: Optional[requests.auth.AuthBase] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            config: Region name, ``ClientConfig``, or None for ``ClientConfig.from_env()``
            auth: ``requests`` auth object applied to every request
            session: Optional ``requests.Session`` for connection pooling
        """
        if config is None:
            self.config = ClientConfig.from_env()
        elif isinstance(config, str):
            self.config = ClientConfig(region=config)
        else:
            self.config = config

        self.logger = logging.getLogger(__name__)
        if self.config.debug:
            self.logger.setLevel(logging.DEBUG)

        self.auth = auth

        # Transport for testing - if set, will be used instead of HTTP
        self.transport: Optional[Transport] = None

        self._session = session or requests.Session()
        self._owns_session = session is None

    @property
    def endpoint(self) -> str:
        return self.config.resolved_endpoint

    def close(self) -> None:
        """Close the HTTP session if owned by this client."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> CognitoIdpClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def request(self, operation: JsonOperation) -> Dict[str, Any]:
        """
        Execute an operation once.

        Args:
            operation: Operation built by ``cognito_idp_client.operations``

        Returns:
            Decoded JSON reply

        Raises:
            ServiceError: The service returned an error reply
            TransportError: The endpoint could not be reached
            ProtocolViolation: The reply was not valid JSON
        """
        if self.config.debug:
            self.logger.debug(f"Request: {operation.target} -> {json.dumps(redact(operation.body()), indent=2)}")

        attempt = 0
        while True:
            attempt += 1
            try:
                if self.transport:
                    response = self.transport(operation)
                else:
                    response = self._send(operation)
            except CognitoIdpError as e:
                if not ErrorHandler.is_retryable(e) or attempt > self.config.max_retries:
                    raise
                delay = self.config.retry_delay * (self.config.retry_backoff ** (attempt - 1))
                self.logger.warning(
                    f"{operation.action} attempt {attempt} failed: {e}. Retrying in {delay:.2f}s..."
                )
                time.sleep(delay)
                continue

            if self.config.debug:
                self.logger.debug(f"Response: {json.dumps(redact(response), indent=2)}")
            return response

    def stream(self, operation: JsonOperation) -> Iterator[Any]:
        """
        Iterate over every item of a list operation, fetching pages lazily.

        Each call starts from the first page. Pages are fetched with
        ``request``, so retries apply per page.

        Raises:
            CognitoIdpError: If the operation is not a list operation
        """
        if not operation.is_streamable:
            raise CognitoIdpError(
                f"{operation.action} is not a list operation",
                ErrorCode.NOT_PAGINATED,
                details={"action": operation.action},
            )
        return operation.stream_builder(self.request)

    def _send(self, operation: JsonOperation) -> Dict[str, Any]:
        """POST one operation with the requests library."""
        headers = dict(operation.headers)
        headers["User-Agent"] = self.config.user_agent

        try:
            response = self._session.post(
                self.endpoint,
                data=json.dumps(operation.body()),
                headers=headers,
                auth=self.auth,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(f"{operation.action} timed out", cause=e) from e
        except requests.exceptions.ConnectionError as e:
            raise ConnectionFailedError(f"Connection to {self.endpoint} failed", cause=e) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}", cause=e) from e

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise error_from_response(response.status_code, body)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise ProtocolViolation(
                f"{operation.action} returned invalid JSON",
                details={"status": response.status_code},
                cause=e,
            ) from e


__all__ = [
    "ClientConfig",
    "CognitoIdpClient",
]
