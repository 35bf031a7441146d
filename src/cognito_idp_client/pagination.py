"""
Lazy pagination over list operations.

List actions return one page of results plus, when more results exist, a
continuation token. ``PageIterator`` turns such an action into a plain
iterator of items: it issues one request per page on demand, echoes the
token from each reply into the next request, and stops when a reply carries
no token.

Example:
    ```python
    from cognito_idp_client import CognitoIdpClient, operations

    with CognitoIdpClient("eu-west-1", auth=signer) as client:
        for user in client.stream(operations.list_users("eu-west-1_abc", {"limit": 60})):
            print(user["Username"])
    ```
"""

from __future__ import annotations
import logging
from collections import deque
from enum import Enum
from typing import Any, Deque, Iterator, List, Mapping, Optional

from .operation import JsonOperation, Headers, Send, build_headers
from .runtime.errors import ProtocolViolation

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_FIELD = "PaginationToken"


class ContinuationState(Enum):
    """Where a ``PageIterator`` is in its page sequence."""
    INITIAL = "initial"
    PENDING = "pending"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class PageIterator:
    """
    Single-pass iterator over the items of a paginated action.

    No request is sent until the first item (or page) is pulled, and at
    most one request is in flight at a time. Each instance owns its token
    and request body, so independent iterators over the same action do not
    affect each other.

    If a page fetch fails the error is raised from that pull, items already
    yielded stay valid, and every later pull signals end of iteration.
    """

    def __init__(
        self,
        send: Send,
        action: str,
        result_key: str,
        base_body: Mapping[str, Any],
        headers: Optional[Headers] = None,
        token_field: str = DEFAULT_TOKEN_FIELD,
    ):
        """
        Args:
            send: Transport callable executing a ``JsonOperation`` and
                returning the decoded reply
            action: Remote action name
            result_key: Reply field holding the page's items
            base_body: Request body sent with every page
            headers: Request headers (defaults to the action's headers)
            token_field: Request/reply field carrying the continuation token
        """
        self._send = send
        self._action = action
        self._result_key = result_key
        self._base_op = JsonOperation(action, base_body, headers or build_headers(action))
        self._token_field = token_field

        self._state = ContinuationState.INITIAL
        self._token: Optional[Any] = None
        self._buffer: Deque[Any] = deque()
        self._pages_fetched = 0

    @property
    def state(self) -> ContinuationState:
        return self._state

    @property
    def pages_fetched(self) -> int:
        """Number of page requests that returned a valid page."""
        return self._pages_fetched

    def next_page(self) -> Optional[List[Any]]:
        """
        Fetch the next page of items.

        Returns:
            The page's items in server order, or None when no pages remain

        Raises:
            ProtocolViolation: If the reply does not contain the result list
        """
        if self._state in (ContinuationState.EXHAUSTED, ContinuationState.FAILED):
            return None

        operation = self._base_op
        if self._token is not None:
            operation = self._base_op.with_data({self._token_field: self._token})
        try:
            response = self._send(operation)
            items, token = self._parse(response)
        except Exception:
            self._state = ContinuationState.FAILED
            self._buffer.clear()
            raise

        self._pages_fetched += 1
        if token is None:
            self._state = ContinuationState.EXHAUSTED
        else:
            self._state = ContinuationState.PENDING
            self._token = token

        logger.debug(
            f"{self._action} page {self._pages_fetched}: {len(items)} {self._result_key}, "
            f"more={self._state is ContinuationState.PENDING}"
        )
        return items

    def _parse(self, response: Any):
        if not isinstance(response, Mapping):
            raise ProtocolViolation(
                f"{self._action} returned a non-object page",
                details={"action": self._action, "response_type": type(response).__name__},
            )
        if self._result_key not in response:
            raise ProtocolViolation(
                f"{self._action} page is missing '{self._result_key}'",
                details={"action": self._action, "fields": sorted(response)},
            )
        items = response[self._result_key]
        if not isinstance(items, list):
            raise ProtocolViolation(
                f"{self._action} '{self._result_key}' is not a list",
                details={"action": self._action, "result_type": type(items).__name__},
            )
        return items, response.get(self._token_field)

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        while not self._buffer:
            page = self.next_page()
            if page is None:
                raise StopIteration
            self._buffer.extend(page)
        return self._buffer.popleft()


def paginate(
    send: Send,
    action: str,
    result_key: str,
    base_body: Mapping[str, Any],
    headers: Optional[Headers] = None,
    token_field: str = DEFAULT_TOKEN_FIELD,
) -> PageIterator:
    """Create a fresh ``PageIterator``; see its documentation."""
    return PageIterator(send, action, result_key, base_body, headers, token_field)


def stream_operation(
    action: str,
    result_key: str,
    data: Mapping[str, Any],
    token_field: str = DEFAULT_TOKEN_FIELD,
) -> JsonOperation:
    """
    Build a list operation.

    The returned descriptor can be sent once like any other operation, and
    its ``stream_builder`` starts a new ``PageIterator`` every time it is
    called.
    """
    headers = build_headers(action)
    body = dict(data)

    def stream_builder(send: Send) -> PageIterator:
        return paginate(send, action, result_key, body, headers, token_field)

    return JsonOperation(action, body, headers, stream_builder=stream_builder)


__all__ = [
    "DEFAULT_TOKEN_FIELD",
    "ContinuationState",
    "PageIterator",
    "paginate",
    "stream_operation",
]
