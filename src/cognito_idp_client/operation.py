"""
Request descriptors for the Cognito IDP JSON API.

A ``JsonOperation`` describes one remote call: the action, the JSON body and
the protocol headers. Builders in ``cognito_idp_client.operations`` produce
them; ``CognitoIdpClient`` executes them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple

SERVICE = "cognito-idp"
NAMESPACE = "AWSCognitoIdentityProviderService"
CONTENT_TYPE = "application/x-amz-json-1.1"

Headers = Tuple[Tuple[str, str], ...]
Send = Callable[["JsonOperation"], Dict[str, Any]]
StreamBuilder = Callable[[Send], Iterator[Any]]


def build_headers(action: str) -> Headers:
    """Routing and content headers for an action."""
    return (
        ("x-amz-target", f"{NAMESPACE}.{action}"),
        ("content-type", CONTENT_TYPE),
    )


@dataclass(frozen=True)
class JsonOperation:
    """
    Immutable description of a single JSON API call.

    Instances are hashable on action, headers and service; ``data`` takes
    part in equality only.

    Attributes:
        action: Remote action name, e.g. ``ListUsers``
        data: Request body keyed by wire field name
        headers: ``(name, value)`` header pairs
        stream_builder: For list operations, creates a fresh item iterator
            from a transport callable
        service: Service identifier
    """
    action: str
    data: Mapping[str, Any] = field(default_factory=dict, hash=False)
    headers: Headers = ()
    stream_builder: Optional[StreamBuilder] = field(default=None, compare=False, repr=False)
    service: str = SERVICE

    def __post_init__(self):
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))
        object.__setattr__(self, "headers", tuple(tuple(h) for h in (self.headers or build_headers(self.action))))

    @property
    def target(self) -> str:
        """Value of the ``x-amz-target`` routing header."""
        return dict(self.headers)["x-amz-target"]

    @property
    def is_streamable(self) -> bool:
        return self.stream_builder is not None

    def body(self) -> Dict[str, Any]:
        """Request body as a plain dict, ready for JSON encoding."""
        return dict(self.data)

    def with_data(self, extra: Mapping[str, Any]) -> JsonOperation:
        """
        Return a one-shot copy whose body is ``data`` merged with ``extra``.

        Keys in ``extra`` win. The receiver is left untouched.
        """
        merged = dict(self.data)
        merged.update(extra)
        return JsonOperation(self.action, merged, self.headers, service=self.service)


__all__ = [
    "SERVICE",
    "NAMESPACE",
    "CONTENT_TYPE",
    "JsonOperation",
    "build_headers",
]
