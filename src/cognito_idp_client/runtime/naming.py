"""
Wire field naming.

The Cognito IDP JSON protocol uses UpperCamelCase field names. Callers work
with snake_case names; these helpers convert between the two. ``redact``
masks secret values in wire-form bodies before they are logged.
"""

from __future__ import annotations
from typing import Any, Mapping


def camelize(key: str) -> str:
    """
    Convert a snake_case key to UpperCamelCase.

    Only the first character of each underscore-separated segment is
    upper-cased, so keys already in wire form are returned unchanged.

    Examples:
        >>> camelize("attributes_to_get")
        'AttributesToGet'
        >>> camelize("UserPoolId")
        'UserPoolId'
    """
    return "".join(part[:1].upper() + part[1:] for part in str(key).split("_"))


def camelize_keys(value: Any, deep: bool = False) -> Any:
    """
    Convert mapping keys to wire form.

    Args:
        value: Mapping, list/tuple of values, or scalar
        deep: Also convert keys of mappings nested inside mapping values

    Returns:
        A new structure; the input is not modified. Scalars are returned as is.
    """
    if isinstance(value, Mapping):
        return {
            camelize(k): camelize_keys(v, deep=True) if deep else v
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [camelize_keys(item, deep=deep) for item in value]
    return value


# Fields whose values are credentials or one-time secrets
SENSITIVE_FIELDS = frozenset({
    "AccessToken",
    "ClientSecret",
    "ConfirmationCode",
    "IdToken",
    "Password",
    "PreviousPassword",
    "ProposedPassword",
    "RefreshToken",
    "SecretHash",
    "Session",
    "TemporaryPassword",
})

# Free-form parameter maps; every value inside them is masked
SENSITIVE_MAPS = frozenset({"AuthParameters", "ChallengeResponses"})

REDACTED = "***"


def redact(value: Any) -> Any:
    """
    Copy a request or reply body with secret values masked, for logging.

    Keys are kept so the shape of the body stays visible.
    """
    if isinstance(value, Mapping):
        masked = {}
        for k, v in value.items():
            if k in SENSITIVE_FIELDS:
                masked[k] = REDACTED
            elif k in SENSITIVE_MAPS and isinstance(v, Mapping):
                masked[k] = {ik: REDACTED for ik in v}
            else:
                masked[k] = redact(v)
        return masked
    if isinstance(value, (list, tuple)):
        return [redact(item) for item in value]
    return value


__all__ = ["camelize", "camelize_keys", "redact", "REDACTED"]
