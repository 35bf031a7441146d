"""Runtime helpers for the Cognito IDP client"""

from .errors import CognitoIdpError, ProtocolViolation, OptionsError
from .naming import camelize, camelize_keys, redact

__all__ = [
    "CognitoIdpError",
    "ProtocolViolation",
    "OptionsError",
    "camelize",
    "camelize_keys",
    "redact",
]
