"""
Cognito IDP Python Client

Typed request builders for the AWS Cognito Identity Provider JSON API, a
requests-based client to execute them, and lazy pagination for list
operations.
"""

from . import operations
from .client import CognitoIdpClient, ClientConfig
from .operation import JsonOperation, NAMESPACE, SERVICE
from .pagination import PageIterator, ContinuationState, paginate, stream_operation
from .crypto import hash_secret
from .runtime.errors import *
from .runtime.naming import camelize, camelize_keys
from .options import *

__version__ = "0.1.0"
__all__ = [
    # Client
    "CognitoIdpClient",
    "ClientConfig",

    # Requests
    "operations",
    "JsonOperation",
    "NAMESPACE",
    "SERVICE",

    # Pagination
    "PageIterator",
    "ContinuationState",
    "paginate",
    "stream_operation",

    # Helpers
    "hash_secret",
    "camelize",
    "camelize_keys",

    # Errors
    "ErrorCode",
    "CognitoIdpError",
    "TransportError",
    "ConnectionFailedError",
    "RequestTimeoutError",
    "ServiceError",
    "AuthenticationError",
    "ResourceNotFoundError",
    "ThrottlingError",
    "InvalidParameterError",
    "ProtocolViolation",
    "OptionsError",

    # Options
    "AttributeType",
    "AnalyticsMetadata",
    "UserContextData",
    "OperationOptions",
    "AdminCreateUserOptions",
    "AdminInitiateAuthOptions",
    "AdminListDevicesOptions",
    "ListGroupsOptions",
    "ListUsersOptions",
    "ChangePasswordOptions",
    "ConfirmForgotPasswordOptions",
    "ConfirmSignUpOptions",
    "ForgotPasswordOptions",
    "InitiateAuthOptions",
    "ResendConfirmationCodeOptions",
    "RespondToAuthChallengeOptions",
    "SignUpOptions",
]
