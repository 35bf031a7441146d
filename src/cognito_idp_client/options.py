"""
Typed options for Cognito IDP operations.

Each operation that takes optional parameters has an options model listing
the fields it recognizes. Builders accept either a model instance or a plain
mapping; unknown keys and invalid values are rejected with ``OptionsError``
before any request is built.

Field names are snake_case and converted to wire names by the builders.
Fields listed in ``literal_field_names`` hold caller-shaped mappings
(auth parameters, client metadata) and are sent with their keys untouched.
"""

from __future__ import annotations
from typing import Any, ClassVar, Dict, FrozenSet, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .runtime.errors import OptionsError
from .runtime.naming import camelize


# =============================================================================
# Shared value types
# =============================================================================

class AttributeType(BaseModel):
    """A user attribute name/value pair, e.g. ``email``."""
    name: str
    value: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class AnalyticsMetadata(BaseModel):
    """Pinpoint analytics metadata attached to user-facing calls."""
    analytics_endpoint_id: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class UserContextData(BaseModel):
    """Device fingerprint data used by advanced security features."""
    encoded_data: Optional[str] = None
    ip_address: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Base class
# =============================================================================

class OperationOptions(BaseModel):
    """
    Base class for per-operation options.

    Subclasses declare fields with ``None`` defaults; only fields that were
    set end up in the request body.
    """

    literal_field_names: ClassVar[FrozenSet[str]] = frozenset()

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def coerce(cls, value: Union["OperationOptions", Mapping[str, Any], None]) -> "OperationOptions":
        """
        Turn ``value`` into an instance of this options class.

        Args:
            value: None, an instance of this class, or a mapping of field names

        Returns:
            Options instance

        Raises:
            OptionsError: If the mapping holds unknown keys or invalid values,
                or value is of another type
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, OperationOptions):
            raise OptionsError(
                f"{cls.__name__} expected, got {type(value).__name__}",
                details={"expected": cls.__name__},
            )
        if not isinstance(value, Mapping):
            raise OptionsError(
                f"options must be a mapping or {cls.__name__}, got {type(value).__name__}",
                details={"expected": cls.__name__},
            )
        try:
            return cls.model_validate(dict(value))
        except ValidationError as e:
            raise OptionsError(
                f"invalid {cls.__name__}: {e.error_count()} error(s)",
                details={"errors": [
                    {"field": ".".join(str(p) for p in err["loc"]), "type": err["type"], "msg": err["msg"]}
                    for err in e.errors()
                ]},
                cause=e,
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        """Set fields other than literal fields, as a snake_case mapping."""
        return self.model_dump(exclude_none=True, exclude=set(self.literal_field_names))

    def literal_fields(self) -> Dict[str, Any]:
        """Set literal fields keyed by wire name, values untouched."""
        result: Dict[str, Any] = {}
        for name in sorted(self.literal_field_names):
            value = getattr(self, name)
            if value is not None:
                result[camelize(name)] = dict(value)
        return result


# =============================================================================
# Administrative operations
# =============================================================================

class AdminCreateUserOptions(OperationOptions):
    """Options for ``AdminCreateUser``."""
    desired_delivery_mediums: Optional[List[str]] = None
    force_alias_creation: Optional[bool] = None
    message_action: Optional[str] = None
    temporary_password: Optional[str] = None
    user_attributes: Optional[List[AttributeType]] = None
    validation_data: Optional[List[AttributeType]] = None
    client_metadata: Optional[Dict[str, str]] = None

    literal_field_names: ClassVar[FrozenSet[str]] = frozenset({"client_metadata"})


class AdminInitiateAuthOptions(OperationOptions):
    """Options for ``AdminInitiateAuth``."""
    analytics_metadata: Optional[AnalyticsMetadata] = None
    auth_parameters: Optional[Dict[str, str]] = None
    client_metadata: Optional[Dict[str, str]] = None

    literal_field_names: ClassVar[FrozenSet[str]] = frozenset({"auth_parameters", "client_metadata"})


class AdminListDevicesOptions(OperationOptions):
    """Options for ``AdminListDevices``."""
    limit: Optional[int] = Field(default=None, ge=0, le=60)


class ListGroupsOptions(OperationOptions):
    """Options for ``ListGroups``, ``AdminListGroupsForUser`` and ``ListUsersInGroup``."""
    limit: Optional[int] = Field(default=None, ge=1, le=60)


class ListUsersOptions(OperationOptions):
    """Options for ``ListUsers``."""
    attributes_to_get: Optional[List[str]] = None
    filter: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=0, le=60)


# =============================================================================
# End-user operations
# =============================================================================

class ChangePasswordOptions(OperationOptions):
    """Options for ``ChangePassword``."""


class ConfirmForgotPasswordOptions(OperationOptions):
    """Options for ``ConfirmForgotPassword``."""
    analytics_metadata: Optional[AnalyticsMetadata] = None
    user_context_data: Optional[UserContextData] = None
    secret_hash: Optional[str] = None
    client_metadata: Optional[Dict[str, str]] = None

    literal_field_names: ClassVar[FrozenSet[str]] = frozenset({"client_metadata"})


class ConfirmSignUpOptions(OperationOptions):
    """Options for ``ConfirmSignUp``."""
    analytics_metadata: Optional[AnalyticsMetadata] = None
    force_alias_creation: Optional[bool] = None
    user_context_data: Optional[UserContextData] = None
    secret_hash: Optional[str] = None
    client_metadata: Optional[Dict[str, str]] = None

    literal_field_names: ClassVar[FrozenSet[str]] = frozenset({"client_metadata"})


class ForgotPasswordOptions(OperationOptions):
    """Options for ``ForgotPassword``."""
    analytics_metadata: Optional[AnalyticsMetadata] = None
    user_context_data: Optional[UserContextData] = None
    secret_hash: Optional[str] = None
    client_metadata: Optional[Dict[str, str]] = None

    literal_field_names: ClassVar[FrozenSet[str]] = frozenset({"client_metadata"})


class InitiateAuthOptions(OperationOptions):
    """Options for ``InitiateAuth``."""
    analytics_metadata: Optional[AnalyticsMetadata] = None
    user_context_data: Optional[UserContextData] = None
    client_metadata: Optional[Dict[str, str]] = None

    literal_field_names: ClassVar[FrozenSet[str]] = frozenset({"client_metadata"})


class ResendConfirmationCodeOptions(OperationOptions):
    """Options for ``ResendConfirmationCode``."""
    analytics_metadata: Optional[AnalyticsMetadata] = None
    user_context_data: Optional[UserContextData] = None
    secret_hash: Optional[str] = None
    client_metadata: Optional[Dict[str, str]] = None

    literal_field_names: ClassVar[FrozenSet[str]] = frozenset({"client_metadata"})


class RespondToAuthChallengeOptions(OperationOptions):
    """Options for ``RespondToAuthChallenge``."""
    analytics_metadata: Optional[AnalyticsMetadata] = None
    user_context_data: Optional[UserContextData] = None
    client_metadata: Optional[Dict[str, str]] = None

    literal_field_names: ClassVar[FrozenSet[str]] = frozenset({"client_metadata"})


class SignUpOptions(OperationOptions):
    """Options for ``SignUp``."""
    analytics_metadata: Optional[AnalyticsMetadata] = None
    user_attributes: Optional[List[AttributeType]] = None
    user_context_data: Optional[UserContextData] = None
    validation_data: Optional[List[AttributeType]] = None
    secret_hash: Optional[str] = None
    client_metadata: Optional[Dict[str, str]] = None

    literal_field_names: ClassVar[FrozenSet[str]] = frozenset({"client_metadata"})


__all__ = [
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
