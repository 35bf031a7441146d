"""
Cognito Identity Provider operations.

One function per remote action. Each builds a ``JsonOperation`` from its
required arguments and optional typed options; nothing is sent. Execute the
result with ``CognitoIdpClient.request``, or, for list operations, iterate
all pages with ``CognitoIdpClient.stream``.

Example:
    ```python
    from cognito_idp_client import operations

    op = operations.admin_get_user("eu-west-1_abc", "alice")
    op.target        # 'AWSCognitoIdentityProviderService.AdminGetUser'
    dict(op.data)    # {'UserPoolId': 'eu-west-1_abc', 'Username': 'alice'}
    ```

Operations marked "Requires developer credentials" must be sent with a
signing ``auth`` configured on the client.
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, Union

from .operation import JsonOperation, build_headers
from .options import (
    OperationOptions,
    AdminCreateUserOptions,
    AdminInitiateAuthOptions,
    AdminListDevicesOptions,
    ListGroupsOptions,
    ListUsersOptions,
    ChangePasswordOptions,
    ConfirmForgotPasswordOptions,
    ConfirmSignUpOptions,
    ForgotPasswordOptions,
    InitiateAuthOptions,
    ResendConfirmationCodeOptions,
    RespondToAuthChallengeOptions,
    SignUpOptions,
)
from .pagination import stream_operation
from .runtime.naming import camelize_keys

OptionsLike = Union[OperationOptions, Mapping[str, Any], None]
Attributes = Sequence[Mapping[str, Any]]


def _request(action: str, data: Mapping[str, Any]) -> JsonOperation:
    return JsonOperation(action, data, build_headers(action))


def _merge(required: Mapping[str, Any], options: OptionsLike,
           options_cls: Type[OperationOptions]) -> Dict[str, Any]:
    """Merge required arguments with validated options into a wire body."""
    opts = options_cls.coerce(options)
    merged = dict(opts.to_dict())
    merged.update(required)
    data = camelize_keys(merged, deep=True)
    data.update(opts.literal_fields())
    return data


def _attributes(attributes: Attributes) -> List[Dict[str, Any]]:
    return camelize_keys(list(attributes))


# =============================================================================
# Administrative operations
# =============================================================================

def add_custom_attributes(user_pool_id: str, custom_attributes: Attributes) -> JsonOperation:
    """
    Add custom attributes to the user pool schema.

    ``custom_attributes`` are schema definitions such as
    ``{"name": "tier", "attribute_data_type": "String", "mutable": True}``;
    nested constraint mappings are converted as well.
    """
    data = {
        "UserPoolId": user_pool_id,
        "CustomAttributes": camelize_keys(list(custom_attributes), deep=True),
    }
    return _request("AddCustomAttributes", data)


def admin_add_user_to_group(user_pool_id: str, username: str, group_name: str) -> JsonOperation:
    """
    Add the user to the group.

    Requires developer credentials.
    """
    data = {"UserPoolId": user_pool_id, "Username": username, "GroupName": group_name}
    return _request("AdminAddUserToGroup", data)


def admin_confirm_sign_up(user_pool_id: str, username: str) -> JsonOperation:
    """
    Confirm a registration without a confirmation code.

    Requires developer credentials.
    """
    data = {"UserPoolId": user_pool_id, "Username": username}
    return _request("AdminConfirmSignUp", data)


def admin_create_user(user_pool_id: str, username: str, options: OptionsLike = None) -> JsonOperation:
    """
    Create a user and send the welcome message configured for the pool.

    Requires developer credentials.

    Args:
        user_pool_id: User pool ID
        username: Name of the new user
        options: ``AdminCreateUserOptions`` or equivalent mapping

    Returns:
        Operation for ``AdminCreateUser``
    """
    data = _merge({"user_pool_id": user_pool_id, "username": username}, options, AdminCreateUserOptions)
    return _request("AdminCreateUser", data)


def admin_delete_user(user_pool_id: str, username: str) -> JsonOperation:
    """Requires developer credentials."""
    data = {"UserPoolId": user_pool_id, "Username": username}
    return _request("AdminDeleteUser", data)


def admin_delete_user_attributes(user_pool_id: str, username: str,
                                 attribute_names: Sequence[str]) -> JsonOperation:
    """Delete the named attributes of a user. Requires developer credentials."""
    data = {
        "UserPoolId": user_pool_id,
        "Username": username,
        "UserAttributeNames": list(attribute_names),
    }
    return _request("AdminDeleteUserAttributes", data)


def admin_disable_provider_for_user(user_pool_id: str, provider_name: str,
                                    provider_attribute_name: str,
                                    provider_attribute_value: str) -> JsonOperation:
    """
    Stop a user from signing in through an external (SAML or social) provider.

    Requires developer credentials.
    """
    data = {
        "UserPoolId": user_pool_id,
        "User": {
            "ProviderName": provider_name,
            "ProviderAttributeName": provider_attribute_name,
            "ProviderAttributeValue": provider_attribute_value,
        },
    }
    return _request("AdminDisableProviderForUser", data)


def admin_disable_user(user_pool_id: str, username: str) -> JsonOperation:
    """Requires developer credentials."""
    data = {"UserPoolId": user_pool_id, "Username": username}
    return _request("AdminDisableUser", data)


def admin_enable_user(user_pool_id: str, username: str) -> JsonOperation:
    """Requires developer credentials."""
    data = {"UserPoolId": user_pool_id, "Username": username}
    return _request("AdminEnableUser", data)


def admin_forget_device(user_pool_id: str, username: str, device_key: str) -> JsonOperation:
    """Requires developer credentials."""
    data = {"UserPoolId": user_pool_id, "Username": username, "DeviceKey": device_key}
    return _request("AdminForgetDevice", data)


def admin_get_device(user_pool_id: str, username: str, device_key: str) -> JsonOperation:
    """Requires developer credentials."""
    data = {"UserPoolId": user_pool_id, "Username": username, "DeviceKey": device_key}
    return _request("AdminGetDevice", data)


def admin_get_user(user_pool_id: str, username: str) -> JsonOperation:
    """
    Get a user by user name.

    Requires developer credentials.
    """
    data = {"UserPoolId": user_pool_id, "Username": username}
    return _request("AdminGetUser", data)


def admin_initiate_auth(user_pool_id: str, client_id: str, auth_flow: str,
                        options: OptionsLike = None) -> JsonOperation:
    """
    Start an authentication flow as an administrator.

    ``auth_parameters`` and ``client_metadata`` are sent exactly as given,
    so keys like ``USERNAME`` and ``SECRET_HASH`` keep their spelling.

    Requires developer credentials.
    """
    required = {"user_pool_id": user_pool_id, "client_id": client_id, "auth_flow": auth_flow}
    data = _merge(required, options, AdminInitiateAuthOptions)
    return _request("AdminInitiateAuth", data)


def admin_list_devices(user_pool_id: str, username: str, options: OptionsLike = None) -> JsonOperation:
    """
    List a user's remembered devices.

    Requires developer credentials. Can be used with
    ``CognitoIdpClient.stream`` to get all results.
    """
    data = _merge({"user_pool_id": user_pool_id, "username": username}, options, AdminListDevicesOptions)
    return stream_operation("AdminListDevices", "Devices", data)


def admin_list_groups_for_user(user_pool_id: str, username: str, options: OptionsLike = None) -> JsonOperation:
    """
    List the groups a user belongs to.

    Requires developer credentials. Can be used with
    ``CognitoIdpClient.stream`` to get all results.
    """
    data = _merge({"user_pool_id": user_pool_id, "username": username}, options, ListGroupsOptions)
    return stream_operation("AdminListGroupsForUser", "Groups", data, token_field="NextToken")


def admin_remove_user_from_group(user_pool_id: str, username: str, group_name: str) -> JsonOperation:
    """Requires developer credentials."""
    data = {"UserPoolId": user_pool_id, "Username": username, "GroupName": group_name}
    return _request("AdminRemoveUserFromGroup", data)


def admin_reset_user_password(user_pool_id: str, username: str) -> JsonOperation:
    """
    Reset a user's password; the user must set a new one at next sign-in.

    Requires developer credentials.
    """
    data = {"UserPoolId": user_pool_id, "Username": username}
    return _request("AdminResetUserPassword", data)


def admin_update_user_attributes(user_pool_id: str, username: str, attributes: Attributes) -> JsonOperation:
    """
    Update a user's attributes, developer attributes included.

    Custom attribute names need the ``custom:`` prefix. Can also mark
    ``email`` and ``phone_number`` as verified.

    Requires developer credentials.
    """
    data = {"UserPoolId": user_pool_id, "Username": username, "UserAttributes": _attributes(attributes)}
    return _request("AdminUpdateUserAttributes", data)


def admin_user_global_sign_out(user_pool_id: str, username: str) -> JsonOperation:
    """Sign a user out of all devices. Requires developer credentials."""
    data = {"UserPoolId": user_pool_id, "Username": username}
    return _request("AdminUserGlobalSignOut", data)


def describe_user_pool(user_pool_id: str) -> JsonOperation:
    data = {"UserPoolId": user_pool_id}
    return _request("DescribeUserPool", data)


def list_groups(user_pool_id: str, options: OptionsLike = None) -> JsonOperation:
    """
    List the groups of a user pool.

    Requires developer credentials. Can be used with
    ``CognitoIdpClient.stream`` to get all results.
    """
    data = _merge({"user_pool_id": user_pool_id}, options, ListGroupsOptions)
    return stream_operation("ListGroups", "Groups", data, token_field="NextToken")


def list_users(user_pool_id: str, options: OptionsLike = None) -> JsonOperation:
    """
    List the users in a user pool.

    Can be used with ``CognitoIdpClient.stream`` to get all results.

    Args:
        user_pool_id: User pool ID
        options: ``ListUsersOptions`` or mapping with ``attributes_to_get``,
            ``filter`` and ``limit`` (0 to 60 per page)

    Returns:
        List operation with result key ``Users``
    """
    data = _merge({"user_pool_id": user_pool_id}, options, ListUsersOptions)
    return stream_operation("ListUsers", "Users", data)


def list_users_in_group(user_pool_id: str, group_name: str, options: OptionsLike = None) -> JsonOperation:
    """
    List the users in a group.

    Requires developer credentials. Can be used with
    ``CognitoIdpClient.stream`` to get all results.
    """
    data = _merge({"user_pool_id": user_pool_id, "group_name": group_name}, options, ListGroupsOptions)
    return stream_operation("ListUsersInGroup", "Users", data, token_field="NextToken")


# =============================================================================
# End-user operations
# =============================================================================

def change_password(access_token: str, previous_password: str, proposed_password: str,
                    options: OptionsLike = None) -> JsonOperation:
    required = {
        "access_token": access_token,
        "previous_password": previous_password,
        "proposed_password": proposed_password,
    }
    data = _merge(required, options, ChangePasswordOptions)
    return _request("ChangePassword", data)


def confirm_forgot_password(user_pool_id: str, client_id: str, username: str,
                            confirmation_code: str, password: str,
                            options: OptionsLike = None) -> JsonOperation:
    """Set a new password using the code sent by ``forgot_password``."""
    required = {
        "user_pool_id": user_pool_id,
        "client_id": client_id,
        "username": username,
        "confirmation_code": confirmation_code,
        "password": password,
    }
    data = _merge(required, options, ConfirmForgotPasswordOptions)
    return _request("ConfirmForgotPassword", data)


def confirm_sign_up(user_pool_id: str, client_id: str, username: str, confirmation_code: str,
                    options: OptionsLike = None) -> JsonOperation:
    """Confirm a registration with the code the user received."""
    required = {
        "user_pool_id": user_pool_id,
        "client_id": client_id,
        "username": username,
        "confirmation_code": confirmation_code,
    }
    data = _merge(required, options, ConfirmSignUpOptions)
    return _request("ConfirmSignUp", data)


def forgot_password(user_pool_id: str, client_id: str, username: str,
                    options: OptionsLike = None) -> JsonOperation:
    """
    Send the user a code to reset a forgotten password.

    The code goes to the verified phone number if there is one, otherwise to
    the verified email. Complete the reset with ``confirm_forgot_password``.
    """
    required = {"user_pool_id": user_pool_id, "client_id": client_id, "username": username}
    data = _merge(required, options, ForgotPasswordOptions)
    return _request("ForgotPassword", data)


def get_user(access_token: str) -> JsonOperation:
    """Get the user that owns ``access_token``."""
    data = {"AccessToken": access_token}
    return _request("GetUser", data)


def initiate_auth(client_id: str, auth_flow: str, auth_parameters: Mapping[str, str],
                  options: OptionsLike = None) -> JsonOperation:
    """
    Start an authentication flow as a user.

    ``auth_parameters`` is sent exactly as given.
    """
    data = _merge({"client_id": client_id, "auth_flow": auth_flow}, options, InitiateAuthOptions)
    data["AuthParameters"] = dict(auth_parameters)
    return _request("InitiateAuth", data)


def resend_confirmation_code(user_pool_id: str, client_id: str, username: str,
                             options: OptionsLike = None) -> JsonOperation:
    required = {"user_pool_id": user_pool_id, "client_id": client_id, "username": username}
    data = _merge(required, options, ResendConfirmationCodeOptions)
    return _request("ResendConfirmationCode", data)


def respond_to_auth_challenge(client_id: str, challenge_name: str, session: str,
                              challenge_responses: Mapping[str, str],
                              options: OptionsLike = None) -> JsonOperation:
    """
    Answer an authentication challenge.

    ``challenge_responses`` is sent exactly as given, e.g.
    ``{"USERNAME": "alice", "NEW_PASSWORD": "..."}``.
    """
    required = {"client_id": client_id, "challenge_name": challenge_name, "session": session}
    data = _merge(required, options, RespondToAuthChallengeOptions)
    data["ChallengeResponses"] = dict(challenge_responses)
    return _request("RespondToAuthChallenge", data)


def sign_up(user_pool_id: str, client_id: str, password: str, username: str,
            options: OptionsLike = None) -> JsonOperation:
    """Register a user with a user name, password and attributes."""
    required = {
        "user_pool_id": user_pool_id,
        "client_id": client_id,
        "username": username,
        "password": password,
    }
    data = _merge(required, options, SignUpOptions)
    return _request("SignUp", data)


def update_user_attributes(access_token: str, attributes: Attributes) -> JsonOperation:
    data = {"AccessToken": access_token, "UserAttributes": _attributes(attributes)}
    return _request("UpdateUserAttributes", data)


__all__ = [
    "add_custom_attributes",
    "admin_add_user_to_group",
    "admin_confirm_sign_up",
    "admin_create_user",
    "admin_delete_user",
    "admin_delete_user_attributes",
    "admin_disable_provider_for_user",
    "admin_disable_user",
    "admin_enable_user",
    "admin_forget_device",
    "admin_get_device",
    "admin_get_user",
    "admin_initiate_auth",
    "admin_list_devices",
    "admin_list_groups_for_user",
    "admin_remove_user_from_group",
    "admin_reset_user_password",
    "admin_update_user_attributes",
    "admin_user_global_sign_out",
    "describe_user_pool",
    "list_groups",
    "list_users",
    "list_users_in_group",
    "change_password",
    "confirm_forgot_password",
    "confirm_sign_up",
    "forgot_password",
    "get_user",
    "initiate_auth",
    "resend_confirmation_code",
    "respond_to_auth_challenge",
    "sign_up",
    "update_user_attributes",
]
