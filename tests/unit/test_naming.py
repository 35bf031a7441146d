"""
Tests for wire field naming.
"""

import pytest

from cognito_idp_client.runtime.naming import REDACTED, camelize, camelize_keys, redact


@pytest.mark.parametrize("key,expected", [
    ("limit", "Limit"),
    ("attributes_to_get", "AttributesToGet"),
    ("user_pool_id", "UserPoolId"),
    ("UserPoolId", "UserPoolId"),
    ("analytics_endpoint_id", "AnalyticsEndpointId"),
    ("ip_address", "IpAddress"),
    ("", ""),
])
def test_camelize(key, expected):
    assert camelize(key) == expected


def test_flat_configuration():
    assert camelize_keys({"limit": 10, "attributes_to_get": ["email"]}) == {
        "Limit": 10,
        "AttributesToGet": ["email"],
    }


def test_shallow_leaves_nested_keys():
    data = {"analytics_metadata": {"analytics_endpoint_id": "x"}}
    assert camelize_keys(data) == {"AnalyticsMetadata": {"analytics_endpoint_id": "x"}}


def test_deep_converts_nested_mappings_and_lists():
    data = {
        "user_pool_id": "pool1",
        "user_attributes": [{"name": "email", "value": "a@example.com"}],
        "analytics_metadata": {"analytics_endpoint_id": "endpoint"},
        "desired_delivery_mediums": ["EMAIL", "SMS"],
        "force_alias_creation": False,
        "limit": 0,
    }

    assert camelize_keys(data, deep=True) == {
        "UserPoolId": "pool1",
        "UserAttributes": [{"Name": "email", "Value": "a@example.com"}],
        "AnalyticsMetadata": {"AnalyticsEndpointId": "endpoint"},
        "DesiredDeliveryMediums": ["EMAIL", "SMS"],
        "ForceAliasCreation": False,
        "Limit": 0,
    }


def test_top_level_list_of_mappings():
    attributes = [{"name": "email", "value": "a@example.com"}, {"name": "custom:tier", "value": "gold"}]
    assert camelize_keys(attributes) == [
        {"Name": "email", "Value": "a@example.com"},
        {"Name": "custom:tier", "Value": "gold"},
    ]


def test_scalars_unchanged():
    assert camelize_keys("user_pool_id") == "user_pool_id"
    assert camelize_keys(42) == 42
    assert camelize_keys(None) is None


def test_input_not_mutated():
    data = {"user_attributes": [{"name": "email"}]}
    camelize_keys(data, deep=True)
    assert data == {"user_attributes": [{"name": "email"}]}


def test_wire_keys_pass_through():
    data = {"UserPoolId": "pool1", "User": {"ProviderName": "Google"}}
    assert camelize_keys(data, deep=True) == data


def test_redact_masks_secret_fields():
    body = {
        "ClientId": "client1",
        "AuthParameters": {"USERNAME": "alice", "PASSWORD": "hunter2"},
        "AuthenticationResult": {"AccessToken": "a", "IdToken": "i", "ExpiresIn": 3600},
        "Session": "s",
    }

    assert redact(body) == {
        "ClientId": "client1",
        "AuthParameters": {"USERNAME": REDACTED, "PASSWORD": REDACTED},
        "AuthenticationResult": {"AccessToken": REDACTED, "IdToken": REDACTED, "ExpiresIn": 3600},
        "Session": REDACTED,
    }
    assert body["AuthParameters"]["PASSWORD"] == "hunter2"


def test_redact_walks_lists():
    devices = {"Devices": [{"DeviceKey": "k1", "DeviceAttributes": [{"Name": "name", "Value": "phone"}]}]}
    assert redact(devices) == devices
    assert redact([{"Password": "p"}]) == [{"Password": REDACTED}]
