"""
Unit tests for CognitoIdpClient.

Tests configuration, HTTP request shape, error mapping, retry behavior and
list streaming through the client.
"""

import json
import logging
from unittest.mock import patch

import pytest
import requests

from cognito_idp_client import CognitoIdpClient, ClientConfig, operations
from cognito_idp_client.runtime.errors import (
    AuthenticationError,
    CognitoIdpError,
    ConnectionFailedError,
    ErrorCode,
    InvalidParameterError,
    ProtocolViolation,
    RequestTimeoutError,
    ResourceNotFoundError,
    ServiceError,
    ThrottlingError,
    TransportError,
)
from helpers import RecordingSession


# =============================================================================
# Configuration
# =============================================================================

class TestClientConfig:

    def test_defaults(self):
        config = ClientConfig()
        assert config.region == "us-east-1"
        assert config.resolved_endpoint == "https://cognito-idp.us-east-1.amazonaws.com/"
        assert config.timeout == 30.0
        assert config.max_retries == 3

    def test_explicit_endpoint(self):
        config = ClientConfig(endpoint="http://localhost:9229/")
        assert config.resolved_endpoint == "http://localhost:9229/"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("AWS_REGION", "eu-central-1")
        monkeypatch.setenv("COGNITO_IDP_TIMEOUT", "5")
        monkeypatch.setenv("COGNITO_IDP_MAX_RETRIES", "0")
        monkeypatch.delenv("COGNITO_IDP_ENDPOINT", raising=False)

        config = ClientConfig.from_env()

        assert config.region == "eu-central-1"
        assert config.timeout == 5.0
        assert config.max_retries == 0
        assert config.resolved_endpoint == "https://cognito-idp.eu-central-1.amazonaws.com/"

    def test_from_env_default_region_and_overrides(self, monkeypatch):
        monkeypatch.delenv("AWS_REGION", raising=False)
        monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-south-1")
        monkeypatch.setenv("COGNITO_IDP_ENDPOINT", "http://localhost:9229/")

        config = ClientConfig.from_env(debug=True)

        assert config.region == "ap-south-1"
        assert config.resolved_endpoint == "http://localhost:9229/"
        assert config.debug is True


class TestClientInitialization:

    def test_region_string(self):
        client = CognitoIdpClient("eu-west-1")
        assert client.endpoint == "https://cognito-idp.eu-west-1.amazonaws.com/"

    def test_none_reads_environment(self, monkeypatch):
        monkeypatch.setenv("AWS_REGION", "us-west-2")
        monkeypatch.delenv("COGNITO_IDP_ENDPOINT", raising=False)
        client = CognitoIdpClient()
        assert client.config.region == "us-west-2"

    def test_context_manager_closes_owned_session(self):
        with patch.object(requests.Session, "close") as close:
            with CognitoIdpClient("eu-west-1"):
                pass
        close.assert_called_once()

    def test_external_session_left_open(self):
        session = RecordingSession()
        with CognitoIdpClient("eu-west-1", session=session):
            pass
        assert session.closed is False


# =============================================================================
# HTTP
# =============================================================================

class TestHttpRequest:

    def test_post_shape(self):
        session = RecordingSession(body={"Username": "alice"})
        auth = object()
        client = CognitoIdpClient(ClientConfig(region="eu-west-1", timeout=7.0), auth=auth, session=session)

        result = client.request(operations.admin_get_user("pool1", "alice"))

        assert result == {"Username": "alice"}
        call = session.calls[0]
        assert call["url"] == "https://cognito-idp.eu-west-1.amazonaws.com/"
        assert json.loads(call["data"]) == {"UserPoolId": "pool1", "Username": "alice"}
        assert call["headers"]["x-amz-target"] == "AWSCognitoIdentityProviderService.AdminGetUser"
        assert call["headers"]["content-type"] == "application/x-amz-json-1.1"
        assert call["headers"]["User-Agent"].startswith("cognito-idp-client-python/")
        assert call["auth"] is auth
        assert call["timeout"] == 7.0
        assert call["verify"] is True

    def test_empty_success_body(self):
        client = CognitoIdpClient("eu-west-1", session=RecordingSession(body=None))
        assert client.request(operations.admin_delete_user("pool1", "alice")) == {}

    def test_invalid_json_is_protocol_violation(self):
        client = CognitoIdpClient("eu-west-1", session=RecordingSession(raw=b"<html>"))
        with pytest.raises(ProtocolViolation):
            client.request(operations.admin_get_user("pool1", "alice"))

    @pytest.mark.parametrize("error_type,error_cls", [
        ("UserNotFoundException", ResourceNotFoundError),
        ("NotAuthorizedException", AuthenticationError),
        ("InvalidParameterException", InvalidParameterError),
        ("SomethingNewException", ServiceError),
    ])
    def test_error_reply_mapping(self, error_type, error_cls):
        session = RecordingSession(status_code=400, body={
            "__type": f"com.amazonaws.cognito#{error_type}",
            "message": "went wrong",
        })
        client = CognitoIdpClient(ClientConfig(max_retries=0), session=session)

        with pytest.raises(error_cls) as exc_info:
            client.request(operations.admin_get_user("pool1", "alice"))

        assert exc_info.value.error_type == error_type
        assert exc_info.value.status == 400
        assert exc_info.value.message == "went wrong"
        assert len(session.calls) == 1

    def test_non_json_error_reply(self):
        session = RecordingSession(status_code=502, raw=b"Bad Gateway")
        client = CognitoIdpClient(ClientConfig(max_retries=0), session=session)

        with pytest.raises(ServiceError) as exc_info:
            client.request(operations.describe_user_pool("pool1"))

        assert exc_info.value.status == 502
        assert exc_info.value.code == ErrorCode.SERVICE_UNAVAILABLE

    @pytest.mark.parametrize("raised,error_cls", [
        (requests.exceptions.ConnectTimeout("slow"), RequestTimeoutError),
        (requests.exceptions.ConnectionError("refused"), ConnectionFailedError),
        (requests.exceptions.TooManyRedirects("loop"), TransportError),
    ])
    def test_transport_errors(self, raised, error_cls):
        session = RecordingSession(error=raised)
        client = CognitoIdpClient(ClientConfig(max_retries=0), session=session)

        with pytest.raises(error_cls) as exc_info:
            client.request(operations.get_user("access"))

        assert exc_info.value.cause is raised


# =============================================================================
# Retries
# =============================================================================

class TestRetries:

    def test_success_after_failures(self, client, mock_transport):
        mock_transport.set_failures(2)
        mock_transport.set_response("GetUser", {"Username": "alice"})
        client.transport = mock_transport

        assert client.request(operations.get_user("access")) == {"Username": "alice"}
        assert mock_transport.call_count == 3

    def test_gives_up_after_max_retries(self, client, mock_transport):
        mock_transport.set_failures(10)
        client.transport = mock_transport

        with pytest.raises(ConnectionFailedError):
            client.request(operations.get_user("access"))

        assert mock_transport.call_count == 4

    def test_throttling_is_retried(self, client, mock_transport):
        mock_transport.set_failures(1, ThrottlingError("slow down", "TooManyRequestsException", 400))
        client.transport = mock_transport

        assert client.request(operations.get_user("access")) == {}
        assert mock_transport.call_count == 2

    def test_client_errors_not_retried(self, client, mock_transport):
        mock_transport.set_failures(5, InvalidParameterError("bad", "InvalidParameterException", 400))
        client.transport = mock_transport

        with pytest.raises(InvalidParameterError):
            client.request(operations.get_user("access"))

        assert mock_transport.call_count == 1

    def test_backoff_delays(self, mock_transport):
        config = ClientConfig(max_retries=3, retry_delay=0.5, retry_backoff=2.0)
        client = CognitoIdpClient(config)
        client.transport = mock_transport
        mock_transport.set_failures(3)

        with patch("cognito_idp_client.client.time.sleep") as sleep:
            client.request(operations.get_user("access"))

        assert [c.args[0] for c in sleep.call_args_list] == [0.5, 1.0, 2.0]

    def test_retry_is_logged(self, client, mock_transport, caplog):
        mock_transport.set_failures(1)
        client.transport = mock_transport

        client.request(operations.get_user("access"))

        assert any("GetUser attempt 1 failed" in r.getMessage() for r in caplog.records)


# =============================================================================
# Streaming
# =============================================================================

class TestStream:

    def test_stream_all_items(self, client, paged_server, users):
        client.transport = paged_server

        assert list(client.stream(operations.list_users("pool1"))) == users
        assert paged_server.call_count == 3

    def test_stream_is_lazy(self, client, paged_server):
        client.transport = paged_server

        items = client.stream(operations.list_users("pool1"))
        assert paged_server.call_count == 0
        next(items)
        assert paged_server.call_count == 1

    def test_stream_restarts_per_call(self, client, paged_server, users):
        client.transport = paged_server
        op = operations.list_users("pool1", {"limit": 3})

        assert list(client.stream(op)) == users
        assert list(client.stream(op)) == users
        assert paged_server.requests[0] == paged_server.requests[3] == {"UserPoolId": "pool1", "Limit": 3}

    def test_stream_retries_each_page(self, client, paged_server, users):
        calls = []

        def transport(operation):
            calls.append(operation)
            if len(calls) == 2:
                raise ConnectionFailedError("reset")
            return paged_server(operation)

        client.transport = transport

        assert list(client.stream(operations.list_users("pool1"))) == users
        assert len(calls) == 4
        assert paged_server.requests[1] == {"UserPoolId": "pool1", "PaginationToken": "tok1"}

    def test_stream_rejects_one_shot_operation(self, client):
        with pytest.raises(CognitoIdpError) as exc_info:
            client.stream(operations.admin_get_user("pool1", "alice"))
        assert exc_info.value.code == ErrorCode.NOT_PAGINATED

    def test_one_shot_request_of_list_operation(self, client, paged_server, users):
        client.transport = paged_server

        page = client.request(operations.list_users("pool1"))

        assert page == {"Users": users[:3], "PaginationToken": "tok1"}


# =============================================================================
# Debug logging
# =============================================================================

class TestDebugLogging:
    """Debug output shows request and reply bodies without secrets."""

    def test_auth_secrets_masked(self, mock_transport, caplog):
        mock_transport.set_response("InitiateAuth", {
            "AuthenticationResult": {
                "AccessToken": "access-SECRET",
                "IdToken": "id-SECRET",
                "RefreshToken": "refresh-SECRET",
                "ExpiresIn": 3600,
            },
        })

        with caplog.at_level(logging.DEBUG, logger="cognito_idp_client.client"):
            client = CognitoIdpClient(ClientConfig(debug=True))
            client.transport = mock_transport
            result = client.request(operations.initiate_auth(
                "client1", "USER_PASSWORD_AUTH",
                {"USERNAME": "alice", "PASSWORD": "hunter2", "SECRET_HASH": "hash-SECRET"},
            ))

        text = caplog.text
        assert "AWSCognitoIdentityProviderService.InitiateAuth" in text
        assert "USERNAME" in text
        assert "ExpiresIn" in text
        for secret in ("hunter2", "hash-SECRET", "access-SECRET", "id-SECRET", "refresh-SECRET"):
            assert secret not in text
        assert result["AuthenticationResult"]["AccessToken"] == "access-SECRET"

    def test_password_change_masked(self, mock_transport, caplog):
        with caplog.at_level(logging.DEBUG, logger="cognito_idp_client.client"):
            client = CognitoIdpClient(ClientConfig(debug=True))
            client.transport = mock_transport
            client.request(operations.change_password("access-SECRET", "old-SECRET", "new-SECRET"))

        assert "PreviousPassword" in caplog.text
        assert "SECRET" not in caplog.text
        assert mock_transport.operations[0].data["ProposedPassword"] == "new-SECRET"

    def test_debug_level_applies_to_every_client(self, caplog):
        with caplog.at_level(logging.INFO, logger="cognito_idp_client.client"):
            CognitoIdpClient(ClientConfig(debug=True))
            other = CognitoIdpClient(ClientConfig())

            assert other.logger is logging.getLogger("cognito_idp_client.client")
            assert other.logger.isEnabledFor(logging.DEBUG)
