"""
Shared fixtures: fake Cognito endpoints and clients wired to them.
"""
import pytest

from cognito_idp_client import CognitoIdpClient, ClientConfig
from helpers import FakePagedServer, MockTransport


@pytest.fixture
def users():
    """Seven user records in server order."""
    return [{"Username": f"user{i}", "Attributes": [{"Name": "email", "Value": f"user{i}@example.com"}]}
            for i in range(7)]


@pytest.fixture
def paged_server(users):
    """Serves the users fixture three at a time."""
    return FakePagedServer(users, page_size=3)


@pytest.fixture
def mock_transport():
    return MockTransport()


@pytest.fixture
def client():
    """Client that never sleeps between retries."""
    config = ClientConfig(region="eu-west-1", max_retries=3, retry_delay=0.0)
    with CognitoIdpClient(config) as c:
        yield c
