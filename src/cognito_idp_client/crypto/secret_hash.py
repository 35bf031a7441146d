"""
Secret hash for app clients that have a client secret.

User pool app clients configured with a secret require a ``SECRET_HASH``
value on sign-up, sign-in and password flows.
"""

import base64
import hashlib
import hmac


def hash_secret(client_secret: str, username: str, client_id: str) -> str:
    """
    Compute the ``SECRET_HASH`` for a user and app client.

    Args:
        client_secret: App client secret (HMAC key)
        username: User name the request is made for
        client_id: App client ID

    Returns:
        Base64 encoded HMAC-SHA256 of ``username + client_id``
    """
    message = (username + client_id).encode("utf-8")
    digest = hmac.new(client_secret.encode("utf-8"), message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")
