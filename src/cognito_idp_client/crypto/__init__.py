"""
Cryptographic helpers for Cognito IDP requests.
"""

from .secret_hash import hash_secret

__all__ = ["hash_secret"]
