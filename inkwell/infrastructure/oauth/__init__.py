"""Federated identity providers."""

from .google import GoogleOAuthClient, OAuthError

__all__ = ["GoogleOAuthClient", "OAuthError"]
