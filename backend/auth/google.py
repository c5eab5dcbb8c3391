from __future__ import annotations

import logging
from typing import Any

import requests
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.requests_client import OAuth2Session

from .config import DEFAULT_OAUTH_CONFIG, GoogleOAuthConfig

logger = logging.getLogger(__name__)


class GoogleAuthError(Exception):
    """Google rejected the exchange or could not be reached."""


def _client(config: GoogleOAuthConfig, token: dict[str, Any] | None = None) -> OAuth2Session:
    return OAuth2Session(
        client_id=config.client_id,
        client_secret=config.client_secret,
        scope=config.scope,
        redirect_uri=config.redirect_uri,
        token=token,
    )


def create_authorization_url(config: GoogleOAuthConfig = DEFAULT_OAUTH_CONFIG) -> tuple[str, str]:
    """Return ``(url, state)`` for the Google consent screen."""
    client = _client(config)
    url, state = client.create_authorization_url(
        config.authorize_url,
        access_type="online",
        prompt="select_account",
    )
    return url, state


def exchange_code(code: str, config: GoogleOAuthConfig = DEFAULT_OAUTH_CONFIG) -> dict[str, Any]:
    """Trade an authorization code for a token dict."""
    try:
        token = _client(config).fetch_token(
            config.token_url,
            code=code,
            timeout=config.timeout,
        )
    except (AuthlibBaseError, requests.RequestException, ValueError) as exc:
        logger.warning("Google token exchange failed", exc_info=True)
        raise GoogleAuthError("token exchange failed") from exc

    if not token or not token.get("access_token"):
        raise GoogleAuthError("no access token in response")
    return dict(token)


def fetch_profile(token: dict[str, Any], config: GoogleOAuthConfig = DEFAULT_OAUTH_CONFIG) -> dict[str, Any]:
    """Return the Google profile (``sub``, ``email``, ``name``, ``picture``)."""
    try:
        response = _client(config, token=token).get(config.userinfo_url, timeout=config.timeout)
        response.raise_for_status()
        profile = response.json()
    except (AuthlibBaseError, requests.RequestException, ValueError) as exc:
        logger.warning("Google userinfo request failed", exc_info=True)
        raise GoogleAuthError("profile request failed") from exc

    if not isinstance(profile, dict) or not profile.get("sub"):
        raise GoogleAuthError("profile has no subject id")
    return profile
