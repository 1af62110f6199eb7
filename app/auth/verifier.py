# =============================================================================
# app/auth/verifier.py - Bearer Token Verifier
# =============================================================================
# Credential verifier used by the protected-routes middleware.
#
# Given a request, it either records the authenticated identity on
# request.state or raises an AuthenticationError:
# - no "Authorization: Bearer <token>" header -> UnauthenticatedError
# - expired token                             -> ExpiredTokenError
# - bad signature, malformed, no subject      -> InvalidTokenError
#
# Usage:
#   verifier = JWTVerifier.from_settings(settings)
#   await verifier(request)
#   request.state.user_id  # "550e8400-..."
# =============================================================================

import logging
from typing import Any

from fastapi.security.utils import get_authorization_scheme_param
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError
from starlette.requests import Request

from app.auth.models import TokenPayload
from app.config import Settings
from app.exceptions import ExpiredTokenError, InvalidTokenError, UnauthenticatedError

logger = logging.getLogger(__name__)


class JWTVerifier:
    """
    Verify HS256 (or any symmetric) JWT bearer tokens.

    The verifier holds only key material; it is safe to share one instance
    across all requests.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        audience: str | None = None,
        leeway: int = 0,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.audience = audience
        self.leeway = leeway

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTVerifier":
        return cls(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            audience=settings.JWT_AUDIENCE,
        )

    def extract_token(self, request: Request) -> str:
        """
        Pull the bearer token out of the Authorization header.

        Raises:
            UnauthenticatedError: If the header is missing or not a Bearer token
        """
        authorization = request.headers.get("Authorization")
        scheme, token = get_authorization_scheme_param(authorization)
        if not authorization or scheme.lower() != "bearer" or not token:
            raise UnauthenticatedError()
        return token

    def decode(self, token: str) -> TokenPayload:
        """
        Verify the token signature and claims.

        Raises:
            ExpiredTokenError: If the token has expired
            InvalidTokenError: If the token fails any other check
        """
        try:
            claims: dict[str, Any] = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                options={
                    "verify_aud": self.audience is not None,
                    "leeway": self.leeway,
                },
            )
        except ExpiredSignatureError:
            logger.warning("JWT token has expired")
            raise ExpiredTokenError()
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise InvalidTokenError()

        try:
            payload = TokenPayload(**claims)
        except ValidationError:
            logger.warning("JWT token missing 'sub' claim")
            raise InvalidTokenError()

        if not payload.sub:
            logger.warning("JWT token has an empty 'sub' claim")
            raise InvalidTokenError()
        return payload

    async def verify(self, request: Request) -> None:
        """
        Verify the request's credential and record the identity on it.

        On success sets request.state.user_id and request.state.token_payload.
        """
        payload = self.decode(self.extract_token(request))
        request.state.user_id = payload.sub
        request.state.token_payload = payload
        logger.debug(f"Authenticated user: {payload.sub}")

    async def __call__(self, request: Request) -> None:
        await self.verify(request)
