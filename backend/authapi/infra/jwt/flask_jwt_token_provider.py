# authapi/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

import jwt as pyjwt
from flask_jwt_extended import create_access_token as _create_access
from flask_jwt_extended import decode_token as _decode
from flask_jwt_extended.exceptions import JWTExtendedException

from authapi.services._shared.errors import TokenDecodeError, TokenExpiredError
from authapi.services._shared.ports import TokenProvider


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    .. note::
       Requires an active Flask app context with ``JWT_SECRET_KEY`` and
       ``JWT_ALGORITHM`` configured.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta,
    ) -> str:
        # Flask-JWT-Extended sets iat, exp, jti, type and sub for us.
        return cast(
            str,
            _create_access(
                identity=identity,
                additional_claims=additional_claims or {},
                expires_delta=expires_delta,
            ),
        )

    def decode(self, token: str) -> dict[str, Any]:
        try:
            return cast(dict[str, Any], _decode(token))
        except pyjwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("token expired") from exc
        except (pyjwt.InvalidTokenError, JWTExtendedException) as exc:
            raise TokenDecodeError(type(exc).__name__) from exc
        except (ValueError, TypeError) as exc:
            # Non-string or structurally broken input that PyJWT does not wrap.
            raise TokenDecodeError(type(exc).__name__) from exc
