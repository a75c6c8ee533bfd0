import logging
from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import g, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException, NoAuthorizationError
from jwt.exceptions import PyJWTError

from petshop.errors import Unauthenticated
from petshop.models import Role

logger = logging.getLogger(__name__)


@dataclass
class Identity:
    """Subject of the current request, handed explicitly to the services."""
    user_id: int
    role: Optional[Role] = None


def _bearer_token_present():
    auth_header = request.headers.get('Authorization', '')
    parts = auth_header.split(' ', 1)
    return len(parts) == 2 and parts[0] == 'Bearer' and parts[1].strip() != ''


def authenticate_request():
    """Verify the bearer token and attach the subject to ``g.identity``.

    A request without a bearer credential is rejected with 401, a credential
    that fails verification (bad signature, expired, malformed) with 400.
    """
    if not _bearer_token_present():
        logger.info(f"Missing credential on {request.method} {request.path}")
        raise Unauthenticated('Acesso negado!', missing=True)

    try:
        verify_jwt_in_request()
        user_id = int(get_jwt_identity())
    except NoAuthorizationError:
        logger.info(f"Missing credential on {request.method} {request.path}")
        raise Unauthenticated('Acesso negado!', missing=True)
    except (JWTExtendedException, PyJWTError, TypeError, ValueError) as e:
        logger.warning(f"Invalid credential on {request.method} {request.path}: {type(e).__name__}")
        raise Unauthenticated('Token inválido!', missing=False)

    g.identity = Identity(user_id=user_id)
    return g.identity


def current_identity():
    identity = getattr(g, 'identity', None)
    if identity is None:
        identity = authenticate_request()
    return identity


def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        authenticate_request()
        return f(*args, **kwargs)
    return decorated
