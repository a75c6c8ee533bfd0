# petshop/utils/util.py
import logging
from functools import wraps

from flask import request
from sqlalchemy.exc import SQLAlchemyError

from petshop import db
from petshop.errors import InternalError
from .auth_middleware import authenticate_request
from .role_utils import check_role

logger = logging.getLogger(__name__)


def role_required(*roles):
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            identity = authenticate_request()
            user = check_role(identity.user_id, roles)
            identity.role = user.role
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def commit_changes(action):
    """Commit the session; on failure roll back, log and raise InternalError."""
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to {action}: {str(e)}")
        raise InternalError()


def json_body():
    return request.get_json(silent=True) or {}
