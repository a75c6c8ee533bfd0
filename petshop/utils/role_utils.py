# petshop/utils/role_utils.py
import logging

from petshop import db
from petshop.errors import Forbidden
from petshop.models import Role, User

logger = logging.getLogger(__name__)

PRIVILEGED_ROLES = frozenset({Role.ADMIN, Role.EMPLOYEE})


def check_role(user_id, allowed_roles):
    """Return the user when its current role is allowed, otherwise raise Forbidden.

    The role is read from the database on every call so a role change takes
    effect without waiting for the token to expire. An unknown account is
    denied the same way as a wrong role.
    """
    user = db.session.get(User, user_id)
    if not user or user.role not in allowed_roles:
        logger.warning(f"Role check failed for user {user_id}")
        raise Forbidden('Acesso negado!')
    return user


def is_privileged(user_id):
    user = db.session.get(User, user_id)
    return user is not None and user.role in PRIVILEGED_ROLES
