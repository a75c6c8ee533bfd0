from .auth_middleware import Identity, authenticate_request, current_identity, token_required
from .role_utils import PRIVILEGED_ROLES, check_role
from .util import commit_changes, json_body, role_required
