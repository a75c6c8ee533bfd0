# User profile and role management
import logging

from petshop import db
from petshop.errors import NotFound, ValidationError
from petshop.models import Role, User
from petshop.utils.util import commit_changes
from petshop.utils.validators import (
    is_valid_cpf, is_valid_email, normalize_cpf, require_fields, validate_new_password
)
from .auth_service import check_password, hash_password

logger = logging.getLogger(__name__)


def format_user(user):
    # password and CPF never leave the server
    return {
        'id': user.id,
        'name': user.name,
        'email': user.email,
        'role': user.role.value
    }


def get_profile(identity):
    user = db.session.get(User, identity.user_id)
    if not user:
        raise NotFound('Usuário não encontrado!')
    return user


def update_profile(identity, data):
    user = get_profile(identity)
    require_fields(
        data,
        ('name', 'O nome é obrigatório!'),
        ('email', 'O email é obrigatório!'),
    )
    email = str(data['email']).strip()
    if not is_valid_email(email):
        raise ValidationError('Email inválido!')
    if User.query.filter(User.id != user.id, User.email == email).first():
        raise ValidationError('Usuário com este email já existe!')

    if data.get('cpf'):
        cpf = normalize_cpf(data['cpf'])
        if not is_valid_cpf(cpf):
            raise ValidationError('CPF inválido, utilize um CPF válido!')
        if User.query.filter(User.id != user.id, User.cpf == cpf).first():
            raise ValidationError('Usuário com este CPF já existe!')
        user.cpf = cpf

    # role is deliberately not read from the payload
    user.name = str(data['name']).strip()
    user.email = email
    commit_changes('update user')
    logger.info(f"User updated: ID {user.id}")
    return user


def change_password(identity, data):
    user = get_profile(identity)
    require_fields(data, ('currentPassword', 'A senha atual é obrigatória!'))
    if not check_password(user, data['currentPassword']):
        raise ValidationError('Senha atual inválida!')
    validate_new_password(data.get('password'), data.get('confirmPassword'))

    user.password = hash_password(data['password'])
    commit_changes('change password')
    logger.info(f"Password changed for user {user.id}")
    return user


def list_users():
    return User.query.order_by(User.id.asc()).all()


def assign_role(user_id, raw_role):
    try:
        role = Role[str(raw_role).upper()]
    except KeyError:
        allowed = ', '.join(r.value for r in Role)
        raise ValidationError(f'Função inválida! Valores permitidos: {allowed}.')

    user = db.session.get(User, user_id)
    if not user:
        raise NotFound('Usuário não encontrado!')

    user.role = role
    commit_changes('assign role')
    logger.info(f"User {user_id} role set to {role.value}")
    return user
