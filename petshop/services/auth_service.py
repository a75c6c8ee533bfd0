# Account registration, login and password reset
import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone

from flask import current_app
from flask_jwt_extended import create_access_token

from petshop import db, bcrypt
from petshop.errors import NotFound, ValidationError
from petshop.models import PasswordResetToken, Role, User
from petshop.utils.mailer import send_reset_code
from petshop.utils.util import commit_changes
from petshop.utils.validators import (
    MAX_PASSWORD_BYTES, is_valid_cpf, is_valid_email, normalize_cpf, require_fields, validate_new_password
)

logger = logging.getLogger(__name__)

INVALID_CODE_MSG = 'Código inválido ou expirado!'


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def hash_password(password):
    return bcrypt.generate_password_hash(password).decode('utf-8')


def check_password(user, password):
    if not isinstance(password, str) or len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.check_password_hash(user.password, password)


def find_user_by_email(email):
    return User.query.filter_by(email=email).first()


def register_user(data):
    require_fields(
        data,
        ('name', 'O nome é obrigatório!'),
        ('cpf', 'O CPF é obrigatório!'),
        ('email', 'O email é obrigatório!'),
        ('password', 'A senha é obrigatória!'),
    )
    email = str(data['email']).strip()
    validate_new_password(data['password'], data.get('confirmPassword'))

    cpf = normalize_cpf(data['cpf'])
    if not is_valid_cpf(cpf):
        raise ValidationError('CPF inválido, utilize um CPF válido!')
    if not is_valid_email(email):
        raise ValidationError('Email inválido!')

    if find_user_by_email(email):
        raise ValidationError('Usuário com este email já existe!')
    if User.query.filter_by(cpf=cpf).first():
        raise ValidationError('Usuário com este CPF já existe!')

    user = User(
        name=str(data['name']).strip(),
        cpf=cpf,
        email=email,
        password=hash_password(data['password']),
        role=Role.CUSTOMER
    )
    db.session.add(user)
    commit_changes('register user')
    logger.info(f"User registered: ID {user.id}")
    return user


def authenticate(data):
    """Return a signed access token for valid credentials."""
    require_fields(
        data,
        ('email', 'O email é obrigatório!'),
        ('password', 'A senha é obrigatória!'),
    )
    user = find_user_by_email(str(data['email']).strip())
    if not user:
        raise NotFound('Usuário não encontrado!')
    if not check_password(user, data['password']):
        logger.warning(f"Wrong password for user {user.id}")
        raise NotFound('Senha inválida!')

    token = create_access_token(identity=str(user.id))
    logger.info(f"User logged in: ID {user.id}")
    return token


def issue_reset_code(data):
    require_fields(data, ('email', 'O email é obrigatório!'))
    user = find_user_by_email(str(data['email']).strip())
    if not user:
        raise NotFound('Usuário não encontrado!')

    ttl_minutes = current_app.config['RESET_CODE_TTL_MINUTES']
    code = f'{secrets.randbelow(1_000_000):06d}'

    # Only one active code per account
    PasswordResetToken.query.filter_by(user_id=user.id).delete()
    db.session.add(PasswordResetToken(
        user_id=user.id,
        code=code,
        expires_at=_utcnow() + timedelta(minutes=ttl_minutes)
    ))
    commit_changes('issue password reset code')

    send_reset_code(user.email, code, ttl_minutes)
    logger.info(f"Password reset code issued for user {user.id}")
    return user


def _find_valid_code(data):
    require_fields(
        data,
        ('email', 'O email é obrigatório!'),
        ('code', 'O código é obrigatório!'),
    )
    user = find_user_by_email(str(data['email']).strip())
    if not user:
        raise ValidationError(INVALID_CODE_MSG, 400)

    token = PasswordResetToken.query.filter_by(user_id=user.id).first()
    code = data['code']
    # JSON clients may send the code as a number, dropping leading zeros
    if isinstance(code, int) and not isinstance(code, bool):
        code = f'{code:06d}'
    code = str(code).strip()
    if (not token or token.expires_at < _utcnow()
            or not hmac.compare_digest(token.code.encode(), code.encode())):
        logger.warning(f"Rejected password reset code for user {user.id}")
        raise ValidationError(INVALID_CODE_MSG, 400)
    return user


def verify_reset_code(data):
    return _find_valid_code(data)


def reset_password(data):
    user = _find_valid_code(data)
    validate_new_password(data.get('password'), data.get('confirmPassword'))

    user.password = hash_password(data['password'])
    PasswordResetToken.query.filter_by(user_id=user.id).delete()
    commit_changes('reset password')
    logger.info(f"Password reset for user {user.id}")
    return user
