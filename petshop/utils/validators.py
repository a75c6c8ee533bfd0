"""Identity, password and field validation shared by the services.

The predicates (``is_valid_cpf``, ``is_valid_email``, ``is_strong_password``)
are pure and never raise. The ``parse_*`` and ``require_fields`` helpers raise
``ValidationError`` with the message sent back to the client.
"""
import math
import re

from petshop.errors import ValidationError
from petshop.models import PetSize

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)+$')
SYMBOL_REGEX = re.compile(r'[^A-Za-z0-9]')
MIN_PASSWORD_LENGTH = 8
# bcrypt only hashes the first 72 bytes
MAX_PASSWORD_BYTES = 72

PASSWORD_POLICY_MSG = ('A senha deve ter entre 8 e 72 caracteres, com letra maiúscula, '
                       'letra minúscula, número e símbolo!')


def normalize_cpf(raw):
    """Strip punctuation so '529.982.247-25' becomes '52998224725'."""
    if raw is None:
        return ''
    return re.sub(r'\D', '', str(raw))


def _cpf_check_digit(digits, first_weight):
    total = sum(int(d) * w for d, w in zip(digits, range(first_weight, 1, -1)))
    digit = 11 - (total % 11)
    return 0 if digit >= 10 else digit


def is_valid_cpf(cpf):
    if not isinstance(cpf, str) or len(cpf) != 11 or not cpf.isdigit():
        return False
    if cpf == cpf[0] * 11:
        return False
    first = _cpf_check_digit(cpf[:9], 10)
    if first != int(cpf[9]):
        return False
    second = _cpf_check_digit(cpf[:10], 11)
    return second == int(cpf[10])


def is_valid_email(email):
    return isinstance(email, str) and EMAIL_REGEX.match(email) is not None


def is_strong_password(password):
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        return False
    if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
        return False
    return (any(c.isupper() for c in password)
            and any(c.islower() for c in password)
            and any(c.isdigit() for c in password)
            and SYMBOL_REGEX.search(password) is not None)


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(data, *required):
    """``required`` is a sequence of ``(key, message)`` pairs checked in order."""
    data = data or {}
    for key, message in required:
        if is_blank(data.get(key)):
            raise ValidationError(message)


def _to_number(value, message, cast):
    if isinstance(value, bool) or is_blank(value):
        raise ValidationError(message)
    try:
        number = cast(value)
    except (TypeError, ValueError):
        raise ValidationError(message)
    if isinstance(number, float) and not math.isfinite(number):
        raise ValidationError(message)
    return number


def _to_int(value):
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(value)
        return int(value)
    return int(value)


def parse_non_negative_number(value, message):
    number = _to_number(value, message, float)
    if number < 0:
        raise ValidationError(message)
    return number


def parse_non_negative_int(value, message):
    number = _to_number(value, message, _to_int)
    if number < 0:
        raise ValidationError(message)
    return number


def parse_positive_int(value, message):
    number = _to_number(value, message, _to_int)
    if number <= 0:
        raise ValidationError(message)
    return number


def parse_pet_size(raw):
    if isinstance(raw, str):
        raw = raw.strip()
        for size in PetSize:
            if raw == size.value or raw.upper() == size.name:
                return size
    allowed = ', '.join(size.value for size in PetSize)
    raise ValidationError(f'Porte inválido! Valores permitidos: {allowed}.')


def parse_id_list(raw, message):
    """Non-empty list of positive ids, duplicates dropped, order kept."""
    if not isinstance(raw, list) or not raw:
        raise ValidationError(message)
    ids = []
    for item in raw:
        item_id = parse_positive_int(item, message)
        if item_id not in ids:
            ids.append(item_id)
    return ids


def validate_new_password(password, confirm_password):
    if is_blank(password):
        raise ValidationError('A senha é obrigatória!')
    if password != confirm_password:
        raise ValidationError('As senhas não conferem!')
    if not is_strong_password(password):
        raise ValidationError(PASSWORD_POLICY_MSG)
