# Pet service module for business logic
import logging

from petshop import db
from petshop.errors import NotFound, ValidationError
from petshop.models import Pet
from petshop.utils.util import commit_changes
from petshop.utils.validators import parse_non_negative_int, parse_pet_size, require_fields

logger = logging.getLogger(__name__)

PET_REQUIRED_FIELDS = (
    ('name', 'O nome do pet é obrigatório!'),
    ('size', 'O porte do pet é obrigatório!'),
    ('age', 'A idade do pet é obrigatória!'),
    ('breed', 'A raça do pet é obrigatória!'),
)


def format_pet(pet):
    return {
        'id': pet.id,
        'userId': pet.user_id,
        'name': pet.name,
        'size': pet.size.value,
        'age': pet.age,
        'breed': pet.breed,
        'notes': pet.notes
    }


def validate_pet_fields(data):
    """Every field is required on create and on update (full replace)."""
    require_fields(data, *PET_REQUIRED_FIELDS)
    notes = data.get('notes')
    return {
        'name': str(data['name']).strip(),
        'size': parse_pet_size(data['size']),
        'age': parse_non_negative_int(data['age'], 'A idade deve ser um número inteiro maior ou igual a zero!'),
        'breed': str(data['breed']).strip(),
        'notes': str(notes).strip() if notes is not None else None
    }


def _ensure_unique_name(user_id, name, pet_id=None):
    query = Pet.query.filter(Pet.user_id == user_id, Pet.name == name)
    if pet_id is not None:
        query = query.filter(Pet.id != pet_id)
    if query.first():
        raise ValidationError('Você já possui um pet com este nome!')


def get_owned_pet(identity, pet_id):
    """Foreign and missing pets look the same to the caller."""
    pet = db.session.get(Pet, pet_id)
    if not pet or pet.user_id != identity.user_id:
        raise NotFound('Pet não encontrado!')
    return pet


def list_pets(identity):
    return Pet.query.filter_by(user_id=identity.user_id).order_by(Pet.name.asc()).all()


def create_pet(identity, data):
    fields = validate_pet_fields(data)
    _ensure_unique_name(identity.user_id, fields['name'])
    pet = Pet(user_id=identity.user_id, **fields)
    db.session.add(pet)
    commit_changes('create pet')
    logger.info(f"Pet created: ID {pet.id} for user {identity.user_id}")
    return pet


def update_pet(identity, pet_id, data):
    pet = get_owned_pet(identity, pet_id)
    fields = validate_pet_fields(data)
    _ensure_unique_name(identity.user_id, fields['name'], pet_id=pet.id)
    for key, value in fields.items():
        setattr(pet, key, value)
    commit_changes('update pet')
    logger.info(f"Pet updated: ID {pet.id}")
    return pet


def delete_pet(identity, pet_id):
    pet = get_owned_pet(identity, pet_id)
    db.session.delete(pet)
    commit_changes('delete pet')
    logger.info(f"Pet deleted: ID {pet_id}")
