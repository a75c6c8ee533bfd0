# Product category management
import logging

from petshop import db
from petshop.errors import Conflict, NotFound
from petshop.models import Category
from petshop.utils.util import commit_changes
from petshop.utils.validators import require_fields

logger = logging.getLogger(__name__)


def format_category(category):
    return {
        'id': category.id,
        'name': category.name
    }


def get_category(category_id):
    category = db.session.get(Category, category_id)
    if not category:
        raise NotFound('Categoria não encontrada!')
    return category


def list_categories():
    return Category.query.order_by(Category.name.asc()).all()


def _clean_name(data):
    require_fields(data, ('name', 'O nome da categoria é obrigatório!'))
    return str(data['name']).strip()


def _ensure_unique_name(name, category_id=None):
    query = Category.query.filter(Category.name == name)
    if category_id is not None:
        query = query.filter(Category.id != category_id)
    if query.first():
        raise Conflict(f"Categoria '{name}' já existe!", 409)


def create_category(data):
    name = _clean_name(data)
    _ensure_unique_name(name)
    category = Category(name=name)
    db.session.add(category)
    commit_changes('create category')
    logger.info(f"Category created: ID {category.id}")
    return category


def update_category(category_id, data):
    category = get_category(category_id)
    name = _clean_name(data)
    _ensure_unique_name(name, category_id=category.id)
    category.name = name
    commit_changes('update category')
    logger.info(f"Category updated: ID {category.id}")
    return category


def delete_category(category_id):
    category = get_category(category_id)
    if category.products:
        raise Conflict('Não é possível excluir uma categoria com produtos associados!')
    db.session.delete(category)
    commit_changes('delete category')
    logger.info(f"Category deleted: ID {category_id}")
