# Product service module for business logic
import logging
import os
import uuid
from dataclasses import dataclass, fields
from typing import Optional

from flask import current_app
from werkzeug.utils import secure_filename

from petshop import db
from petshop.errors import InternalError, NotFound, ValidationError
from petshop.models import Category, Product
from petshop.utils.util import commit_changes
from petshop.utils.validators import (
    is_blank, parse_non_negative_int, parse_non_negative_number, parse_positive_int, require_fields
)

logger = logging.getLogger(__name__)

PRICE_MSG = 'O preço deve ser um número maior ou igual a zero!'
QUANTITY_MSG = 'A quantidade não pode ser negativa!'
CATEGORY_MSG = 'Categoria inválida!'


@dataclass
class ProductUpdate:
    """Partial update: ``None`` means the field was not supplied."""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[int] = None
    category_id: Optional[int] = None

    @classmethod
    def from_payload(cls, data):
        data = data or {}
        update = cls()
        if 'name' in data:
            if is_blank(data['name']):
                raise ValidationError('O nome do produto é obrigatório!')
            update.name = str(data['name']).strip()
        if 'description' in data and data['description'] is not None:
            update.description = str(data['description'])
        if 'price' in data:
            update.price = parse_non_negative_number(data['price'], PRICE_MSG)
        if 'quantity' in data:
            update.quantity = parse_non_negative_int(data['quantity'], QUANTITY_MSG)
        if 'category' in data:
            update.category_id = parse_positive_int(data['category'], CATEGORY_MSG)
        return update

    def changes(self):
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


def format_product(product):
    return {
        'id': product.id,
        'name': product.name,
        'description': product.description,
        'price': product.price,
        'quantity': product.quantity,
        'category': product.category_id,
        'image': f'/products/image/{product.id}' if product.image else None
    }


def allowed_file(filename):
    allowed = current_app.config['ALLOWED_IMAGE_EXTENSIONS']
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed


def _upload_folder():
    return os.path.abspath(current_app.config['UPLOAD_FOLDER'])


def _image_path(stored_name):
    return os.path.join(_upload_folder(), stored_name)


def _check_image(image):
    if image and (image.filename == '' or not allowed_file(image.filename)):
        allowed = ', '.join(sorted(current_app.config['ALLOWED_IMAGE_EXTENSIONS']))
        raise ValidationError(f'Arquivo de imagem inválido! Extensões permitidas: {allowed}.')


def save_image(image):
    """Store the upload under a unique name; returns (stored_name, content_type)."""
    unique_name = f"{uuid.uuid4().hex}_{secure_filename(image.filename)}"
    upload_folder = _upload_folder()
    try:
        os.makedirs(upload_folder, exist_ok=True)
        image.save(os.path.join(upload_folder, unique_name))
    except OSError as e:
        logger.error(f"Failed to save image: {str(e)}")
        raise InternalError()
    logger.info(f"Image saved: {unique_name}")
    return unique_name, image.mimetype or 'application/octet-stream'


def remove_image(stored_name):
    if not stored_name:
        return
    path = _image_path(stored_name)
    if os.path.exists(path):
        try:
            os.remove(path)
            logger.info(f"Image deleted: {stored_name}")
        except OSError:
            logger.warning(f"Failed to delete image: {stored_name}")


def _ensure_category(category_id):
    if not db.session.get(Category, category_id):
        raise NotFound('Categoria não encontrada!')


def get_product(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        raise NotFound('Produto não encontrado!')
    return product


def list_products(raw_category=None):
    query = Product.query
    if raw_category is not None:
        category_id = parse_positive_int(raw_category, CATEGORY_MSG)
        query = query.filter_by(category_id=category_id)
    return query.order_by(Product.name.asc()).all()


def create_product(data, image=None):
    require_fields(
        data,
        ('name', 'O nome do produto é obrigatório!'),
        ('price', 'O preço do produto é obrigatório!'),
        ('quantity', 'A quantidade é obrigatória!'),
        ('category', 'A categoria é obrigatória!'),
    )
    price = parse_non_negative_number(data['price'], PRICE_MSG)
    quantity = parse_non_negative_int(data['quantity'], QUANTITY_MSG)
    category_id = parse_positive_int(data['category'], CATEGORY_MSG)
    _check_image(image)
    _ensure_category(category_id)

    product = Product(
        name=str(data['name']).strip(),
        description=data.get('description') or '',
        price=price,
        quantity=quantity,
        category_id=category_id
    )
    new_image = None
    if image:
        new_image, product.image_content_type = save_image(image)
        product.image = new_image

    db.session.add(product)
    try:
        commit_changes('create product')
    except InternalError:
        remove_image(new_image)
        raise
    logger.info(f"Product created: ID {product.id}")
    return product


def update_product(product_id, data, image=None):
    product = get_product(product_id)
    update = ProductUpdate.from_payload(data)
    _check_image(image)
    if update.category_id is not None:
        _ensure_category(update.category_id)

    for key, value in update.changes().items():
        setattr(product, key, value)

    old_image = new_image = None
    if image:
        old_image = product.image
        new_image, product.image_content_type = save_image(image)
        product.image = new_image

    try:
        commit_changes('update product')
    except InternalError:
        remove_image(new_image)
        raise
    remove_image(old_image)
    logger.info(f"Product updated: ID {product.id}")
    return product


def delete_product(product_id):
    product = get_product(product_id)
    stored_image = product.image
    db.session.delete(product)
    commit_changes('delete product')
    remove_image(stored_image)
    logger.info(f"Product deleted: ID {product_id}")


def get_product_image(product_id):
    """Return (absolute path, content type) of the stored image."""
    product = get_product(product_id)
    if not product.image or not os.path.exists(_image_path(product.image)):
        raise NotFound('Imagem não encontrada!')
    return _image_path(product.image), product.image_content_type or 'application/octet-stream'
