# Grooming service catalog
import logging

from petshop import db
from petshop.errors import NotFound
from petshop.models import Service
from petshop.utils.util import commit_changes
from petshop.utils.validators import parse_non_negative_number, parse_positive_int, require_fields

logger = logging.getLogger(__name__)


def format_service(service):
    return {
        'id': service.id,
        'name': service.name,
        'price': service.price,
        'estimatedTime': service.estimated_time
    }


def validate_service_fields(data):
    require_fields(
        data,
        ('name', 'O nome do serviço é obrigatório!'),
        ('price', 'O preço do serviço é obrigatório!'),
        ('estimatedTime', 'O tempo estimado é obrigatório!'),
    )
    return {
        'name': str(data['name']).strip(),
        'price': parse_non_negative_number(data['price'], 'O preço deve ser um número maior ou igual a zero!'),
        'estimated_time': parse_positive_int(data['estimatedTime'], 'O tempo estimado deve ser um número inteiro de minutos maior que zero!')
    }


def get_service(service_id):
    service = db.session.get(Service, service_id)
    if not service:
        raise NotFound('Serviço não encontrado!')
    return service


def list_services():
    return Service.query.order_by(Service.name.asc()).all()


def create_service(data):
    service = Service(**validate_service_fields(data))
    db.session.add(service)
    commit_changes('create service')
    logger.info(f"Service created: ID {service.id}")
    return service


def update_service(service_id, data):
    service = get_service(service_id)
    for key, value in validate_service_fields(data).items():
        setattr(service, key, value)
    commit_changes('update service')
    logger.info(f"Service updated: ID {service.id}")
    return service


def delete_service(service_id):
    service = get_service(service_id)
    db.session.delete(service)
    commit_changes('delete service')
    logger.info(f"Service deleted: ID {service_id}")
