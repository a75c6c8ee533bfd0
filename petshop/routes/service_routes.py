from flask_restx import Namespace, Resource, fields

from petshop.models import Role
from petshop.services import grooming_service
from petshop.utils import role_required, json_body


service_ns = Namespace('services', description='Catálogo de serviços de banho e tosa', path='/services')

service_model = service_ns.model('Service', {
    'name': fields.String(required=True, description='Nome do serviço'),
    'price': fields.Float(required=True, min=0, description='Preço'),
    'estimatedTime': fields.Integer(required=True, min=1, description='Tempo estimado em minutos')
})


@service_ns.route('')
class ServiceList(Resource):
    @service_ns.doc('list_services')
    def get(self):
        """Lista os serviços (público)"""
        services = grooming_service.list_services()
        return {'services': [grooming_service.format_service(s) for s in services]}, 200

    @role_required(Role.ADMIN)
    @service_ns.expect(service_model)
    @service_ns.doc('create_service', security='BearerAuth')
    def post(self):
        """Cria um serviço (apenas ADMIN)"""
        service = grooming_service.create_service(json_body())
        return {'msg': 'Serviço criado com sucesso!', 'service': grooming_service.format_service(service)}, 201


@service_ns.route('/<int:service_id>')
class ServiceResource(Resource):
    @service_ns.doc('get_service')
    def get(self, service_id):
        """Busca um serviço (público)"""
        service = grooming_service.get_service(service_id)
        return {'service': grooming_service.format_service(service)}, 200

    @role_required(Role.ADMIN)
    @service_ns.expect(service_model)
    @service_ns.doc('update_service', security='BearerAuth')
    def put(self, service_id):
        """Atualiza todos os dados de um serviço (apenas ADMIN)"""
        service = grooming_service.update_service(service_id, json_body())
        return {'msg': 'Serviço atualizado com sucesso!', 'service': grooming_service.format_service(service)}, 200

    @role_required(Role.ADMIN)
    @service_ns.doc('delete_service', security='BearerAuth')
    def delete(self, service_id):
        """Remove um serviço (apenas ADMIN)"""
        grooming_service.delete_service(service_id)
        return {'msg': 'Serviço removido com sucesso!'}, 200
