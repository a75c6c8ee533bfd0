from flask_restx import Namespace, Resource, fields

from petshop.models import PetSize
from petshop.services import pet_service
from petshop.utils import current_identity, token_required, json_body


pet_ns = Namespace('pets', description='Pets do usuário autenticado', path='/pets')

pet_model = pet_ns.model('Pet', {
    'name': fields.String(required=True, description='Nome do pet'),
    'size': fields.String(required=True, enum=[s.value for s in PetSize], description='Porte'),
    'age': fields.Integer(required=True, min=0, description='Idade em anos'),
    'breed': fields.String(required=True, description='Raça'),
    'notes': fields.String(description='Observações')
})


@pet_ns.route('')
class PetList(Resource):
    @token_required
    @pet_ns.doc('list_pets', security='BearerAuth')
    def get(self):
        """Lista os pets do usuário"""
        pets = pet_service.list_pets(current_identity())
        return {'pets': [pet_service.format_pet(p) for p in pets]}, 200

    @token_required
    @pet_ns.expect(pet_model)
    @pet_ns.doc('create_pet', security='BearerAuth')
    def post(self):
        """Cadastra um pet"""
        pet = pet_service.create_pet(current_identity(), json_body())
        return {'msg': 'Pet cadastrado com sucesso!', 'pet': pet_service.format_pet(pet)}, 201


@pet_ns.route('/<int:pet_id>')
class PetResource(Resource):
    @token_required
    @pet_ns.doc('get_pet', security='BearerAuth')
    def get(self, pet_id):
        """Busca um pet do usuário"""
        pet = pet_service.get_owned_pet(current_identity(), pet_id)
        return {'pet': pet_service.format_pet(pet)}, 200

    @token_required
    @pet_ns.expect(pet_model)
    @pet_ns.doc('update_pet', security='BearerAuth')
    def put(self, pet_id):
        """Atualiza todos os dados de um pet"""
        pet = pet_service.update_pet(current_identity(), pet_id, json_body())
        return {'msg': 'Pet atualizado com sucesso!', 'pet': pet_service.format_pet(pet)}, 200

    @token_required
    @pet_ns.doc('delete_pet', security='BearerAuth')
    def delete(self, pet_id):
        """Remove um pet"""
        pet_service.delete_pet(current_identity(), pet_id)
        return {'msg': 'Pet removido com sucesso!'}, 200
