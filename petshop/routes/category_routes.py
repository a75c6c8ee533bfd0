from flask_restx import Namespace, Resource, fields

from petshop.models import Role
from petshop.services import category_service
from petshop.utils import role_required, json_body


category_ns = Namespace('categories', description='Categorias de produtos')

category_model = category_ns.model('Category', {
    'name': fields.String(required=True, description='Nome da categoria')
})


@category_ns.route('')
class CategoryList(Resource):
    def get(self):
        """Lista as categorias (público)"""
        categories = category_service.list_categories()
        return {'categories': [category_service.format_category(c) for c in categories]}, 200

    @role_required(Role.ADMIN)
    @category_ns.expect(category_model)
    @category_ns.doc(security='BearerAuth')
    def post(self):
        """Cria uma categoria (apenas ADMIN)"""
        category = category_service.create_category(json_body())
        return {'msg': 'Categoria criada com sucesso!', 'category': category_service.format_category(category)}, 201


@category_ns.route('/<int:category_id>')
class CategoryResource(Resource):
    def get(self, category_id):
        """Busca uma categoria (público)"""
        category = category_service.get_category(category_id)
        return {'category': category_service.format_category(category)}, 200

    @role_required(Role.ADMIN)
    @category_ns.expect(category_model)
    @category_ns.doc(security='BearerAuth')
    def put(self, category_id):
        """Renomeia uma categoria (apenas ADMIN)"""
        category = category_service.update_category(category_id, json_body())
        return {'msg': 'Categoria atualizada com sucesso!', 'category': category_service.format_category(category)}, 200

    @role_required(Role.ADMIN)
    @category_ns.doc(security='BearerAuth')
    def delete(self, category_id):
        """Remove uma categoria sem produtos (apenas ADMIN)"""
        category_service.delete_category(category_id)
        return {'msg': 'Categoria removida com sucesso!'}, 200
