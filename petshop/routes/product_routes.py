import logging

from flask_restx import Namespace, Resource, fields, reqparse
from flask import request, send_file
from werkzeug.datastructures import FileStorage

from petshop.models import Role
from petshop.services import product_service
from petshop.utils import role_required, json_body


logger = logging.getLogger(__name__)

product_ns = Namespace('products', description='Produtos da loja', path='/products')

product_model = product_ns.model('Product', {
    'name': fields.String(description='Nome do produto'),
    'description': fields.String(description='Descrição'),
    'price': fields.Float(min=0, description='Preço'),
    'quantity': fields.Integer(min=0, description='Quantidade em estoque'),
    'category': fields.Integer(description='ID da categoria')
})

# Multipart form parser, used for documentation of uploads
product_parser = reqparse.RequestParser()
product_parser.add_argument('name', type=str, location='form', help='Nome do produto')
product_parser.add_argument('description', type=str, location='form', help='Descrição')
product_parser.add_argument('price', type=float, location='form', help='Preço')
product_parser.add_argument('quantity', type=int, location='form', help='Quantidade em estoque')
product_parser.add_argument('category', type=int, location='form', help='ID da categoria')
product_parser.add_argument('image', type=FileStorage, location='files', help='Imagem do produto')


def product_payload():
    """Form fields for multipart requests, JSON body otherwise."""
    if request.content_type and request.content_type.startswith('multipart/form-data'):
        return request.form.to_dict(), request.files.get('image')
    return json_body(), None


@product_ns.route('')
class ProductList(Resource):
    @product_ns.doc('list_products', params={'category': 'Filtra por categoria'})
    def get(self):
        """Lista os produtos (público)"""
        products = product_service.list_products(request.args.get('category'))
        logger.debug(f"Retrieved {len(products)} products")
        return {'products': [product_service.format_product(p) for p in products]}, 200

    @role_required(Role.ADMIN)
    @product_ns.expect(product_parser)
    @product_ns.doc('create_product', security='BearerAuth')
    def post(self):
        """Cria um produto com imagem opcional (apenas ADMIN)"""
        data, image = product_payload()
        product = product_service.create_product(data, image)
        return {'msg': 'Produto criado com sucesso!', 'product': product_service.format_product(product)}, 201


@product_ns.route('/<int:product_id>')
class ProductResource(Resource):
    @product_ns.doc('get_product')
    def get(self, product_id):
        """Busca um produto (público)"""
        product = product_service.get_product(product_id)
        return {'product': product_service.format_product(product)}, 200

    @role_required(Role.ADMIN)
    @product_ns.expect(product_model, product_parser)
    @product_ns.doc('update_product', security='BearerAuth')
    def put(self, product_id):
        """Atualiza apenas os campos enviados (apenas ADMIN)"""
        data, image = product_payload()
        product = product_service.update_product(product_id, data, image)
        return {'msg': 'Produto atualizado com sucesso!', 'product': product_service.format_product(product)}, 200

    @role_required(Role.ADMIN)
    @product_ns.doc('delete_product', security='BearerAuth')
    def delete(self, product_id):
        """Remove um produto e sua imagem (apenas ADMIN)"""
        product_service.delete_product(product_id)
        return {'msg': 'Produto removido com sucesso!'}, 200


@product_ns.route('/image/<int:product_id>')
class ProductImage(Resource):
    @product_ns.doc('get_product_image')
    def get(self, product_id):
        """Devolve a imagem do produto"""
        path, content_type = product_service.get_product_image(product_id)
        return send_file(path, mimetype=content_type)
