"""
Tests for product categories and products, including image uploads.
"""
import io
import os

import pytest

from petshop import db
from petshop.models import Product

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 32


def upload(name='photo.png', content=PNG_BYTES):
    return (io.BytesIO(content), name, 'image/png')


@pytest.fixture
def category_id(make_category):
    return make_category('Rações')


@pytest.fixture
def product(client, admin, category_id):
    response = client.post('/products', data={
        'name': 'Ração Premium',
        'description': 'Saco de 10kg',
        'price': '129.90',
        'quantity': '5',
        'category': str(category_id),
        'image': upload(),
    }, headers=admin['headers'], content_type='multipart/form-data')
    assert response.status_code == 201, response.get_json()
    return response.get_json()['product']


def stored_image(app, product_id):
    with app.app_context():
        name = db.session.get(Product, product_id).image
        return os.path.join(app.config['UPLOAD_FOLDER'], name) if name else None


class TestCategories:
    def test_create_and_list(self, client, admin):
        response = client.post('/categories', json={'name': 'Brinquedos'}, headers=admin['headers'])
        assert response.status_code == 201

        response = client.get('/categories')
        assert [c['name'] for c in response.get_json()['categories']] == ['Brinquedos']

    def test_duplicate_name(self, client, admin, category_id):
        response = client.post('/categories', json={'name': 'Rações'}, headers=admin['headers'])
        assert response.status_code == 409

    def test_rename(self, client, admin, category_id, make_category):
        make_category('Coleiras')
        response = client.put(f'/categories/{category_id}', json={'name': 'Alimentos'}, headers=admin['headers'])
        assert response.get_json()['category']['name'] == 'Alimentos'

        response = client.put(f'/categories/{category_id}', json={'name': 'Coleiras'}, headers=admin['headers'])
        assert response.status_code == 409

    def test_rename_to_same_name(self, client, admin, category_id):
        response = client.put(f'/categories/{category_id}', json={'name': 'Rações'}, headers=admin['headers'])
        assert response.status_code == 200

    def test_blank_name(self, client, admin):
        response = client.post('/categories', json={'name': '  '}, headers=admin['headers'])
        assert response.status_code == 422

    def test_delete_blocked_while_products_exist(self, client, admin, category_id, product):
        response = client.delete(f'/categories/{category_id}', headers=admin['headers'])
        assert response.status_code == 400

        client.delete(f"/products/{product['id']}", headers=admin['headers'])
        assert client.delete(f'/categories/{category_id}', headers=admin['headers']).status_code == 200
        assert client.get(f'/categories/{category_id}').status_code == 404

    def test_customer_cannot_write(self, client, customer, category_id):
        assert client.post('/categories', json={'name': 'X'}, headers=customer['headers']).status_code == 403
        assert client.delete(f'/categories/{category_id}', headers=customer['headers']).status_code == 403


class TestProducts:
    def test_create_with_image(self, app, product, category_id):
        assert product['name'] == 'Ração Premium'
        assert product['price'] == 129.90
        assert product['quantity'] == 5
        assert product['category'] == category_id
        assert product['image'] == f"/products/image/{product['id']}"
        assert os.path.exists(stored_image(app, product['id']))

    def test_serve_image(self, client, product):
        response = client.get(product['image'])
        try:
            assert response.status_code == 200
            assert response.mimetype == 'image/png'
            assert response.data == PNG_BYTES
        finally:
            response.close()

    def test_create_with_json_without_image(self, client, admin, category_id):
        response = client.post('/products', json={
            'name': 'Coleira', 'price': 25, 'quantity': 0, 'category': category_id
        }, headers=admin['headers'])

        assert response.status_code == 201
        product = response.get_json()['product']
        assert product['image'] is None
        assert client.get(f"/products/image/{product['id']}").status_code == 404

    def test_rejects_disallowed_extension(self, client, admin, category_id):
        response = client.post('/products', data={
            'name': 'Coleira', 'price': '25', 'quantity': '1', 'category': str(category_id),
            'image': (io.BytesIO(b'MZ'), 'virus.exe', 'application/octet-stream'),
        }, headers=admin['headers'], content_type='multipart/form-data')
        assert response.status_code == 422

    @pytest.mark.parametrize('field, value', [('price', -1), ('quantity', -3), ('quantity', 1.5), ('name', '')])
    def test_invalid_fields(self, client, admin, category_id, field, value):
        payload = {'name': 'Coleira', 'price': 25, 'quantity': 1, 'category': category_id}
        payload[field] = value
        assert client.post('/products', json=payload, headers=admin['headers']).status_code == 422

    def test_unknown_category(self, client, admin):
        response = client.post('/products', json={
            'name': 'Coleira', 'price': 25, 'quantity': 1, 'category': 9999
        }, headers=admin['headers'])
        assert response.status_code == 404

    def test_list_filtered_by_category(self, client, admin, product, make_category):
        toys = make_category('Brinquedos')
        client.post('/products', json={'name': 'Bolinha', 'price': 9.9, 'quantity': 10, 'category': toys},
                    headers=admin['headers'])

        assert len(client.get('/products').get_json()['products']) == 2
        filtered = client.get(f'/products?category={toys}').get_json()['products']
        assert [p['name'] for p in filtered] == ['Bolinha']

    @pytest.mark.parametrize('category', ['abc', '0', '-2'])
    def test_invalid_category_filter(self, client, category):
        response = client.get(f'/products?category={category}')

        assert response.status_code == 422
        assert response.get_json() == {'msg': 'Categoria inválida!'}

    def test_partial_update(self, client, admin, product):
        response = client.put(f"/products/{product['id']}", json={'quantity': 2}, headers=admin['headers'])

        assert response.status_code == 200
        updated = response.get_json()['product']
        assert updated['quantity'] == 2
        assert updated['name'] == product['name']
        assert updated['price'] == product['price']

    def test_update_rejects_negative_quantity(self, client, admin, product):
        response = client.put(f"/products/{product['id']}", json={'quantity': -1}, headers=admin['headers'])
        assert response.status_code == 422

    def test_update_replaces_image(self, app, client, admin, product):
        old_path = stored_image(app, product['id'])
        response = client.put(f"/products/{product['id']}", data={'image': upload('new.png', b'new-bytes')},
                              headers=admin['headers'], content_type='multipart/form-data')

        assert response.status_code == 200
        new_path = stored_image(app, product['id'])
        assert new_path != old_path
        assert os.path.exists(new_path)
        assert not os.path.exists(old_path)

    def test_delete_removes_image(self, app, client, admin, product):
        path = stored_image(app, product['id'])

        assert client.delete(f"/products/{product['id']}", headers=admin['headers']).status_code == 200
        assert not os.path.exists(path)
        assert client.get(f"/products/{product['id']}").status_code == 404

    def test_customer_cannot_write(self, client, customer, product):
        response = client.put(f"/products/{product['id']}", json={'quantity': 0}, headers=customer['headers'])
        assert response.status_code == 403
