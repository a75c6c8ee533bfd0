"""
Tests for self-service profile endpoints and the authorization gate.
"""
from flask_jwt_extended import create_access_token

from petshop import db
from petshop.models import Role, User
from conftest import CPF_B, PASSWORD, bearer


class TestProfile:
    def test_get_profile_hides_password_and_cpf(self, client, customer):
        response = client.get('/user/profile', headers=customer['headers'])

        assert response.status_code == 200
        user = response.get_json()['user']
        assert user == {'id': customer['id'], 'name': 'Ana Souza', 'email': 'ana@example.com', 'role': 'CUSTOMER'}

    def test_update_profile(self, client, customer):
        response = client.put('/user/profile', json={
            'name': 'Ana Maria', 'email': 'ana.maria@example.com', 'role': 'ADMIN'
        }, headers=customer['headers'])

        assert response.status_code == 200
        user = response.get_json()['user']
        assert user['name'] == 'Ana Maria'
        assert user['email'] == 'ana.maria@example.com'
        assert user['role'] == 'CUSTOMER'

    def test_update_rejects_taken_email(self, client, customer, other_customer):
        response = client.put('/user/profile', json={
            'name': 'Ana', 'email': other_customer['email']
        }, headers=customer['headers'])
        assert response.status_code == 422

    def test_update_rejects_invalid_cpf(self, client, customer):
        response = client.put('/user/profile', json={
            'name': 'Ana', 'email': 'ana@example.com', 'cpf': '123.456.789-00'
        }, headers=customer['headers'])
        assert response.status_code == 422

    def test_update_rejects_taken_cpf(self, client, customer, other_customer):
        response = client.put('/user/profile', json={
            'name': 'Ana', 'email': 'ana@example.com', 'cpf': CPF_B
        }, headers=customer['headers'])
        assert response.status_code == 422

    def test_profile_requires_token(self, client):
        assert client.get('/user/profile').status_code == 401


class TestChangePassword:
    def test_change_password(self, client, customer):
        response = client.put('/user/password', json={
            'currentPassword': PASSWORD, 'password': 'Trocada#99', 'confirmPassword': 'Trocada#99'
        }, headers=customer['headers'])

        assert response.status_code == 200
        login = client.post('/auth/login', json={'email': customer['email'], 'password': 'Trocada#99'})
        assert login.status_code == 200

    def test_wrong_current_password(self, client, customer):
        response = client.put('/user/password', json={
            'currentPassword': 'Errada#00', 'password': 'Trocada#99', 'confirmPassword': 'Trocada#99'
        }, headers=customer['headers'])
        assert response.status_code == 422

    def test_mismatched_confirmation(self, client, customer):
        response = client.put('/user/password', json={
            'currentPassword': PASSWORD, 'password': 'Trocada#99', 'confirmPassword': 'Trocada#98'
        }, headers=customer['headers'])
        assert response.status_code == 422


class TestAuthorizationGate:
    def test_admin_lists_users(self, client, admin, customer):
        response = client.get('/user/all', headers=admin['headers'])

        assert response.status_code == 200
        emails = [u['email'] for u in response.get_json()['users']]
        assert emails == ['admin@example.com', 'ana@example.com']

    def test_customer_is_forbidden(self, client, customer):
        response = client.get('/user/all', headers=customer['headers'])
        assert response.status_code == 403
        assert response.get_json() == {'msg': 'Acesso negado!'}

    def test_employee_is_not_admin(self, client, employee):
        assert client.get('/user/all', headers=employee['headers']).status_code == 403

    def test_unknown_subject_fails_closed(self, app, client):
        with app.app_context():
            token = create_access_token(identity='9999')
        assert client.get('/user/all', headers=bearer(token)).status_code == 403

    def test_role_is_read_fresh_from_database(self, app, client, customer):
        with app.app_context():
            db.session.get(User, customer['id']).role = Role.ADMIN
            db.session.commit()
        assert client.get('/user/all', headers=customer['headers']).status_code == 200

    def test_admin_assigns_role(self, client, admin, customer):
        response = client.put(f"/user/{customer['id']}/role", json={'role': 'employee'}, headers=admin['headers'])

        assert response.status_code == 200
        assert response.get_json()['user']['role'] == 'EMPLOYEE'

    def test_assign_unknown_role(self, client, admin, customer):
        response = client.put(f"/user/{customer['id']}/role", json={'role': 'OWNER'}, headers=admin['headers'])
        assert response.status_code == 422

    def test_assign_role_to_missing_user(self, client, admin):
        response = client.put('/user/9999/role', json={'role': 'EMPLOYEE'}, headers=admin['headers'])
        assert response.status_code == 404
