"""
Shared fixtures: one application per test session, a fresh schema per test
and ready-made accounts (two customers, an admin and an employee).
"""
from datetime import datetime, timedelta, timezone

import pytest

from petshop import bcrypt, create_app, db
from petshop.config import TestingConfig
from petshop.models import Category, Role, Service, User

PASSWORD = 'Senha@123'

# Reference CPFs with correct check digits
CPF_A = '52998224725'
CPF_B = '11144477735'
CPF_ADMIN = '12345678909'
CPF_EMPLOYEE = '98765432100'


@pytest.fixture(scope='session')
def app(tmp_path_factory):
    app = create_app(TestingConfig)
    app.config['UPLOAD_FOLDER'] = str(tmp_path_factory.mktemp('uploads'))
    return app


@pytest.fixture(autouse=True)
def fresh_db(app):
    with app.app_context():
        db.drop_all()
        db.create_all()
    yield
    with app.app_context():
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


def future_date(days=1, hours=0):
    return (datetime.now(timezone.utc) + timedelta(days=days, hours=hours)).isoformat()


def insert_user(app, name, cpf, email, role=Role.CUSTOMER, password=PASSWORD):
    with app.app_context():
        user = User(
            name=name,
            cpf=cpf,
            email=email,
            password=bcrypt.generate_password_hash(password).decode('utf-8'),
            role=role
        )
        db.session.add(user)
        db.session.commit()
        return user.id


def login(client, email, password=PASSWORD):
    response = client.post('/auth/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.get_json()
    return response.get_json()['token']


def _account(app, client, name, cpf, email, role):
    user_id = insert_user(app, name, cpf, email, role)
    token = login(client, email)
    return {'id': user_id, 'email': email, 'token': token, 'headers': bearer(token)}


@pytest.fixture
def customer(app, client):
    return _account(app, client, 'Ana Souza', CPF_A, 'ana@example.com', Role.CUSTOMER)


@pytest.fixture
def other_customer(app, client):
    return _account(app, client, 'Bruno Lima', CPF_B, 'bruno@example.com', Role.CUSTOMER)


@pytest.fixture
def admin(app, client):
    return _account(app, client, 'Admin', CPF_ADMIN, 'admin@example.com', Role.ADMIN)


@pytest.fixture
def employee(app, client):
    return _account(app, client, 'Carla Tosadora', CPF_EMPLOYEE, 'carla@example.com', Role.EMPLOYEE)


@pytest.fixture
def make_service(app):
    def _make(name, price, estimated_time):
        with app.app_context():
            service = Service(name=name, price=price, estimated_time=estimated_time)
            db.session.add(service)
            db.session.commit()
            return service.id
    return _make


@pytest.fixture
def make_category(app):
    def _make(name):
        with app.app_context():
            category = Category(name=name)
            db.session.add(category)
            db.session.commit()
            return category.id
    return _make


@pytest.fixture
def make_pet(client):
    def _make(headers, name='Rex', size='médio', age=3, breed='Vira-lata', notes=None):
        response = client.post('/pets', json={
            'name': name, 'size': size, 'age': age, 'breed': breed, 'notes': notes
        }, headers=headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['pet']['id']
    return _make
