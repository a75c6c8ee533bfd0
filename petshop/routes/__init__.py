# petshop/routes/__init__.py
from .auth_routes import auth_ns
from .users_routes import users_ns
from .pet_routes import pet_ns
from .service_routes import service_ns
from .appointment_routes import appointment_ns
from .category_routes import category_ns
from .product_routes import product_ns


def register_namespaces(api):
    api.add_namespace(auth_ns)
    api.add_namespace(users_ns)
    api.add_namespace(pet_ns)
    api.add_namespace(service_ns)
    api.add_namespace(appointment_ns)
    api.add_namespace(category_ns)
    api.add_namespace(product_ns)
