from .user_model import User, Role
from .pet_model import Pet, PetSize
from .service_model import Service
from .appointment_model import Appointment, AppointmentStatus, ADVANCE_STATUSES
from .password_reset_model import PasswordResetToken
from .category_model import Category
from .product_model import Product

__all__ = [
    'User', 'Role',
    'Pet', 'PetSize',
    'Service',
    'Appointment', 'AppointmentStatus', 'ADVANCE_STATUSES',
    'PasswordResetToken',
    'Category',
    'Product',
]
