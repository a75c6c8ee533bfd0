import enum
from petshop import db


class Role(enum.Enum):
    ADMIN = 'ADMIN'
    CUSTOMER = 'CUSTOMER'
    EMPLOYEE = 'EMPLOYEE'


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(120), nullable=False)
    cpf = db.Column(db.String(11), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(200), nullable=False)
    role = db.Column(db.Enum(Role), nullable=False, default=Role.CUSTOMER)
    pets = db.relationship('Pet', backref='owner', lazy=True)
    appointments = db.relationship('Appointment', backref='owner', lazy=True)

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'
