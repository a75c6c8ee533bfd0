import enum
from petshop import db


class PetSize(enum.Enum):
    SMALL = 'pequeno'
    MEDIUM = 'médio'
    LARGE = 'grande'


class Pet(db.Model):
    __tablename__ = 'pet'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'name', name='uq_pet_owner_name'),
    )
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    size = db.Column(db.Enum(PetSize), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    breed = db.Column(db.String(100), nullable=False)
    notes = db.Column(db.String(500))

    def __repr__(self):
        return f'<Pet {self.name} ({self.breed})>'
