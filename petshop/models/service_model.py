from petshop import db


class Service(db.Model):
    __tablename__ = 'service'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    price = db.Column(db.Float, nullable=False)
    estimated_time = db.Column(db.Integer, nullable=False)  # minutes

    def __repr__(self):
        return f'<Service {self.name}>'
