import enum
from datetime import datetime, timezone

from petshop import db


class AppointmentStatus(enum.Enum):
    PENDING = 'pendente'
    IN_PROGRESS = 'em andamento'
    AWAITING_PAYMENT = 'a pagar'
    COMPLETED = 'concluído'
    CANCELLED = 'cancelado'

    @classmethod
    def parse(cls, raw):
        """Accept either the stored value ('a pagar') or the name ('awaiting_payment')."""
        if not isinstance(raw, str):
            return None
        raw = raw.strip()
        for status in cls:
            if raw == status.value or raw.upper() == status.name:
                return status
        return None


# Statuses staff may set once a booking has been made
ADVANCE_STATUSES = (
    AppointmentStatus.IN_PROGRESS,
    AppointmentStatus.AWAITING_PAYMENT,
    AppointmentStatus.COMPLETED,
)


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Appointment(db.Model):
    __tablename__ = 'appointment'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    # Snapshots taken at booking time, never refreshed from the live rows
    pet = db.Column(db.JSON, nullable=False)
    services = db.Column(db.JSON, nullable=False)
    scheduled_date = db.Column(db.DateTime, nullable=False)
    total_price = db.Column(db.Float, nullable=False)
    total_estimated_time = db.Column(db.Integer, nullable=False)
    status = db.Column(db.Enum(AppointmentStatus), nullable=False, default=AppointmentStatus.PENDING)
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow)

    def __repr__(self):
        return f'<Appointment {self.id} by User {self.user_id} ({self.status})>'
