"""Appointment booking and status lifecycle.

An appointment freezes a copy of the pet and of every booked service when it
is created. Totals are computed from that copy once and stored; later edits to
the pet or to the service catalog never reach existing appointments.

Status flow::

    pendente -> em andamento | a pagar | concluído   (staff, any order)
    pendente -> cancelado                            (owner)

``cancelado`` and ``concluído`` accept no further status writes.
"""
import logging
from datetime import datetime, timezone

from dateutil.parser import isoparse
from flask import current_app

from petshop import db
from petshop.errors import Conflict, NotFound, ValidationError
from petshop.models import (
    ADVANCE_STATUSES, Appointment, AppointmentStatus, Pet, Service
)
from petshop.utils.role_utils import is_privileged
from petshop.utils.util import commit_changes
from petshop.utils.validators import parse_id_list, parse_positive_int, require_fields

logger = logging.getLogger(__name__)

CANCELLED_LOCKED_MSG = 'Agendamentos cancelados não podem ser modificados!'


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_appointment(appointment):
    return {
        'id': appointment.id,
        'userId': appointment.user_id,
        'pet': appointment.pet,
        'services': appointment.services,
        'scheduledDate': appointment.scheduled_date.isoformat(),
        'totalPrice': appointment.total_price,
        'totalEstimatedTime': appointment.total_estimated_time,
        'status': appointment.status.value,
        'createdAt': appointment.created_at.isoformat() if appointment.created_at else None
    }


def parse_scheduled_date(raw):
    """Parse an ISO-8601 timestamp into naive UTC; it must lie in the future."""
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError('A data do agendamento é obrigatória!')
    try:
        scheduled = isoparse(raw.strip())
    except (ValueError, OverflowError):
        raise ValidationError('Data inválida! Use o formato ISO (AAAA-MM-DDTHH:MM:SS).')
    if scheduled.tzinfo is not None:
        scheduled = scheduled.astimezone(timezone.utc).replace(tzinfo=None)
    if scheduled <= _utcnow():
        raise ValidationError('A data do agendamento deve ser no futuro!')
    return scheduled


def snapshot_pet(pet):
    return {
        'petId': pet.id,
        'name': pet.name,
        'size': pet.size.value,
        'age': pet.age,
        'breed': pet.breed,
        'notes': pet.notes
    }


def snapshot_service(service):
    return {
        'serviceId': service.id,
        'name': service.name,
        'price': service.price,
        'estimatedTime': service.estimated_time
    }


def compute_totals(service_snapshots):
    total_price = round(sum(s['price'] for s in service_snapshots), 2)
    total_time = sum(s['estimatedTime'] for s in service_snapshots)
    return total_price, total_time


def _load_services(service_ids):
    services = Service.query.filter(Service.id.in_(service_ids)).all()
    by_id = {service.id: service for service in services}
    missing = [sid for sid in service_ids if sid not in by_id]
    if missing:
        raise NotFound(f"Serviço(s) não encontrado(s): {', '.join(str(m) for m in missing)}")
    return [by_id[sid] for sid in service_ids]


def create_appointment(identity, data):
    require_fields(data, ('petId', 'O pet é obrigatório!'))
    pet_id = parse_positive_int(data['petId'], 'Identificador de pet inválido!')
    service_ids = parse_id_list(data.get('serviceIds'), 'Selecione ao menos um serviço válido!')
    scheduled_date = parse_scheduled_date(data.get('scheduledDate'))

    pet = db.session.get(Pet, pet_id)
    if not pet or pet.user_id != identity.user_id:
        raise NotFound('Pet não encontrado!')
    services = _load_services(service_ids)

    service_snapshots = [snapshot_service(s) for s in services]
    total_price, total_time = compute_totals(service_snapshots)

    appointment = Appointment(
        user_id=identity.user_id,
        pet=snapshot_pet(pet),
        services=service_snapshots,
        scheduled_date=scheduled_date,
        total_price=total_price,
        total_estimated_time=total_time,
        status=AppointmentStatus.PENDING
    )
    db.session.add(appointment)
    commit_changes('create appointment')
    logger.info(f"Appointment created: ID {appointment.id} for user {identity.user_id}, total {total_price}")
    return appointment


def list_appointments(identity):
    return (Appointment.query
            .filter_by(user_id=identity.user_id)
            .order_by(Appointment.scheduled_date.asc())
            .all())


def list_all_appointments(raw_status=None):
    query = Appointment.query
    if raw_status:
        status = AppointmentStatus.parse(raw_status)
        if status is None:
            raise ValidationError('Status inválido!')
        query = query.filter_by(status=status)
    return query.order_by(Appointment.scheduled_date.asc()).all()


def get_appointment(identity, appointment_id):
    appointment = db.session.get(Appointment, appointment_id)
    if not appointment:
        raise NotFound('Agendamento não encontrado!')
    if appointment.user_id != identity.user_id and not is_privileged(identity.user_id):
        raise NotFound('Agendamento não encontrado!')
    return appointment


def _cancellable_statuses():
    if current_app.config.get('ALLOW_LATE_CANCELLATION'):
        return (AppointmentStatus.PENDING, AppointmentStatus.IN_PROGRESS, AppointmentStatus.AWAITING_PAYMENT)
    return (AppointmentStatus.PENDING,)


def cancel_appointment(identity, appointment_id):
    appointment = db.session.get(Appointment, appointment_id)
    if not appointment or appointment.user_id != identity.user_id:
        raise NotFound('Agendamento não encontrado!')

    if appointment.status == AppointmentStatus.CANCELLED:
        raise Conflict('Este agendamento já foi cancelado!')
    if appointment.status == AppointmentStatus.COMPLETED:
        raise Conflict('Agendamentos concluídos não podem ser cancelados!')
    if appointment.status not in _cancellable_statuses():
        raise Conflict(f'Agendamentos com status "{appointment.status.value}" não podem ser cancelados!')

    appointment.status = AppointmentStatus.CANCELLED
    commit_changes('cancel appointment')
    logger.info(f"Appointment cancelled: ID {appointment.id} by user {identity.user_id}")
    return appointment


def advance_status(appointment_id, raw_status):
    """Staff status update. No ordering is enforced between the three targets."""
    appointment = db.session.get(Appointment, appointment_id)
    if not appointment:
        raise NotFound('Agendamento não encontrado!')

    if appointment.status == AppointmentStatus.CANCELLED:
        raise Conflict(CANCELLED_LOCKED_MSG)
    if appointment.status == AppointmentStatus.COMPLETED:
        raise Conflict('Agendamentos concluídos não podem ser modificados!')

    status = AppointmentStatus.parse(raw_status)
    if status not in ADVANCE_STATUSES:
        allowed = ', '.join(s.value for s in ADVANCE_STATUSES)
        raise ValidationError(f'Status inválido! Valores permitidos: {allowed}.')

    previous = appointment.status
    appointment.status = status
    commit_changes('update appointment status')
    logger.info(f"Appointment {appointment.id} status {previous.value} -> {status.value}")
    return appointment
