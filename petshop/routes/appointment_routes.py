from flask_restx import Namespace, Resource, fields
from flask import request

from petshop.models import ADVANCE_STATUSES
from petshop.services import appointment_service
from petshop.utils import PRIVILEGED_ROLES, current_identity, role_required, token_required, json_body


appointment_ns = Namespace('appointments', description='Agendamentos de banho e tosa')

appointment_model = appointment_ns.model('Appointment', {
    'petId': fields.Integer(required=True, description='ID do pet'),
    'serviceIds': fields.List(fields.Integer, required=True, description='IDs dos serviços'),
    'scheduledDate': fields.String(required=True, description='Data no formato ISO')
})

status_model = appointment_ns.model('AppointmentStatus', {
    'status': fields.String(required=True, enum=[s.value for s in ADVANCE_STATUSES], description='Novo status')
})


def _format_all(appointments):
    return [appointment_service.format_appointment(a) for a in appointments]


@appointment_ns.route('')
class AppointmentList(Resource):
    @token_required
    @appointment_ns.doc(security='BearerAuth')
    def get(self):
        """Agendamentos do usuário, do mais próximo ao mais distante"""
        appointments = appointment_service.list_appointments(current_identity())
        return {'appointments': _format_all(appointments)}, 200

    @token_required
    @appointment_ns.expect(appointment_model)
    @appointment_ns.doc(security='BearerAuth')
    def post(self):
        """Agenda serviços para um pet do usuário"""
        appointment = appointment_service.create_appointment(current_identity(), json_body())
        return {
            'msg': 'Agendamento criado com sucesso!',
            'appointment': appointment_service.format_appointment(appointment)
        }, 201


@appointment_ns.route('/all')
class AllAppointments(Resource):
    @role_required(*PRIVILEGED_ROLES)
    @appointment_ns.doc(security='BearerAuth', params={'status': 'Filtra por status'})
    def get(self):
        """Todos os agendamentos (ADMIN ou EMPLOYEE)"""
        appointments = appointment_service.list_all_appointments(request.args.get('status'))
        return {'appointments': _format_all(appointments)}, 200


@appointment_ns.route('/<int:appointment_id>')
class AppointmentResource(Resource):
    @token_required
    @appointment_ns.doc(security='BearerAuth')
    def get(self, appointment_id):
        """Busca um agendamento do usuário (ou qualquer um, para ADMIN/EMPLOYEE)"""
        appointment = appointment_service.get_appointment(current_identity(), appointment_id)
        return {'appointment': appointment_service.format_appointment(appointment)}, 200


@appointment_ns.route('/cancel/<int:appointment_id>')
class CancelAppointment(Resource):
    @token_required
    @appointment_ns.doc(security='BearerAuth')
    def put(self, appointment_id):
        """Cancela um agendamento do usuário"""
        appointment = appointment_service.cancel_appointment(current_identity(), appointment_id)
        return {
            'msg': 'Agendamento cancelado com sucesso!',
            'appointment': appointment_service.format_appointment(appointment)
        }, 200


@appointment_ns.route('/status/<int:appointment_id>')
class AppointmentStatusResource(Resource):
    @role_required(*PRIVILEGED_ROLES)
    @appointment_ns.expect(status_model)
    @appointment_ns.doc(security='BearerAuth')
    def put(self, appointment_id):
        """Atualiza o status de um agendamento (ADMIN ou EMPLOYEE)"""
        appointment = appointment_service.advance_status(appointment_id, json_body().get('status'))
        return {
            'msg': 'Status atualizado com sucesso!',
            'appointment': appointment_service.format_appointment(appointment)
        }, 200
