from flask_restx import Namespace, Resource, fields

from petshop.models import Role
from petshop.services import user_service
from petshop.utils import current_identity, role_required, token_required, json_body


users_ns = Namespace('user', description='Perfil do usuário e gestão de funções')

profile_model = users_ns.model('Profile', {
    'name': fields.String(required=True, description='Nome completo'),
    'email': fields.String(required=True, description='Email'),
    'cpf': fields.String(description='CPF (opcional)')
})

password_model = users_ns.model('ChangePassword', {
    'currentPassword': fields.String(required=True, description='Senha atual'),
    'password': fields.String(required=True, description='Nova senha'),
    'confirmPassword': fields.String(required=True, description='Confirmação da nova senha')
})

role_update_model = users_ns.model('RoleUpdate', {
    'role': fields.String(required=True, description='ADMIN, CUSTOMER ou EMPLOYEE')
})


@users_ns.route('/profile')
class Profile(Resource):
    @token_required
    @users_ns.doc(security='BearerAuth')
    def get(self):
        """Dados do usuário autenticado"""
        user = user_service.get_profile(current_identity())
        return {'user': user_service.format_user(user)}, 200

    @token_required
    @users_ns.expect(profile_model)
    @users_ns.doc(security='BearerAuth')
    def put(self):
        """Atualiza nome, email e CPF do usuário autenticado"""
        user = user_service.update_profile(current_identity(), json_body())
        return {'msg': 'Usuário atualizado com sucesso!', 'user': user_service.format_user(user)}, 200


@users_ns.route('/password')
class ChangePassword(Resource):
    @token_required
    @users_ns.expect(password_model)
    @users_ns.doc(security='BearerAuth')
    def put(self):
        """Troca a senha do usuário autenticado"""
        user_service.change_password(current_identity(), json_body())
        return {'msg': 'Senha alterada com sucesso!'}, 200


@users_ns.route('/all')
class UserList(Resource):
    @role_required(Role.ADMIN)
    @users_ns.doc(security='BearerAuth')
    def get(self):
        """Lista todos os usuários (apenas ADMIN)"""
        users = user_service.list_users()
        return {'users': [user_service.format_user(u) for u in users]}, 200


@users_ns.route('/<int:user_id>/role')
class UserRole(Resource):
    @role_required(Role.ADMIN)
    @users_ns.expect(role_update_model)
    @users_ns.doc(security='BearerAuth')
    def put(self, user_id):
        """Altera a função de um usuário (apenas ADMIN)"""
        user = user_service.assign_role(user_id, json_body().get('role'))
        return {'msg': 'Função atualizada com sucesso!', 'user': user_service.format_user(user)}, 200
