from flask_restx import Namespace, Resource, fields

from petshop.services import auth_service
from petshop.utils import json_body


auth_ns = Namespace('auth', description='Cadastro, login e recuperação de senha')

register_model = auth_ns.model('Register', {
    'name': fields.String(required=True, description='Nome completo'),
    'cpf': fields.String(required=True, description='CPF (com ou sem pontuação)'),
    'email': fields.String(required=True, description='Email'),
    'password': fields.String(required=True, description='Senha'),
    'confirmPassword': fields.String(required=True, description='Confirmação da senha')
})

login_model = auth_ns.model('Login', {
    'email': fields.String(required=True, description='Email'),
    'password': fields.String(required=True, description='Senha')
})

forgot_model = auth_ns.model('ForgotPassword', {
    'email': fields.String(required=True, description='Email da conta')
})

verify_code_model = auth_ns.model('VerifyCode', {
    'email': fields.String(required=True, description='Email da conta'),
    'code': fields.String(required=True, description='Código de 6 dígitos')
})

reset_model = auth_ns.inherit('ResetPassword', verify_code_model, {
    'password': fields.String(required=True, description='Nova senha'),
    'confirmPassword': fields.String(required=True, description='Confirmação da nova senha')
})


@auth_ns.route('/register')
class Register(Resource):
    @auth_ns.expect(register_model)
    def post(self):
        """Cadastro de um novo cliente"""
        auth_service.register_user(json_body())
        return {'msg': 'Usuário criado com sucesso!'}, 201


@auth_ns.route('/login')
class Login(Resource):
    @auth_ns.expect(login_model)
    def post(self):
        """Login; devolve um token válido por 1 hora"""
        token = auth_service.authenticate(json_body())
        return {'msg': 'Autenticação realizada com sucesso!', 'token': token}, 200


@auth_ns.route('/forgot-password')
class ForgotPassword(Resource):
    @auth_ns.expect(forgot_model)
    def post(self):
        """Envia um código de redefinição de senha por email"""
        auth_service.issue_reset_code(json_body())
        return {'msg': 'Código de redefinição enviado para o seu email!'}, 200


@auth_ns.route('/verify-code')
class VerifyCode(Resource):
    @auth_ns.expect(verify_code_model)
    def post(self):
        """Confere se o código de redefinição é válido"""
        auth_service.verify_reset_code(json_body())
        return {'msg': 'Código válido!'}, 200


@auth_ns.route('/reset-password')
class ResetPassword(Resource):
    @auth_ns.expect(reset_model)
    def post(self):
        """Redefine a senha usando o código recebido"""
        auth_service.reset_password(json_body())
        return {'msg': 'Senha redefinida com sucesso!'}, 200
