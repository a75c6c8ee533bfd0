# run.py
import click
from flask.cli import with_appcontext

from petshop import create_app, db, bcrypt
from petshop.models import Role, User
from petshop.utils.validators import is_strong_password, is_valid_cpf, is_valid_email, normalize_cpf

app = create_app()


@app.cli.command('init-db')
@with_appcontext
def init_db():
    db.create_all()
    print('Database initialized.')


@app.cli.command('create-admin')
@click.option('--name', prompt=True)
@click.option('--cpf', prompt=True)
@click.option('--email', prompt=True)
@click.password_option()
@with_appcontext
def create_admin(name, cpf, email, password):
    """Create the first ADMIN account (registration only creates customers)."""
    cpf = normalize_cpf(cpf)
    if not is_valid_cpf(cpf) or not is_valid_email(email) or not is_strong_password(password):
        raise click.BadParameter('Invalid CPF, email or weak password.')
    if User.query.filter((User.email == email) | (User.cpf == cpf)).first():
        raise click.BadParameter('An account with this email or CPF already exists.')
    db.session.add(User(
        name=name,
        cpf=cpf,
        email=email,
        password=bcrypt.generate_password_hash(password).decode('utf-8'),
        role=Role.ADMIN
    ))
    db.session.commit()
    print(f'Admin {email} created.')


if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
