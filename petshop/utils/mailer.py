import logging
import smtplib
from email.mime.text import MIMEText

from flask import current_app

logger = logging.getLogger(__name__)


def send_email(to_email, subject, body):
    config = current_app.config
    if config.get('MAIL_SUPPRESS_SEND'):
        logger.info(f"Mail sending suppressed: '{subject}' to {to_email}")
        return

    message = MIMEText(body, 'plain', 'utf-8')
    message['Subject'] = subject
    message['From'] = config['MAIL_DEFAULT_SENDER']
    message['To'] = to_email

    with smtplib.SMTP(config['MAIL_SERVER'], config['MAIL_PORT'], timeout=10) as server:
        if config.get('MAIL_USE_TLS'):
            server.starttls()
        if config.get('MAIL_USERNAME'):
            server.login(config['MAIL_USERNAME'], config['MAIL_PASSWORD'])
        server.sendmail(config['MAIL_DEFAULT_SENDER'], [to_email], message.as_string())
    logger.info(f"Mail '{subject}' sent to {to_email}")


def send_reset_code(to_email, code, ttl_minutes):
    body = (
        'Olá!\n\n'
        f'Seu código para redefinir a senha é: {code}\n'
        f'O código é válido por {ttl_minutes} minutos.\n\n'
        'Se você não solicitou a redefinição, ignore este email.'
    )
    send_email(to_email, 'PetShop - Código de redefinição de senha', body)
