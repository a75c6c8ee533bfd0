"""Error taxonomy shared by services and routes.

Every error is rendered as ``{"msg": <string>}`` with the status code carried
by the exception. Services raise these, the handlers registered on the API in
``register_error_handlers`` turn them into responses. Any other exception is
logged and answered with a generic 500.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MSG = 'Ocorreu um erro no servidor, tente novamente mais tarde!'


class ApiError(Exception):
    status_code = 500

    def __init__(self, msg, status_code=None):
        super().__init__(msg)
        self.msg = msg
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    status_code = 422


class Unauthenticated(ApiError):
    """Missing credential (401) or a credential that failed verification (400)."""
    status_code = 401

    def __init__(self, msg, missing=True):
        super().__init__(msg, 401 if missing else 400)
        self.missing = missing


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    status_code = 400


class InternalError(ApiError):
    status_code = 500

    def __init__(self, msg=GENERIC_ERROR_MSG):
        super().__init__(msg)


def register_error_handlers(api):
    @api.errorhandler(ApiError)
    def handle_api_error(error):
        return {'msg': error.msg}, error.status_code

    @api.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        from . import db
        db.session.rollback()
        logger.exception(f"Unhandled database error: {error}")
        return {'msg': GENERIC_ERROR_MSG}, 500

    @api.errorhandler(HTTPException)
    def handle_http_error(error):
        return {'msg': error.description}, error.code

    @api.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception(f"Unhandled error: {error}")
        return {'msg': GENERIC_ERROR_MSG}, 500
