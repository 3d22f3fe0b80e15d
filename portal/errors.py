"""Domain errors raised by the portal services and gates.

Each error carries the HTTP status and user-visible message it maps to; the
handlers registered in ``portal.main`` turn them into responses.
"""


class PortalError(Exception):
    status_code = 500
    message = 'Something went wrong.'

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidCredentials(PortalError):
    status_code = 401
    message = 'Invalid email or password.'


class SessionError(PortalError):
    status_code = 500
    message = 'Session error. Please try again.'


class Unauthenticated(PortalError):
    status_code = 303
    message = 'Sign in or continue as a guest.'


class Forbidden(PortalError):
    status_code = 403
    message = 'Access denied. Admins only.'


class InvalidCategory(PortalError):
    status_code = 400
    message = 'Invalid category.'


class InvalidInput(PortalError):
    status_code = 400
    message = 'Please complete all required fields and use a valid category.'

    def __init__(self, fields: list[str], message: str | None = None):
        super().__init__(message)
        self.fields = fields


class NotFound(PortalError):
    status_code = 404
    message = 'Tool not found.'
