"""
Error taxonomy shared by every endpoint.

Handlers raise one of these; the app-level exception handlers in
`learn_note.main` turn them into `{"message", "status"}` JSON bodies.
"""


class APIError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"message": self.message, "status": self.status_code}


class AuthenticationError(APIError):
    status_code = 401


class ValidationFailure(APIError):
    status_code = 400


class ReferenceInvalid(APIError):
    status_code = 400


class Conflict(APIError):
    status_code = 400


class NotFound(APIError):
    status_code = 404
