class ReadlogError(Exception):
    status_code = 500

    def __init__(self, message: str, errors: dict[str, str] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class MalformedRequest(ReadlogError):
    status_code = 400

    def __init__(self, message: str = "Invalid Request"):
        super().__init__(message, {"body": "Failed to parse request body"})


class ValidationFailed(ReadlogError):
    status_code = 400

    def __init__(self, errors: dict[str, str]):
        super().__init__("Validation failed", errors)


class NotFound(ReadlogError):
    status_code = 404


class CredentialsError(ReadlogError):
    status_code = 401


class Forbidden(ReadlogError):
    status_code = 403


class PersistenceError(ReadlogError):
    status_code = 500
