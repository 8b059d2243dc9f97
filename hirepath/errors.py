"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``create_app`` turns any of them into a JSON body
``{"error": message}`` with the error's status code.
"""


class HirePathError(Exception):
    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(HirePathError):
    """Caller supplied missing or out-of-range input."""
    status_code = 400


class NotFoundError(HirePathError):
    status_code = 404


class PersistenceError(HirePathError):
    """A read or write against the database failed; nothing is retried."""
    status_code = 500
