class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


# Seat allocation - recoverable, caller re-prompts the same selection step
class SeatNotFoundError(NotFoundError):
    def __init__(self, seat_label: str) -> None:
        self.seat_label = seat_label
        super().__init__(f'Seat {seat_label} does not exist')


class SeatUnavailableError(ConflictError):
    def __init__(self, seat_label: str) -> None:
        self.seat_label = seat_label
        super().__init__(f'Seat {seat_label} is already taken')


class AuthorizationFailedError(AuthenticationError):
    def __init__(self, message: str = 'Reservation not found or passkey incorrect') -> None:
        super().__init__(message)


class InvalidTransitionError(ConflictError):
    pass


class PersistenceUnavailableError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 503)
