import enum


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


# Конфликты (повторный email, повторный голос) отдаются как 400
STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 400,
    ErrorKind.INTERNAL: 500,
}


class ApiError(Exception):
    """Базовая доменная ошибка: вид ошибки + сообщение для клиента"""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationFailed(ApiError):
    kind = ErrorKind.VALIDATION


class Unauthenticated(ApiError):
    kind = ErrorKind.UNAUTHENTICATED


class NotFound(ApiError):
    kind = ErrorKind.NOT_FOUND


class Conflict(ApiError):
    kind = ErrorKind.CONFLICT


class StorageError(ApiError):
    """Сбой хранилища (соединение, неожиданное нарушение ограничений)"""

    kind = ErrorKind.INTERNAL
