"""
Доменные ошибки, которые поднимают слои crud и domain.

Каждая ошибка знает свой HTTP-статус; в main.py зарегистрирован один
обработчик, который превращает их в ответ {"detail": ...}.
"""


class PosError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PosError):
    """Ошибка ввода, которую может исправить сам пользователь."""
    status_code = 400


class SessionError(PosError):
    """Нет токена, токен истёк или устарел: нужен повторный логин."""
    status_code = 401


class PermissionDeniedError(PosError):
    status_code = 403


class NotFoundError(PosError):
    status_code = 404


class ConflictError(PosError):
    status_code = 409
