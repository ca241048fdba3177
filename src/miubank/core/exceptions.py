"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class InvalidQuantityError(ValidationError):
    """Raised when a sell quantity is not within (0, remaining]."""

    def __init__(self, requested: str, available: str):
        super().__init__(
            f"Invalid quantity to sell: requested {requested}, available {available}",
            code="INVALID_QUANTITY",
        )


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str, code: str = "NOT_FOUND"):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}", code=code)


class AccountNotFoundError(NotFoundError):
    """Raised when a user has no account of the requested type."""

    def __init__(self, user_id: str, account_type: str):
        super().__init__(
            f"{account_type} account",
            f"user {user_id}",
            code="ACCOUNT_NOT_FOUND",
        )


class RecipientNotFoundError(NotFoundError):
    """Raised when an external transfer recipient or its checking account is missing."""

    def __init__(self, cpf: str):
        super().__init__("Recipient", cpf, code="RECIPIENT_NOT_FOUND")


class AlreadySoldError(NotFoundError):
    """Raised when selling an investment that has been fully sold."""

    def __init__(self, investment_id: str):
        super().__init__("Open investment", investment_id, code="ALREADY_SOLD")


class InsufficientFundsError(AppError):
    """Raised when a debit would leave an account balance negative."""

    def __init__(self, requested: str, available: str):
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}",
            code="INSUFFICIENT_FUNDS",
        )


class PendingInvestmentsError(AppError):
    """Raised when moving money out of INVESTIMENTO while positions are open."""

    def __init__(self, open_positions: int):
        self.open_positions = open_positions
        super().__init__(
            f"Cannot transfer out of the investment account with {open_positions} "
            "open investment(s); sell them first",
            code="PENDING_INVESTMENTS",
        )


class ConflictError(AppError):
    """Raised when a unique attribute is already taken."""

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


class StorageError(AppError):
    """Raised when the persistent store fails (connection loss, constraint violation)."""

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")
