"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class DataUnavailableError(DomainException):
    """Storage failed or is unreachable; never retried inside the domain"""

    pass


class AccountNotFoundError(DomainException):
    """Requested account id has no account record"""

    def __init__(self, account_id: int):
        super().__init__(f"Account {account_id} not found")
        self.account_id = account_id


class ValidationError(DomainException):
    """Caller supplied a value outside the accepted domain"""

    pass


class InvalidCategoryError(ValidationError):
    """Account category tag is not one of the known categories"""

    def __init__(self, value: str):
        super().__init__(f"Unknown account category: {value!r}")
        self.value = value
