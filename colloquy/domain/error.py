"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Always recoverable by the caller; names the violated field.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnauthenticatedError(DomainError):
    """Raised when a mutating operation has no valid credential."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class NotAuthorizedError(DomainError):
    """Raised when a user attempts an operation their role does not allow."""

    def __init__(self, operation: str, user_id: str):
        super().__init__(f"User {user_id} is not authorized to {operation}")


class NoExistingVoteError(DomainError):
    """Raised when removing a vote that does not exist."""

    def __init__(self, comment_id: str, user_id: str):
        self.comment_id = comment_id
        self.user_id = user_id
        super().__init__(f"User {user_id} has no vote on comment {comment_id}")


class ConflictError(DomainError):
    """Concurrent write could not be serialized."""

    pass


class StoreUnavailableError(DomainError):
    """Persistent store could not be reached. Transient."""

    pass
