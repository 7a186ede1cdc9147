# lambdas/notify_user_created/errors.py


class NotificationError(Exception):
    """Base class for failures while processing a user creation event."""
    pass


class MissingInputError(NotificationError, ValueError):
    """The event carried no user name. Treated as a no-op, not a failure."""
    pass


class PrincipalLookupError(NotificationError, LookupError):
    """The IAM user record could not be read."""
    pass


class PrincipalNotFoundError(PrincipalLookupError):
    """The IAM user no longer exists."""
    pass


class SecretAccessError(NotificationError):
    """The temporary password secret is missing or not readable."""
    pass


class EmailLookupWarning(UserWarning):
    """The email parameter could not be read. Processing continues without an email."""
    pass
