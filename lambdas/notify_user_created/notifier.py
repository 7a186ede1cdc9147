# lambdas/notify_user_created/notifier.py
import logging
from typing import Optional, Tuple

from errors import EmailLookupWarning
from models import AppSettings, CreationEvent, Principal, UserNotification
from stores import EmailParameterStore, Stores

logger = logging.getLogger(__name__)


def resolve_email(principal: Principal, parameters: EmailParameterStore, tag_key: str = "Email") -> Tuple[Optional[str], Optional[str]]:
    """
    Finds the user's email, preferring the IAM tag over Parameter Store.

    Returns:
        A tuple of (email, source), where source is "tag", "parameter" or None.
    """
    email = principal.tag(tag_key)
    if email:
        return email, "tag"

    try:
        email = parameters.get_email(principal.name)
    except EmailLookupWarning as e:
        logger.warning(str(e))
        return None, None

    return (email, "parameter") if email else (None, None)


def build_notification(creation_event: CreationEvent, stores: Stores, settings: AppSettings) -> UserNotification:
    """
    Gathers the new user's email and the shared temporary password.
    Lookup failures for the user record or the secret propagate to the caller.
    """
    principal = stores.principals.get_principal(creation_event.user_name)
    email, email_source = resolve_email(principal, stores.parameters, settings.email_tag_key)
    temp_password = stores.secrets.get_secret(settings.temp_password_secret_id)

    return UserNotification(
        user_name=creation_event.user_name,
        temporary_password=temp_password,
        email=email,
        email_source=email_source,
        event=creation_event,
    )


def log_notification(notification: UserNotification) -> None:
    # Goes to the log stream only; nothing is sent to the user.
    logger.info(f"User Created: {notification.user_name}")
    if notification.event and notification.event.actor_arn:
        logger.info(f"Created By: {notification.event.actor_arn}")
    logger.info(f"User Email: {notification.email}")
    logger.info(f"Temporary Password: {notification.temporary_password}")
