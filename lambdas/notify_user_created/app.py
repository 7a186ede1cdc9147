# lambdas/notify_user_created/app.py
import json
import logging
from typing import Optional

import boto3

from errors import MissingInputError
from event_parser import parse_creation_event
from models import AppSettings, get_settings
from notifier import build_notification, log_notification
from stores import IamPrincipalStore, SecretsManagerSecretStore, SsmEmailParameterStore, Stores

logger = logging.getLogger()
logger.setLevel(get_settings().log_level)

# Built on first use and reused across warm invocations.
_stores: Optional[Stores] = None


def build_stores(settings: AppSettings) -> Stores:
    """Creates the boto3-backed stores for IAM, SSM and Secrets Manager."""
    return Stores(
        principals=IamPrincipalStore(boto3.client('iam', region_name=settings.aws_region)),
        parameters=SsmEmailParameterStore(
            boto3.client('ssm', region_name=settings.aws_region),
            name_template=settings.email_parameter_template,
            with_decryption=settings.decrypt_email_parameter,
        ),
        secrets=SecretsManagerSecretStore(boto3.client('secretsmanager', region_name=settings.aws_region)),
    )


def get_stores(settings: AppSettings) -> Stores:
    global _stores
    if _stores is None:
        _stores = build_stores(settings)
    return _stores


def build_response(status_code: int, message: str) -> dict:
    """Helper function to build the result returned to EventBridge."""
    return {'statusCode': status_code, 'body': message}


def process_event(event: dict, stores: Optional[Stores] = None, settings: Optional[AppSettings] = None) -> dict:
    """
    Resolves and logs the notification details for one CreateUser event.
    Always returns a result dict; no exception leaves this function.
    """
    settings = settings or get_settings()

    try:
        creation_event = parse_creation_event(event)
    except MissingInputError as e:
        logger.warning(str(e))
        return build_response(200, str(e))

    user_name = creation_event.user_name
    try:
        notification = build_notification(creation_event, stores or get_stores(settings), settings)
    except Exception as e:
        logger.error(f"Error processing user creation: {e}")
        return build_response(500, f"Error processing user creation: {e}")

    log_notification(notification)
    return build_response(200, f"Successfully processed user creation for {user_name}")


def handler(event: dict, context: object) -> dict:
    """
    Triggered by the EventBridge rule for IAM CreateUser calls.
    """
    try:
        logger.info(f"Received event: {json.dumps(event, default=str)}")
    except (TypeError, ValueError):
        logger.info(f"Received event: {event!r}")
    return process_event(event)
