# lambdas/notify_user_created/event_parser.py
from errors import MissingInputError
from models import CreationEvent


def _as_dict(value) -> dict:
    # CloudTrail sends null for requestParameters on some calls
    return value if isinstance(value, dict) else {}


def parse_creation_event(event: dict) -> CreationEvent:
    """
    Parses the EventBridge event wrapping a CloudTrail CreateUser record.

    Args:
        event: The EventBridge event dictionary.

    Returns:
        A CreationEvent with the new user's name and any metadata found.

    Raises:
        MissingInputError: If there is no user name at detail.requestParameters.userName.
    """
    event = _as_dict(event)
    detail = _as_dict(event.get('detail'))
    request_parameters = _as_dict(detail.get('requestParameters'))
    user_name = request_parameters.get('userName')

    if not isinstance(user_name, str) or not user_name.strip():
        raise MissingInputError('No username found in the event')

    user_identity = _as_dict(detail.get('userIdentity'))

    return CreationEvent(
        user_name=user_name.strip(),
        event_name=detail.get('eventName'),
        event_source=detail.get('eventSource'),
        event_time=detail.get('eventTime') or event.get('time'),
        actor_arn=user_identity.get('arn'),
        aws_region=detail.get('awsRegion') or event.get('region'),
        request_id=detail.get('requestID'),
    )
