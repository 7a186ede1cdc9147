# tests/test_event_parser.py
import pytest

from errors import MissingInputError
from event_parser import parse_creation_event

CLOUDTRAIL_EVENT = {
    "version": "0",
    "detail-type": "AWS API Call via CloudTrail",
    "source": "aws.iam",
    "time": "2025-03-01T10:00:00Z",
    "region": "us-east-1",
    "detail": {
        "eventTime": "2025-03-01T09:59:58Z",
        "eventSource": "iam.amazonaws.com",
        "eventName": "CreateUser",
        "awsRegion": "us-east-1",
        "userIdentity": {"type": "IAMUser", "arn": "arn:aws:iam::123456789012:user/admin"},
        "requestParameters": {"userName": "s3-user"},
        "requestID": "b8c1f7b0-1111-2222-3333-444455556666",
    },
}


def test_parses_full_cloudtrail_event():
    creation_event = parse_creation_event(CLOUDTRAIL_EVENT)

    assert creation_event.user_name == "s3-user"
    assert creation_event.event_name == "CreateUser"
    assert creation_event.event_source == "iam.amazonaws.com"
    assert creation_event.event_time == "2025-03-01T09:59:58Z"
    assert creation_event.actor_arn == "arn:aws:iam::123456789012:user/admin"
    assert creation_event.aws_region == "us-east-1"
    assert creation_event.request_id == "b8c1f7b0-1111-2222-3333-444455556666"


def test_minimal_event_only_needs_user_name():
    creation_event = parse_creation_event({"detail": {"requestParameters": {"userName": "s3-user"}}})

    assert creation_event.user_name == "s3-user"
    assert creation_event.actor_arn is None
    assert creation_event.event_name is None


def test_falls_back_to_envelope_time_and_region():
    event = {"time": "2025-03-01T10:00:00Z", "region": "eu-west-1",
             "detail": {"requestParameters": {"userName": "ec2-user"}}}

    creation_event = parse_creation_event(event)

    assert creation_event.event_time == "2025-03-01T10:00:00Z"
    assert creation_event.aws_region == "eu-west-1"


@pytest.mark.parametrize("event", [
    {},
    {"detail": {}},
    {"detail": None},
    {"detail": {"requestParameters": None}},
    {"detail": {"requestParameters": {}}},
    {"detail": {"requestParameters": {"userName": ""}}},
    {"detail": {"requestParameters": {"userName": "   "}}},
    {"detail": {"requestParameters": {"userName": 42}}},
    None,
])
def test_missing_user_name_raises(event):
    with pytest.raises(MissingInputError, match="No username found"):
        parse_creation_event(event)
