import argparse
import json
import os
import uuid
from datetime import datetime, timezone
from typing import Optional

import boto3
from botocore.exceptions import ClientError
from dotenv import load_dotenv

# Load environment variables from a .env file for local testing
load_dotenv()

# Name of the deployed notifier Lambda
FUNCTION_NAME = os.environ.get("NOTIFIER_FUNCTION_NAME")


def create_user_event(user_name: str, actor_arn: Optional[str] = None, region: str = "us-east-1") -> dict:
    """
    Builds an EventBridge event shaped like a CloudTrail CreateUser record.
    """
    now = datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')
    detail = {
        "eventVersion": "1.08",
        "eventTime": now,
        "eventSource": "iam.amazonaws.com",
        "eventName": "CreateUser",
        "awsRegion": region,
        "requestParameters": {"userName": user_name},
        "requestID": str(uuid.uuid4()),
    }
    if actor_arn:
        detail["userIdentity"] = {"type": "IAMUser", "arn": actor_arn}

    return {
        "version": "0",
        "id": str(uuid.uuid4()),
        "detail-type": "AWS API Call via CloudTrail",
        "source": "aws.iam",
        "time": now,
        "region": region,
        "detail": detail,
    }


def invoke_function(function_name: str, event: dict, lambda_client=None) -> dict:
    """
    Invokes the deployed notifier synchronously and returns its decoded result.
    """
    lambda_client = lambda_client or boto3.client('lambda')
    response = lambda_client.invoke(
        FunctionName=function_name,
        InvocationType='RequestResponse',
        Payload=json.dumps(event).encode('utf-8'),
    )
    return json.loads(response['Payload'].read())


def main(argv=None):
    parser = argparse.ArgumentParser(description="Send a synthetic CreateUser event to the notifier Lambda.")
    parser.add_argument("user_name", help="IAM user name to put in the event")
    parser.add_argument("--function-name", default=FUNCTION_NAME, help="Lambda name (default: $NOTIFIER_FUNCTION_NAME)")
    parser.add_argument("--actor-arn", default=None, help="ARN recorded as the creator of the user")
    parser.add_argument("--region", default=os.environ.get("AWS_REGION", "us-east-1"))
    args = parser.parse_args(argv)

    if not args.function_name:
        print("❌ ERROR: No function name. Set NOTIFIER_FUNCTION_NAME or pass --function-name.")
        return 1

    event = create_user_event(args.user_name, actor_arn=args.actor_arn, region=args.region)
    print(f"--- Invoking {args.function_name} for user '{args.user_name}' ---")

    try:
        result = invoke_function(args.function_name, event, boto3.client('lambda', region_name=args.region))
    except ClientError as e:
        print("❌ Invocation failed.")
        print(e.response['Error']['Message'])
        return 1

    print(json.dumps(result, indent=2))
    return 0 if result.get("statusCode") == 200 else 1


if __name__ == "__main__":
    raise SystemExit(main())
