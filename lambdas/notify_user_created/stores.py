# lambdas/notify_user_created/stores.py
"""
Read-only lookups against IAM, SSM Parameter Store and Secrets Manager.

Each store wraps a boto3 client and translates botocore failures into the
notifier's own exceptions, so the decision logic never sees a ClientError.
Anything with the same method can stand in for a store (tests use fakes).
"""
from dataclasses import dataclass
from typing import Protocol

from botocore.exceptions import BotoCoreError, ClientError

from errors import (
    EmailLookupWarning,
    PrincipalLookupError,
    PrincipalNotFoundError,
    SecretAccessError,
)
from models import Principal


def _error_message(e: Exception) -> str:
    if isinstance(e, ClientError):
        error = e.response.get('Error', {})
        return f"{error.get('Code', 'Unknown')}: {error.get('Message', str(e))}"
    return str(e)


class PrincipalStore(Protocol):
    def get_principal(self, user_name: str) -> Principal: ...


class EmailParameterStore(Protocol):
    def get_email(self, user_name: str) -> str: ...


class SecretStore(Protocol):
    def get_secret(self, secret_id: str) -> str: ...


class IamPrincipalStore:
    def __init__(self, iam_client):
        self.iam_client = iam_client

    def get_principal(self, user_name: str) -> Principal:
        """
        Fetches the IAM user record.

        Raises:
            PrincipalNotFoundError: If IAM reports NoSuchEntity.
            PrincipalLookupError: For any other failure.
        """
        try:
            response = self.iam_client.get_user(UserName=user_name)
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') == 'NoSuchEntity':
                raise PrincipalNotFoundError(f"IAM user '{user_name}' does not exist") from e
            raise PrincipalLookupError(f"Could not read IAM user '{user_name}': {_error_message(e)}") from e
        except BotoCoreError as e:
            raise PrincipalLookupError(f"Could not read IAM user '{user_name}': {e}") from e

        user = response['User']
        tags = {tag['Key']: tag['Value'] for tag in user.get('Tags', [])}
        return Principal(name=user.get('UserName', user_name), arn=user.get('Arn'), tags=tags)


class SsmEmailParameterStore:
    def __init__(self, ssm_client, name_template: str = "/IAM/Users/{user_name}/Email", with_decryption: bool = True):
        self.ssm_client = ssm_client
        self.name_template = name_template
        self.with_decryption = with_decryption

    def get_email(self, user_name: str) -> str:
        """
        Reads the user's email parameter.

        Raises:
            EmailLookupWarning: If the parameter is missing or unreadable.
        """
        name = self.name_template.format(user_name=user_name)
        try:
            response = self.ssm_client.get_parameter(Name=name, WithDecryption=self.with_decryption)
            return response['Parameter']['Value']
        except (ClientError, BotoCoreError) as e:
            raise EmailLookupWarning(f"Could not retrieve email from Parameter Store ({name}): {_error_message(e)}") from e
        except (KeyError, TypeError) as e:
            raise EmailLookupWarning(f"Could not retrieve email from Parameter Store ({name}): malformed response ({e!r})") from e


class SecretsManagerSecretStore:
    def __init__(self, secrets_client):
        self.secrets_client = secrets_client

    def get_secret(self, secret_id: str) -> str:
        """
        Reads a string secret.

        Raises:
            SecretAccessError: If the secret is missing, unreadable or binary.
        """
        try:
            response = self.secrets_client.get_secret_value(SecretId=secret_id)
        except (ClientError, BotoCoreError) as e:
            raise SecretAccessError(f"Could not read secret '{secret_id}': {_error_message(e)}") from e

        secret_string = response.get('SecretString')
        if secret_string is None:
            raise SecretAccessError(f"Secret '{secret_id}' has no SecretString")
        return secret_string


@dataclass
class Stores:
    principals: PrincipalStore
    parameters: EmailParameterStore
    secrets: SecretStore
