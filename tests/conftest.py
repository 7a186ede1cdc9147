# tests/conftest.py
import pytest
from botocore.exceptions import ClientError

from errors import EmailLookupWarning, PrincipalNotFoundError, SecretAccessError
from models import AppSettings, Principal
from stores import Stores


def client_error(code: str, operation: str, message: str = "boom") -> ClientError:
    """Builds a ClientError the way botocore raises it."""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakePrincipalStore:
    def __init__(self, principals=None):
        self.principals = {p.name: p for p in (principals or [])}
        self.calls = []

    def get_principal(self, user_name):
        self.calls.append(user_name)
        if user_name not in self.principals:
            raise PrincipalNotFoundError(f"IAM user '{user_name}' does not exist")
        return self.principals[user_name]


class FakeParameterStore:
    def __init__(self, emails=None):
        self.emails = emails or {}
        self.calls = []

    def get_email(self, user_name):
        self.calls.append(user_name)
        if user_name not in self.emails:
            raise EmailLookupWarning(f"Could not retrieve email from Parameter Store (/IAM/Users/{user_name}/Email): ParameterNotFound")
        return self.emails[user_name]


class FakeSecretStore:
    def __init__(self, secrets=None):
        self.secrets = secrets or {}
        self.calls = []

    def get_secret(self, secret_id):
        self.calls.append(secret_id)
        if secret_id not in self.secrets:
            raise SecretAccessError(f"Could not read secret '{secret_id}': ResourceNotFoundException: Secrets Manager can't find the specified secret.")
        return self.secrets[secret_id]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings()


@pytest.fixture
def make_stores():
    """
    Factory fixture for a Stores bundle backed by in-memory fakes.
    """
    def _make(principals=None, emails=None, secrets=None) -> Stores:
        return Stores(
            principals=FakePrincipalStore(principals),
            parameters=FakeParameterStore(emails),
            secrets=FakeSecretStore(secrets),
        )
    return _make


@pytest.fixture
def s3_user() -> Principal:
    return Principal(name="s3-user", arn="arn:aws:iam::123456789012:user/s3-user", tags={"Email": "a@b.com"})


@pytest.fixture
def untagged_user() -> Principal:
    return Principal(name="ec2-user", arn="arn:aws:iam::123456789012:user/ec2-user")
