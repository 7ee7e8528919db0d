import pytest

from hiera_aws_sm.domain.exceptions import SecretNotFoundError
from hiera_aws_sm.domain.ports.lookup_context_port import IHostLookupContext
from hiera_aws_sm.domain.ports.secret_store_port import ISecretStore


class NoSuchKey(Exception):
    """Raised by RecordingContext.not_found(), mirroring a host that unwinds."""


class FakeSecretStore(ISecretStore):
    def __init__(self):
        self.secrets: dict = {}
        self.calls: list[str] = []

    def put(self, secret_id, payload):
        """Register a SecretPayload, or an exception instance to raise."""
        self.secrets[secret_id] = payload

    def get_secret_value(self, secret_id):
        self.calls.append(secret_id)
        result = self.secrets.get(secret_id)
        if result is None:
            raise SecretNotFoundError(secret_id)
        if isinstance(result, Exception):
            raise result
        return result


class RecordingContext(IHostLookupContext):
    def __init__(self):
        self.store: dict = {}
        self.explanations: list[str] = []
        self.not_found_calls = 0

    def explain(self, message):
        self.explanations.append(message())

    def cache_has_key(self, key):
        return key in self.store

    def cached_value(self, key):
        return self.store[key]

    def cache(self, key, value):
        self.store[key] = value
        return value

    def not_found(self):
        self.not_found_calls += 1
        raise NoSuchKey()


@pytest.fixture
def store():
    return FakeSecretStore()


@pytest.fixture
def store_factory(store):
    """A factory that hands out the shared fake store and records credentials."""

    def factory(credentials):
        factory.credentials.append(credentials)
        return store

    factory.credentials = []
    return factory


@pytest.fixture
def context():
    return RecordingContext()


@pytest.fixture
def no_such_key():
    return NoSuchKey
