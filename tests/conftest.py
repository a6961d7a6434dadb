import pytest

from urlshortener.constants import ENV


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    """Run every test as a deployed (non-local) Lambda without app naming."""
    monkeypatch.setenv(ENV.App.APP_ENV, 'test')
    monkeypatch.delenv(ENV.App.AWS_SAM_LOCAL, raising=False)
    monkeypatch.delenv(ENV.App.APP_NAME, raising=False)
    monkeypatch.delenv(ENV.AppConfig.AGENT_URL, raising=False)
    monkeypatch.delenv(ENV.LocalStack.ENDPOINT, raising=False)
