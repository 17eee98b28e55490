import os
from pathlib import Path
from typing import Generator

import dotenv
import pytest

from kvcli.models import GlobalUser
from kvcli.models import KVNamespace
from kvcli.models import Target


@pytest.fixture(scope="session", autouse=True)
def _load_test_env() -> Generator[None, None, None]:
    """Load test environment variables from base + local env files."""
    project_root = Path(__file__).parents[2]
    dotenv.load_dotenv(project_root / ".env.defaults", override=True)
    dotenv.load_dotenv(project_root / ".env.test-local", override=True)
    os.environ["ENVIRONMENT"] = "test"
    yield


@pytest.fixture
def target() -> Target:
    return Target(
        account_id="test-account-id",
        name="test",
        kv_namespaces=[KVNamespace(binding="CACHE", id="0f2ac74b498b48028cb68387c421e279")],
    )


@pytest.fixture
def user() -> GlobalUser:
    return GlobalUser(api_token="test-api-token")
