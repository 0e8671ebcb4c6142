import base64

import pytest
from dotenv import find_dotenv, load_dotenv

from signl4step.contextmanager.contextmanager import ContextManager
from signl4step.providers.models.provider_config import ProviderConfig
from signl4step.providers.signl4_provider.signl4_provider import Signl4Provider

load_dotenv(find_dotenv())

SIGNL4_TEAM_SECRET = "test-team-secret"
SIGNL4_WEBHOOK = f"https://connect.signl4.com/webhook/{SIGNL4_TEAM_SECRET}"


@pytest.fixture
def context_manager():
    return ContextManager(tenant_id="test", workflow_id="1234")


@pytest.fixture
def signl4_provider(context_manager):
    config = ProviderConfig(
        authentication={"team_secret": SIGNL4_TEAM_SECRET},
        name="test-signl4",
    )
    return Signl4Provider(context_manager, "signl4", config)


@pytest.fixture
def png_item():
    return {
        "json": {"id": "item-1"},
        "binary": {
            "data": {
                "data": base64.b64encode(b"\x89PNG fake image").decode(),
                "mime_type": "image/png",
                "file_name": "screenshot.png",
                "file_extension": "png",
            }
        },
    }


@pytest.fixture
def signl4_webhook():
    return SIGNL4_WEBHOOK
