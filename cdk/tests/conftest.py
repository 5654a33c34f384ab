"""Global pytest configuration and fixtures for CDK testing."""

import os
import sys
from pathlib import Path

import pytest
from aws_cdk import App
from aws_cdk.assertions import Template

# Add the cdk directory to Python path for imports
cdk_path = Path(__file__).parent.parent
if str(cdk_path) not in sys.path:
    sys.path.insert(0, str(cdk_path))

from lib.config.environment_config import DeploymentSettings  # noqa: E402
from lib.stacks.network_stack import NetworkStack  # noqa: E402

TEST_ACCOUNT = "123456789012"


@pytest.fixture(scope="session", autouse=True)
def configure_test_environment():
    """Configure environment variables for consistent testing."""
    test_env = {
        "AWS_DEFAULT_REGION": "us-east-1",
        "CDK_DEFAULT_REGION": "us-east-1",
        "CDK_DEFAULT_ACCOUNT": TEST_ACCOUNT,
        "CDK_DISABLE_VERSION_CHECK": "true",
    }

    for key, value in test_env.items():
        if key not in os.environ:
            os.environ[key] = value


@pytest.fixture
def cdk_app():
    """Create a fresh CDK App instance for each test."""
    return App()


@pytest.fixture
def build_network_stack():
    """Build a NetworkStack for an environment suffix in its own App."""

    def _build(environment_suffix: str) -> NetworkStack:
        settings = DeploymentSettings(
            environment_suffix=environment_suffix,
            account=TEST_ACCOUNT,
        )
        return NetworkStack(App(), settings.stack_id, settings=settings)

    return _build


@pytest.fixture
def synth_template(build_network_stack):
    """Synthesize the template of a NetworkStack for an environment suffix."""

    def _synth(environment_suffix: str) -> Template:
        return Template.from_stack(build_network_stack(environment_suffix))

    return _synth
