"""Fixtures for checking a deployed NetworkStack.

When ``cfn-outputs/flat-outputs.json`` exists the tests run against the real
deployment and the ``live`` tests query EC2. Otherwise canned outputs for the
current environment are used and the ``live`` tests are skipped.
"""

import logging
import os

import pytest

from lib.config.environment_config import DEFAULT_ENVIRONMENT_SUFFIX
from lib.deployment_outputs import load_flat_outputs

logger = logging.getLogger(__name__)

MOCK_OUTPUTS_BY_ENVIRONMENT = {
    environment_suffix: {
        "VpcId": f"vpc-{environment_suffix}1234567890abcdef0",
        "VpcCidr": vpc_cidr,
        "PublicSubnet1Id": f"subnet-{environment_suffix}1234567890abcdef0",
        "PublicSubnet2Id": f"subnet-{environment_suffix}1234567890abcdef1",
        "PublicSubnet1Az": "us-east-1a",
        "PublicSubnet2Az": "us-east-1b",
        "InternetGatewayId": f"igw-{environment_suffix}1234567890abcdef0",
        "S3VpcEndpointId": f"vpce-{environment_suffix}1234567890abcdef0",
        "DynamoDBVpcEndpointId": f"vpce-{environment_suffix}1234567890abcdef1",
    }
    for environment_suffix, vpc_cidr in (
        ("dev", "10.0.0.0/16"),
        ("staging", "10.1.0.0/16"),
        ("prod", "10.2.0.0/16"),
    )
}


def pytest_collection_modifyitems(config, items):
    """Mark everything here as integration and skip live tests without a deployment."""
    try:
        load_flat_outputs()
        deployed = True
    except FileNotFoundError:
        deployed = False

    live_skip = pytest.mark.skip(reason="No deployment outputs in cfn-outputs/flat-outputs.json")
    for item in items:
        if "integration" not in item.nodeid:
            continue
        item.add_marker(pytest.mark.integration)
        if not deployed and item.get_closest_marker("live"):
            item.add_marker(live_skip)


@pytest.fixture(scope="session")
def environment_suffix():
    return os.environ.get("ENVIRONMENT_SUFFIX") or DEFAULT_ENVIRONMENT_SUFFIX


@pytest.fixture(scope="session")
def deployed_outputs():
    """Outputs of a real deployment, or None."""
    try:
        return load_flat_outputs()
    except FileNotFoundError:
        return None


@pytest.fixture(scope="session")
def outputs(deployed_outputs, environment_suffix):
    if deployed_outputs is not None:
        return deployed_outputs
    logger.warning("No deployment outputs found, using mock outputs for testing")
    return MOCK_OUTPUTS_BY_ENVIRONMENT.get(environment_suffix, MOCK_OUTPUTS_BY_ENVIRONMENT["dev"])


@pytest.fixture(scope="session")
def ec2_client():
    boto3 = pytest.importorskip("boto3")
    return boto3.client("ec2", region_name="us-east-1")
