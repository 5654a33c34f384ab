"""Environment selection and per-environment network parameters.

Each deployed copy of the network is keyed by an environment suffix. The
suffix picks the CIDR ranges from a small lookup table; any suffix without
an entry (including typos and case variants such as "Prod") gets the default
ranges. Matching is exact on purpose so that existing deployments keep their
address space.
"""

import ipaddress
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import aws_cdk as cdk
from constructs import Construct

logger = logging.getLogger(__name__)

DEFAULT_ENVIRONMENT_SUFFIX = "dev"
ENVIRONMENT_SUFFIX_VARIABLE = "ENVIRONMENT_SUFFIX"
ENVIRONMENT_SUFFIX_CONTEXT_KEY = "environmentSuffix"

DEFAULT_REGION = "us-east-1"
DEFAULT_AVAILABILITY_ZONES = ("us-east-1a", "us-east-1b")


@dataclass(frozen=True)
class NetworkParameters:
    """CIDR ranges for one VPC and its two public subnets."""

    vpc_cidr: str
    subnet1_cidr: str
    subnet2_cidr: str

    def __post_init__(self):
        vpc_network = _parse_network("vpc_cidr", self.vpc_cidr)
        subnet1 = _parse_network("subnet1_cidr", self.subnet1_cidr)
        subnet2 = _parse_network("subnet2_cidr", self.subnet2_cidr)

        for name, subnet in (("subnet1_cidr", subnet1), ("subnet2_cidr", subnet2)):
            if not subnet.subnet_of(vpc_network):
                raise ValueError(
                    f"{name} {subnet} is not inside vpc_cidr {vpc_network}"
                )

        if subnet1.overlaps(subnet2):
            raise ValueError(f"Subnet ranges {subnet1} and {subnet2} overlap")

    @property
    def subnet_cidrs(self) -> Tuple[str, str]:
        return (self.subnet1_cidr, self.subnet2_cidr)


def _parse_network(name: str, value: str) -> ipaddress.IPv4Network:
    try:
        return ipaddress.IPv4Network(value)
    except ValueError as e:
        raise ValueError(f"{name} is not a valid IPv4 CIDR block: {value!r}") from e


DEFAULT_NETWORK_PARAMETERS = NetworkParameters(
    vpc_cidr="10.0.0.0/16",
    subnet1_cidr="10.0.1.0/24",
    subnet2_cidr="10.0.2.0/24",
)

# Environments with their own address space. Everything else uses the default.
NETWORK_PARAMETERS_BY_ENVIRONMENT: Dict[str, NetworkParameters] = {
    "staging": NetworkParameters(
        vpc_cidr="10.1.0.0/16",
        subnet1_cidr="10.1.1.0/24",
        subnet2_cidr="10.1.2.0/24",
    ),
    "prod": NetworkParameters(
        vpc_cidr="10.2.0.0/16",
        subnet1_cidr="10.2.1.0/24",
        subnet2_cidr="10.2.2.0/24",
    ),
}


def resolve_network_parameters(environment_suffix: str) -> NetworkParameters:
    parameters = NETWORK_PARAMETERS_BY_ENVIRONMENT.get(environment_suffix)
    if parameters is None:
        logger.info(
            "No dedicated network ranges for environment %r, using %s",
            environment_suffix,
            DEFAULT_NETWORK_PARAMETERS.vpc_cidr,
        )
        return DEFAULT_NETWORK_PARAMETERS
    return parameters


def resolve_environment_suffix(scope: Construct) -> str:
    """Pick the environment suffix for a deployment.

    The ``ENVIRONMENT_SUFFIX`` variable wins over the ``environmentSuffix``
    context value, which wins over ``"dev"``. Empty values are skipped.
    """
    return (
        os.environ.get(ENVIRONMENT_SUFFIX_VARIABLE)
        or scope.node.try_get_context(ENVIRONMENT_SUFFIX_CONTEXT_KEY)
        or DEFAULT_ENVIRONMENT_SUFFIX
    )


@dataclass(frozen=True)
class DeploymentSettings:
    """Everything a NetworkStack needs to know about the deployment it builds.

    Attributes:
        environment_suffix: Prefix for resource names, tags and export names.
        region: Region the stack is pinned to.
        availability_zones: Zones for public subnet 1 and 2, in that order.
        account: Target account, or None for an account-agnostic stack.
    """

    environment_suffix: str
    region: str = DEFAULT_REGION
    availability_zones: Tuple[str, str] = DEFAULT_AVAILABILITY_ZONES
    account: Optional[str] = None
    network: NetworkParameters = field(init=False)

    def __post_init__(self):
        if len(self.availability_zones) != 2:
            raise ValueError(
                f"Exactly two availability zones are required, got {list(self.availability_zones)}"
            )
        if self.availability_zones[0] == self.availability_zones[1]:
            raise ValueError(
                f"Public subnets must be in different zones, got {self.availability_zones[0]} twice"
            )
        object.__setattr__(
            self, "network", resolve_network_parameters(self.environment_suffix)
        )

    @property
    def stack_id(self) -> str:
        return f"NetworkStack-{self.environment_suffix}"

    def to_cdk_environment(self) -> cdk.Environment:
        return cdk.Environment(account=self.account, region=self.region)

    @classmethod
    def from_app(cls, app: cdk.App) -> "DeploymentSettings":
        return cls(
            environment_suffix=resolve_environment_suffix(app),
            account=os.environ.get("CDK_DEFAULT_ACCOUNT"),
        )
