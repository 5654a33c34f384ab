import logging
from typing import Dict, Tuple

from aws_cdk import CfnOutput, Stack
from constructs import Construct
from lib.config.environment_config import DeploymentSettings
from lib.constructs.gateway_endpoint_construct import GatewayEndpointConstruct
from lib.constructs.vpc_construct import VpcConstruct

logger = logging.getLogger(__name__)

# Output logical id -> (export name suffix, description); exported as "<environment>-<suffix>"
OUTPUTS: Dict[str, Tuple[str, str]] = {
    "VpcId": ("VPC-ID", "VPC ID"),
    "VpcCidr": ("VPC-CIDR", "VPC CIDR Block"),
    "PublicSubnet1Id": ("PublicSubnet-1-ID", "Public Subnet 1 ID"),
    "PublicSubnet1Az": ("PublicSubnet-1-AZ", "Public Subnet 1 Availability Zone"),
    "PublicSubnet2Id": ("PublicSubnet-2-ID", "Public Subnet 2 ID"),
    "PublicSubnet2Az": ("PublicSubnet-2-AZ", "Public Subnet 2 Availability Zone"),
    "InternetGatewayId": ("IGW-ID", "Internet Gateway ID"),
    "S3VpcEndpointId": ("S3-VPCEndpoint-ID", "S3 VPC Endpoint ID"),
    "DynamoDBVpcEndpointId": ("DynamoDB-VPCEndpoint-ID", "DynamoDB VPC Endpoint ID"),
}


class NetworkStack(Stack):
    def __init__(self, scope: Construct, id: str, *, settings: DeploymentSettings, **kwargs):
        kwargs.setdefault("env", settings.to_cdk_environment())
        super().__init__(scope, id, **kwargs)

        self.settings = settings
        environment_suffix = settings.environment_suffix

        logger.debug(
            "Building %s for environment %r in %s",
            id,
            environment_suffix,
            settings.region,
        )

        self.vpc_construct = VpcConstruct(
            self, "VpcConstruct",
            environment_suffix=environment_suffix,
            network=settings.network,
            availability_zones=settings.availability_zones
        )

        self.vpc = self.vpc_construct.vpc

        self.endpoint_construct = GatewayEndpointConstruct(
            self, "GatewayEndpoints",
            environment_suffix=environment_suffix,
            region=settings.region,
            vpc=self.vpc,
            route_table=self.vpc_construct.public_route_table
        )

        self._create_outputs()

    def _create_outputs(self) -> None:
        public_subnet_1, public_subnet_2 = self.vpc_construct.public_subnets

        values = {
            "VpcId": self.vpc.vpc_id,
            "VpcCidr": self.vpc.vpc_cidr_block,
            "PublicSubnet1Id": public_subnet_1.ref,
            "PublicSubnet1Az": public_subnet_1.availability_zone,
            "PublicSubnet2Id": public_subnet_2.ref,
            "PublicSubnet2Az": public_subnet_2.availability_zone,
            "InternetGatewayId": self.vpc_construct.internet_gateway.ref,
            "S3VpcEndpointId": self.endpoint_construct.s3_endpoint.ref,
            "DynamoDBVpcEndpointId": self.endpoint_construct.dynamodb_endpoint.ref,
        }

        self.outputs = {}
        for output_id, (export_suffix, description) in OUTPUTS.items():
            self.outputs[output_id] = CfnOutput(
                self,
                output_id,
                value=values[output_id],
                description=description,
                export_name=f"{self.settings.environment_suffix}-{export_suffix}"
            )
