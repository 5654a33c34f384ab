from typing import Dict

from aws_cdk import (
    aws_ec2 as ec2,
)
from constructs import Construct
from lib.constructs.vpc_construct import environment_tags

# Construct id prefix -> service short name
GATEWAY_ENDPOINT_SERVICES: Dict[str, str] = {
    "S3": "s3",
    "DynamoDB": "dynamodb",
}


class GatewayEndpointConstruct(Construct):
    """Gateway endpoints for S3 and DynamoDB on the public route table."""

    @property
    def s3_endpoint(self) -> ec2.CfnVPCEndpoint:
        return self._endpoints["S3"]

    @property
    def dynamodb_endpoint(self) -> ec2.CfnVPCEndpoint:
        return self._endpoints["DynamoDB"]

    @property
    def endpoints(self) -> Dict[str, ec2.CfnVPCEndpoint]:
        return dict(self._endpoints)

    def __init__(self,
                 scope: Construct,
                 id: str,
                 *,
                 environment_suffix: str,
                 region: str,
                 vpc: ec2.IVpc,
                 route_table: ec2.CfnRouteTable) -> None:
        super().__init__(scope, id)

        self._endpoints = {}
        for name, service in GATEWAY_ENDPOINT_SERVICES.items():
            endpoint = ec2.CfnVPCEndpoint(
                self,
                f"{name}Endpoint",
                service_name=f"com.amazonaws.{region}.{service}",
                vpc_id=vpc.vpc_id,
                vpc_endpoint_type="Gateway",
                route_table_ids=[route_table.ref],
                tags=environment_tags(environment_suffix, f"{name}-VPCEndpoint")
            )
            endpoint.add_resource_dependency(route_table)
            self._endpoints[name] = endpoint
