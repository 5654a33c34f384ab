import logging
from typing import List, Sequence

from aws_cdk import (
    aws_ec2 as ec2,
    CfnTag,
    Tags,
)
from constructs import Construct
from lib.config.environment_config import NetworkParameters

logger = logging.getLogger(__name__)


def environment_tags(environment_suffix: str, name: str) -> List[CfnTag]:
    return [
        CfnTag(key="Name", value=f"{environment_suffix}-{name}"),
        CfnTag(key="Environment", value=environment_suffix),
    ]


class VpcConstruct(Construct):

    @property
    def vpc(self) -> ec2.Vpc:
        return self._vpc

    @property
    def internet_gateway(self) -> ec2.CfnInternetGateway:
        return self._internet_gateway

    @property
    def gateway_attachment(self) -> ec2.CfnVPCGatewayAttachment:
        return self._gateway_attachment

    @property
    def public_subnets(self) -> List[ec2.CfnSubnet]:
        return list(self._public_subnets)

    @property
    def public_route_table(self) -> ec2.CfnRouteTable:
        return self._public_route_table

    @property
    def default_route(self) -> ec2.CfnRoute:
        return self._default_route

    @property
    def route_table_associations(self) -> List[ec2.CfnSubnetRouteTableAssociation]:
        return list(self._route_table_associations)

    def __init__(self,
                 scope: Construct,
                 id: str,
                 *,
                 environment_suffix: str,
                 network: NetworkParameters,
                 availability_zones: Sequence[str]) -> None:
        super().__init__(scope, id)

        logger.debug(
            "Declaring VPC %s with public subnets %s in %s",
            network.vpc_cidr,
            list(network.subnet_cidrs),
            list(availability_zones),
        )

        # Subnets are declared below so each zone gets an exact CIDR
        self._vpc = ec2.Vpc(
            self, "VPC",
            ip_addresses=ec2.IpAddresses.cidr(network.vpc_cidr),
            availability_zones=list(availability_zones),
            subnet_configuration=[],
            enable_dns_hostnames=True,
            enable_dns_support=True,
            nat_gateways=0
        )

        Tags.of(self._vpc).add("Name", f"{environment_suffix}-VPC-Main")
        Tags.of(self._vpc).add("Environment", environment_suffix)

        # Internet Gateway and its attachment
        self._internet_gateway = ec2.CfnInternetGateway(
            self,
            "InternetGateway",
            tags=environment_tags(environment_suffix, "IGW-Main")
        )

        self._gateway_attachment = ec2.CfnVPCGatewayAttachment(
            self,
            "IGWAttachment",
            vpc_id=self._vpc.vpc_id,
            internet_gateway_id=self._internet_gateway.ref
        )

        # One public subnet per zone
        self._public_subnets = []
        for index, (availability_zone, cidr_block) in enumerate(
                zip(availability_zones, network.subnet_cidrs), start=1):
            self._public_subnets.append(
                ec2.CfnSubnet(
                    self,
                    f"PublicSubnet{index}",
                    availability_zone=availability_zone,
                    vpc_id=self._vpc.vpc_id,
                    cidr_block=cidr_block,
                    map_public_ip_on_launch=True,
                    tags=environment_tags(environment_suffix, f"PublicSubnet-{index}")
                )
            )

        # Shared route table with a default route to the Internet Gateway
        self._public_route_table = ec2.CfnRouteTable(
            self,
            "PublicRouteTable",
            vpc_id=self._vpc.vpc_id,
            tags=environment_tags(environment_suffix, "PublicRouteTable")
        )

        self._default_route = ec2.CfnRoute(
            self,
            "DefaultRoute",
            route_table_id=self._public_route_table.ref,
            destination_cidr_block="0.0.0.0/0",
            gateway_id=self._internet_gateway.ref
        )

        # The route is rejected until the gateway is attached
        self._default_route.add_resource_dependency(self._gateway_attachment)

        self._route_table_associations = []
        for index, subnet in enumerate(self._public_subnets, start=1):
            association = ec2.CfnSubnetRouteTableAssociation(
                self,
                f"RouteTableAssociation{index}",
                subnet_id=subnet.ref,
                route_table_id=self._public_route_table.ref
            )
            association.add_resource_dependency(self._public_route_table)
            self._route_table_associations.append(association)
