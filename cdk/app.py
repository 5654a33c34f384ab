#!/usr/bin/env python3
import logging

import aws_cdk as cdk
from lib.config.environment_config import DeploymentSettings
from lib.config.logging_config import configure_logging
from lib.stacks.network_stack import NetworkStack

configure_logging()
logger = logging.getLogger("app")

app = cdk.App()

# ENVIRONMENT_SUFFIX > --context environmentSuffix=... > "dev"
settings = DeploymentSettings.from_app(app)

logger.info(
    "Synthesizing %s (environment=%s, vpc=%s, region=%s)",
    settings.stack_id,
    settings.environment_suffix,
    settings.network.vpc_cidr,
    settings.region,
)

network_stack = NetworkStack(app, settings.stack_id, settings=settings)

app.synth()
