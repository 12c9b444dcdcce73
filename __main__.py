"""Pulumi entry point for the private link endpoint stack."""
import logging

import structlog

from privatelink_infra.__main__ import PrivateLinkStack
from privatelink_infra.config import StackConfig

structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.INFO))
PrivateLinkStack(config=StackConfig.load()).run()
