"""
Configuration for the budget sync Lambda.

Environment Variables:
----------------------
BUDGET_THRESHOLD_PARAM   (required)  - SSM parameter written in every spoke account.
SPOKE_ROLE_NAME          (required)  - IAM role name assumed in every spoke account.
SPOKE_ROLE_SESSION_NAME  (optional)  - STS session name used for the assumed role.
AWS_PARTITION            (optional)  - Partition used to build role ARNs.
REGION                   (optional)  - Override AWS region for boto3 clients.
LOGGING_LEVEL            (optional)  - Log level for the Lambda logger.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_SESSION_NAME = "BlogBudgetsLambdaSession"
DEFAULT_PARTITION = "aws"


def get_env(name, required=False, default=None):
    """
    Retrieve an environment variable.

    Parameters:
    -----------
    name : str
        Name of the environment variable.
    required : bool
        If True, raises an error when the variable is missing or blank.
    default : str | None
        Default value when not required.

    Returns:
    --------
    str | None
        Environment variable value.

    Raises:
    -------
    RuntimeError
        If required variable is missing.
    """
    value = os.getenv(name, default)
    if required and (value is None or value.strip() == ""):
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def get_logger():
    """Return the Lambda logger at the level named by LOGGING_LEVEL."""
    logger = logging.getLogger("LambdaLogger")
    logging_level = get_env("LOGGING_LEVEL", default="INFO").upper()
    logging.basicConfig(level=logging_level)
    logger.setLevel(logging_level)
    return logger


@dataclass(frozen=True)
class SyncConfig:
    parameter_name: str
    role_name: str
    session_name: str = DEFAULT_SESSION_NAME
    partition: str = DEFAULT_PARTITION
    region: Optional[str] = None

    @classmethod
    def from_env(cls):
        return cls(
            parameter_name=get_env("BUDGET_THRESHOLD_PARAM", required=True),
            role_name=get_env("SPOKE_ROLE_NAME", required=True),
            session_name=get_env("SPOKE_ROLE_SESSION_NAME", default=DEFAULT_SESSION_NAME),
            partition=get_env("AWS_PARTITION", default=DEFAULT_PARTITION),
            region=get_env("REGION", default=None) or None,
        )

    def role_arn(self, account_id):
        return f"arn:{self.partition}:iam::{account_id}:role/{self.role_name}"

    def client_kwargs(self):
        # Passed to every boto3.client call, local and cross-account.
        if self.region:
            return {"region_name": self.region}
        return {}
