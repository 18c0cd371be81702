"""Cross-account writes into spoke account Parameter Store."""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger("LambdaLogger")


def assume_spoke_role(sts_client, role_arn, session_name):
    """
    Assume an IAM role in a spoke account.

    Parameters:
    -----------
    sts_client : boto3.client("sts")
    role_arn : str
    session_name : str

    Returns:
    --------
    dict
        Temporary AWS credentials as boto3.client keyword arguments.
    """
    resp = sts_client.assume_role(
        RoleArn=role_arn,
        RoleSessionName=session_name,
    )
    c = resp["Credentials"]
    return {
        "aws_access_key_id": c["AccessKeyId"],
        "aws_secret_access_key": c["SecretAccessKey"],
        "aws_session_token": c["SessionToken"],
    }


class SpokeParameterWriter:
    """Writes the budget parameter into a spoke account through an assumed role.

    Args:
        sts_client: STS client of the management account
        config (SyncConfig): Parameter name, role name and client settings
        client_factory: Callable building boto3 clients, defaults to boto3.client
    """

    def __init__(self, sts_client, config, client_factory=None):
        self.sts_client = sts_client
        self.config = config
        self.client_factory = client_factory or boto3.client

    def spoke_ssm_client(self, account_id):
        role_arn = self.config.role_arn(account_id)
        logger.info(f"Assuming role in spoke account: {role_arn}")
        try:
            creds = assume_spoke_role(
                self.sts_client, role_arn, self.config.session_name
            )
        except (ClientError, BotoCoreError) as error:
            logger.error(f"Failed to assume role in account {account_id}: {error}")
            raise

        return self.client_factory("ssm", **creds, **self.config.client_kwargs())

    def write(self, account_id, value):
        """Overwrite the configured parameter in `account_id` with `value`.

        Raises:
            ClientError: STS or SSM rejected the request
            BotoCoreError: The request could not be sent
        """
        ssm_client = self.spoke_ssm_client(account_id)
        try:
            ssm_client.put_parameter(
                Name=self.config.parameter_name,
                Value=str(value),
                Type="String",
                Overwrite=True,
            )
        except (ClientError, BotoCoreError) as error:
            logger.error(
                f"Failed to update {self.config.parameter_name} in account {account_id}: {error}"
            )
            raise

        logger.info(
            f"Successfully updated {self.config.parameter_name} with {value} in account {account_id}"
        )
