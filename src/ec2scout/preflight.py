import shutil

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from .clients import get_session, get_sts_client
from .logger import logger
from .schemas.account import CallerIdentity


class PreflightError(Exception):
    """A prerequisite for the run is missing; the run cannot start."""


def check_credentials() -> CallerIdentity:
    """
    Resolves the ambient AWS credentials to an account and principal.
    """
    if get_session().get_credentials() is None:
        raise PreflightError(
            "AWS credentials are not configured properly. Please run: aws configure"
        )

    try:
        identity = get_sts_client().get_caller_identity()
    except NoCredentialsError as e:
        raise PreflightError(
            "AWS credentials are not configured properly. Please run: aws configure"
        ) from e
    except (ClientError, BotoCoreError) as e:
        raise PreflightError(f"AWS credentials could not be verified: {e}") from e

    return CallerIdentity(
        account_id=identity["Account"],
        arn=identity["Arn"],
        user_id=identity.get("UserId", ""),
    )


def check_prerequisites() -> CallerIdentity:
    """
    Verifies the SDK can reach AWS with valid credentials.
    Logs the resolved account for audit purposes; never logs key material.
    """
    aws_cli = shutil.which("aws")
    if aws_cli:
        logger.debug(f"AWS CLI found at {aws_cli}")
    else:
        logger.debug("AWS CLI not on PATH (not required, the SDK is used directly)")

    identity = check_credentials()

    logger.info("✓ AWS Credentials configured")
    logger.info(f"  Account ID: {identity.account_id}")
    logger.info(f"  User ARN: {identity.arn}")
    return identity
