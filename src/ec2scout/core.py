from botocore.exceptions import (
    ClientError,
    ConnectionClosedError,
    EndpointConnectionError,
    ReadTimeoutError,
)
from tenacity import retry_if_exception, stop_after_attempt, wait_exponential

TOOL_VERSION = "1.0.0"

# DescribeRegions is issued here before the user has picked a region.
BOOTSTRAP_REGION = "us-east-1"

THROTTLING_CODES = {
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
}


def is_transient_error(exc: BaseException) -> bool:
    """Only throttling and dropped connections are worth another attempt."""
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code") in THROTTLING_CODES
    return isinstance(
        exc, (EndpointConnectionError, ConnectionClosedError, ReadTimeoutError)
    )


# Shared retry configuration
# usage: @retry(**RETRY_CONFIG)
RETRY_CONFIG = {
    "retry": retry_if_exception(is_transient_error),
    "stop": stop_after_attempt(3),
    "wait": wait_exponential(multiplier=1, min=4, max=10),
    "reraise": True,
}

# Publisher identities queried for the AMI section.
# e.g. "amazon" -> Amazon Linux 2, 099720109477 -> Canonical (Ubuntu)
AMI_PUBLISHERS = [
    {
        "title": "🐧 Amazon Linux 2 AMIs",
        "owner": "amazon",
        "name_pattern": "amzn2-ami-hvm-*-x86_64-gp2",
    },
    {
        "title": "🟠 Ubuntu AMIs (LTS Releases)",
        "owner": "099720109477",
        "name_pattern": "ubuntu/images/hvm-ssd/ubuntu-*-amd64-server-*",
    },
]
AMI_LIMIT = 5

# Markdown cell widths for AMI tables
AMI_NAME_WIDTH = 45
AMI_DESCRIPTION_WIDTH = 35
ELLIPSIS = "..."

# Output artifacts, timestamped at process start
TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
REPORT_FILENAME = "aws-ec2-details-{timestamp}.md"
LOG_FILENAME = "aws-ec2-info-{timestamp}.log"
