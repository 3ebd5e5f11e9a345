from __future__ import annotations

from functools import lru_cache
from typing import Any

import boto3

from .core import BOOTSTRAP_REGION

# Shared Client Registry (Lazy-loaded and cached per region)


@lru_cache(maxsize=1)
def get_session() -> Any:
    return boto3.session.Session()


@lru_cache(maxsize=1)
def get_sts_client() -> Any:
    return get_session().client("sts")


@lru_cache(maxsize=None)
def get_ec2_client(region: str) -> Any:
    return get_session().client("ec2", region_name=region)


def get_bootstrap_ec2_client() -> Any:
    return get_ec2_client(BOOTSTRAP_REGION)
