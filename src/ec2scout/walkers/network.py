from typing import Any

from tenacity import retry

from ..clients import get_ec2_client
from ..core import RETRY_CONFIG
from ..logger import logger
from ..schemas.network import (
    SecurityGroup,
    SecurityGroupReport,
    SecurityGroupRule,
    Subnet,
    SubnetReport,
    Vpc,
    VpcReport,
)


def name_from_tags(tags: list[dict[str, str]] | None) -> str | None:
    """Extract the Name tag value from an EC2 tag list."""
    for tag in tags or []:
        if tag.get("Key") == "Name":
            return tag.get("Value")
    return None


@retry(**RETRY_CONFIG)  # type: ignore[call-overload, untyped-decorator]
def get_vpc_report(region: str) -> VpcReport:
    client = get_ec2_client(region)
    paginator = client.get_paginator("describe_vpcs")

    report = VpcReport()
    for page in paginator.paginate():
        for vpc in page.get("Vpcs", []):
            name = name_from_tags(vpc.get("Tags"))
            report.vpcs.append(
                Vpc(
                    vpc_id=vpc["VpcId"],
                    cidr_block=vpc.get("CidrBlock", ""),
                    is_default=bool(vpc.get("IsDefault")),
                    state=vpc.get("State", "unknown"),
                    name=name,
                )
            )
            logger.info(f"Processing VPC: {vpc['VpcId']} ({name or 'Unnamed'})")
    return report


@retry(**RETRY_CONFIG)  # type: ignore[call-overload, untyped-decorator]
def get_subnet_report(region: str) -> SubnetReport:
    """
    Lists subnets; public/private partitioning is done by MapPublicIpOnLaunch.
    """
    client = get_ec2_client(region)
    paginator = client.get_paginator("describe_subnets")

    report = SubnetReport()
    for page in paginator.paginate():
        for sn in page.get("Subnets", []):
            report.subnets.append(
                Subnet(
                    subnet_id=sn["SubnetId"],
                    vpc_id=sn.get("VpcId", ""),
                    cidr_block=sn.get("CidrBlock", ""),
                    availability_zone=sn.get("AvailabilityZone", ""),
                    available_ips=sn.get("AvailableIpAddressCount", 0),
                    map_public_ip_on_launch=bool(sn.get("MapPublicIpOnLaunch")),
                    state=sn.get("State", "unknown"),
                    name=name_from_tags(sn.get("Tags")),
                )
            )
    return report


def _first(items: list[dict[str, Any]] | None, key: str) -> Any:
    if not items:
        return None
    return items[0].get(key)


def parse_rule(permission: dict[str, Any]) -> SecurityGroupRule:
    """
    Flattens one IpPermission entry. Only the first IPv4 range, IPv6 range and
    peer group of the permission are considered.
    """
    return SecurityGroupRule(
        protocol=str(permission.get("IpProtocol", "-1")),
        from_port=permission.get("FromPort"),
        to_port=permission.get("ToPort"),
        ipv4_cidr=_first(permission.get("IpRanges"), "CidrIp"),
        ipv6_cidr=_first(permission.get("Ipv6Ranges"), "CidrIpv6"),
        peer_group_id=_first(permission.get("UserIdGroupPairs"), "GroupId"),
    )


@retry(**RETRY_CONFIG)  # type: ignore[call-overload, untyped-decorator]
def list_group_rules(
    region: str, group_id: str, direction: str
) -> list[SecurityGroupRule]:
    """
    Fetches the rules of one direction ("inbound" or "outbound") for a group.
    """
    key = "IpPermissions" if direction == "inbound" else "IpPermissionsEgress"
    client = get_ec2_client(region)
    response = client.describe_security_groups(GroupIds=[group_id])

    groups = response.get("SecurityGroups", [])
    if not groups:
        return []
    return [parse_rule(p) for p in groups[0].get(key, [])]


@retry(**RETRY_CONFIG)  # type: ignore[call-overload, untyped-decorator]
def list_security_groups(region: str) -> list[SecurityGroup]:
    """
    Base records only; rules are attached by get_security_group_report.
    """
    client = get_ec2_client(region)
    paginator = client.get_paginator("describe_security_groups")

    results = []
    for page in paginator.paginate():
        for sg in page.get("SecurityGroups", []):
            results.append(
                SecurityGroup(
                    group_id=sg["GroupId"],
                    group_name=sg.get("GroupName", ""),
                    vpc_id=sg.get("VpcId"),
                    description=sg.get("Description", ""),
                )
            )
    return results


def get_security_group_report(region: str) -> SecurityGroupReport:
    report = SecurityGroupReport()
    for group in list_security_groups(region):
        logger.debug(f"Fetching rules for {group.group_id} ({group.group_name})")
        group.inbound = list_group_rules(region, group.group_id, "inbound")
        group.outbound = list_group_rules(region, group.group_id, "outbound")
        report.groups.append(group)
    return report
