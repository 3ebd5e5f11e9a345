from ec2scout.walkers.network import (
    get_security_group_report,
    get_subnet_report,
    get_vpc_report,
    name_from_tags,
    parse_rule,
)


def test_name_from_tags():
    assert name_from_tags([{"Key": "env", "Value": "prod"}]) is None
    assert name_from_tags([{"Key": "Name", "Value": "main"}]) == "main"
    assert name_from_tags(None) is None


def test_get_vpc_report_mock(mocker):
    mock_get = mocker.patch("ec2scout.walkers.network.get_ec2_client")
    mock_client = mock_get.return_value

    mock_client.get_paginator.return_value.paginate.return_value = [
        {
            "Vpcs": [
                {
                    "VpcId": "vpc-1",
                    "CidrBlock": "172.31.0.0/16",
                    "IsDefault": True,
                    "State": "available",
                },
                {
                    "VpcId": "vpc-2",
                    "CidrBlock": "10.0.0.0/16",
                    "IsDefault": False,
                    "State": "available",
                    "Tags": [{"Key": "Name", "Value": "prod"}],
                },
            ]
        }
    ]

    report = get_vpc_report("us-west-2")

    mock_get.assert_called_once_with("us-west-2")
    mock_client.get_paginator.assert_called_once_with("describe_vpcs")
    assert len(report.vpcs) == 2
    assert report.vpcs[0].display_name == "Unnamed"
    assert report.vpcs[0].default_marker == "✅ Yes"
    assert report.vpcs[1].display_name == "prod"
    assert report.vpcs[1].default_marker == "❌ No"


def test_get_subnet_report_partition(mocker):
    mock_get = mocker.patch("ec2scout.walkers.network.get_ec2_client")
    mock_client = mock_get.return_value

    def subnet(subnet_id, public):
        return {
            "SubnetId": subnet_id,
            "VpcId": "vpc-1",
            "CidrBlock": "10.0.1.0/24",
            "AvailabilityZone": "us-west-2a",
            "AvailableIpAddressCount": 251,
            "MapPublicIpOnLaunch": public,
            "State": "available",
        }

    mock_client.get_paginator.return_value.paginate.return_value = [
        {"Subnets": [subnet("subnet-a", True), subnet("subnet-b", False)]},
        {"Subnets": [subnet("subnet-c", False)]},
    ]

    report = get_subnet_report("us-west-2")

    public_ids = [s.subnet_id for s in report.public]
    private_ids = [s.subnet_id for s in report.private]
    assert public_ids == ["subnet-a"]
    assert private_ids == ["subnet-b", "subnet-c"]
    assert len(public_ids) + len(private_ids) == len(report.subnets)
    assert report.private[0].available_ips == 251


def test_parse_rule_fallback_chain():
    ipv4 = parse_rule(
        {
            "IpProtocol": "tcp",
            "FromPort": 22,
            "ToPort": 22,
            "IpRanges": [{"CidrIp": "0.0.0.0/0"}, {"CidrIp": "10.0.0.0/8"}],
            "Ipv6Ranges": [{"CidrIpv6": "::/0"}],
        }
    )
    assert ipv4.peer == "0.0.0.0/0"
    assert ipv4.port_range == "22"

    ipv6 = parse_rule(
        {"IpProtocol": "tcp", "FromPort": 443, "ToPort": 443, "Ipv6Ranges": [{"CidrIpv6": "::/0"}]}
    )
    assert ipv6.peer == "::/0"
    assert ipv6.peer_type == "anywhere (IPv6)"

    peer = parse_rule(
        {"IpProtocol": "-1", "UserIdGroupPairs": [{"GroupId": "sg-0123"}]}
    )
    assert peer.peer == "sg-0123"
    assert peer.peer_type == "security-group reference"
    assert peer.port_range == "all"

    bare = parse_rule({"IpProtocol": "-1"})
    assert bare.peer == "N/A"
    assert bare.peer_type == "custom"


def test_get_security_group_report_mock(mocker):
    mock_get = mocker.patch("ec2scout.walkers.network.get_ec2_client")
    mock_client = mock_get.return_value

    mock_client.get_paginator.return_value.paginate.return_value = [
        {
            "SecurityGroups": [
                {
                    "GroupId": "sg-web",
                    "GroupName": "web",
                    "VpcId": "vpc-1",
                    "Description": "web tier",
                },
                {
                    "GroupId": "sg-db",
                    "GroupName": "db",
                    "VpcId": "vpc-1",
                    "Description": "database",
                },
            ]
        }
    ]

    def describe(GroupIds):
        if GroupIds == ["sg-web"]:
            return {
                "SecurityGroups": [
                    {
                        "GroupId": "sg-web",
                        "IpPermissions": [
                            {
                                "IpProtocol": "tcp",
                                "FromPort": 80,
                                "ToPort": 443,
                                "IpRanges": [{"CidrIp": "0.0.0.0/0"}],
                            }
                        ],
                        "IpPermissionsEgress": [
                            {"IpProtocol": "-1", "IpRanges": [{"CidrIp": "0.0.0.0/0"}]}
                        ],
                    }
                ]
            }
        return {
            "SecurityGroups": [
                {
                    "GroupId": "sg-db",
                    "IpPermissions": [
                        {
                            "IpProtocol": "tcp",
                            "FromPort": 5432,
                            "ToPort": 5432,
                            "UserIdGroupPairs": [{"GroupId": "sg-web"}],
                        }
                    ],
                    "IpPermissionsEgress": [],
                }
            ]
        }

    mock_client.describe_security_groups.side_effect = describe

    report = get_security_group_report("us-west-2")

    mock_client.get_paginator.assert_called_once_with("describe_security_groups")
    # One inbound and one outbound query per group, scoped to the group id
    scoped = [c.kwargs["GroupIds"] for c in mock_client.describe_security_groups.call_args_list]
    assert scoped == [["sg-web"], ["sg-web"], ["sg-db"], ["sg-db"]]

    web, db = report.groups
    assert web.inbound[0].port_range == "80-443"
    assert web.inbound[0].peer_type == "anywhere (IPv4)"
    assert web.outbound[0].port_range == "all"
    assert db.inbound[0].peer == "sg-web"
    assert db.inbound[0].peer_type == "security-group reference"
    assert db.outbound == []
