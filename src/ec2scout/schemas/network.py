from pydantic import BaseModel, Field

ANY_IPV4 = "0.0.0.0/0"
ANY_IPV6 = "::/0"
SECURITY_GROUP_PREFIX = "sg-"
NOT_AVAILABLE = "N/A"


def format_port_range(from_port: int | None, to_port: int | None) -> str:
    if from_port is None:
        return "all"
    if to_port is None or to_port == from_port:
        return str(from_port)
    return f"{from_port}-{to_port}"


def classify_peer(peer: str) -> str:
    if peer == ANY_IPV4:
        return "anywhere (IPv4)"
    if peer == ANY_IPV6:
        return "anywhere (IPv6)"
    if peer.startswith(SECURITY_GROUP_PREFIX):
        return "security-group reference"
    return "custom"


class Vpc(BaseModel):
    vpc_id: str
    cidr_block: str
    is_default: bool
    state: str
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or "Unnamed"

    @property
    def default_marker(self) -> str:
        return "✅ Yes" if self.is_default else "❌ No"


class VpcReport(BaseModel):
    vpcs: list[Vpc] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.vpcs


class Subnet(BaseModel):
    subnet_id: str
    vpc_id: str
    cidr_block: str
    availability_zone: str
    available_ips: int
    map_public_ip_on_launch: bool
    state: str
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or "Unnamed"


class SubnetReport(BaseModel):
    subnets: list[Subnet] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.subnets

    @property
    def public(self) -> list[Subnet]:
        return [s for s in self.subnets if s.map_public_ip_on_launch]

    @property
    def private(self) -> list[Subnet]:
        return [s for s in self.subnets if not s.map_public_ip_on_launch]


class SecurityGroupRule(BaseModel):
    protocol: str
    from_port: int | None = None
    to_port: int | None = None
    ipv4_cidr: str | None = None
    ipv6_cidr: str | None = None
    peer_group_id: str | None = None

    @property
    def port_range(self) -> str:
        return format_port_range(self.from_port, self.to_port)

    @property
    def peer(self) -> str:
        """Source (inbound) or destination (outbound) of the rule."""
        return self.ipv4_cidr or self.ipv6_cidr or self.peer_group_id or NOT_AVAILABLE

    @property
    def peer_type(self) -> str:
        return classify_peer(self.peer)


class SecurityGroup(BaseModel):
    group_id: str
    group_name: str
    vpc_id: str | None = None
    description: str = ""
    inbound: list[SecurityGroupRule] = Field(default_factory=list)
    outbound: list[SecurityGroupRule] = Field(default_factory=list)


class SecurityGroupReport(BaseModel):
    groups: list[SecurityGroup] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.groups
