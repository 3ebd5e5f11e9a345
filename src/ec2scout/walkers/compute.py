from tenacity import retry

from ..clients import get_ec2_client
from ..core import AMI_LIMIT, AMI_PUBLISHERS, RETRY_CONFIG
from ..logger import logger
from ..schemas.compute import (
    ImageFamilyReport,
    ImageReport,
    InstanceTypeReport,
    InstanceTypeSpec,
    KeyPair,
    KeyPairReport,
    MachineImage,
)


@retry(**RETRY_CONFIG)  # type: ignore[call-overload, untyped-decorator]
def list_latest_images(
    region: str, owner: str, name_pattern: str, limit: int = AMI_LIMIT
) -> list[MachineImage]:
    """
    Returns the newest available images of one publisher matching a name glob.
    """
    client = get_ec2_client(region)
    response = client.describe_images(
        Owners=[owner],
        Filters=[
            {"Name": "name", "Values": [name_pattern]},
            {"Name": "state", "Values": ["available"]},
        ],
    )

    images = sorted(
        response.get("Images", []),
        key=lambda img: img.get("CreationDate", ""),
        reverse=True,
    )

    return [
        MachineImage(
            image_id=img["ImageId"],
            name=img.get("Name", ""),
            creation_date=img.get("CreationDate", ""),
            description=img.get("Description") or "",
        )
        for img in images[:limit]
    ]


def get_image_report(region: str) -> ImageReport:
    """
    Queries every configured publisher (Amazon Linux 2, Ubuntu).
    """
    report = ImageReport()
    for publisher in AMI_PUBLISHERS:
        logger.debug(f"Fetching {publisher['name_pattern']} from {publisher['owner']}")
        report.families.append(
            ImageFamilyReport(
                title=publisher["title"],
                publisher=publisher["owner"],
                images=list_latest_images(
                    region, publisher["owner"], publisher["name_pattern"]
                ),
            )
        )
    return report


@retry(**RETRY_CONFIG)  # type: ignore[call-overload, untyped-decorator]
def get_instance_type_report(region: str) -> InstanceTypeReport:
    """
    Lists every instance type offered in the region, sorted by type name.
    """
    client = get_ec2_client(region)
    paginator = client.get_paginator("describe_instance_types")

    results = []
    for page in paginator.paginate():
        for it in page.get("InstanceTypes", []):
            storage = it.get("InstanceStorageInfo") or {}
            archs = it.get("ProcessorInfo", {}).get("SupportedArchitectures") or []
            results.append(
                InstanceTypeSpec(
                    instance_type=it["InstanceType"],
                    vcpus=it.get("VCpuInfo", {}).get("DefaultVCpus", 0),
                    memory_mib=it.get("MemoryInfo", {}).get("SizeInMiB", 0),
                    storage_gb=storage.get("TotalSizeInGB"),
                    network_performance=it.get("NetworkInfo", {}).get(
                        "NetworkPerformance", "unknown"
                    ),
                    architecture=archs[0] if archs else "unknown",
                )
            )

    results.sort(key=lambda t: t.instance_type)
    return InstanceTypeReport(instance_types=results)


@retry(**RETRY_CONFIG)  # type: ignore[call-overload, untyped-decorator]
def get_key_pair_report(region: str) -> KeyPairReport:
    client = get_ec2_client(region)
    response = client.describe_key_pairs()

    report = KeyPairReport()
    for kp in response.get("KeyPairs", []):
        report.key_pairs.append(
            KeyPair(
                key_name=kp.get("KeyName", ""),
                key_pair_id=kp.get("KeyPairId", ""),
                fingerprint=kp.get("KeyFingerprint", ""),
                key_type=kp.get("KeyType", ""),
            )
        )
    return report
