from collections import Counter
from itertools import groupby

from pydantic import BaseModel, Field


def family_of(instance_type: str) -> str:
    """t3.micro -> t3"""
    return instance_type.split(".", 1)[0]


class MachineImage(BaseModel):
    image_id: str
    name: str
    creation_date: str = Field(description="ISO-8601 string as returned by EC2")
    description: str = ""


class ImageFamilyReport(BaseModel):
    title: str
    publisher: str
    images: list[MachineImage] = Field(default_factory=list)


class ImageReport(BaseModel):
    families: list[ImageFamilyReport] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not any(f.images for f in self.families)


class InstanceTypeSpec(BaseModel):
    instance_type: str
    vcpus: int
    memory_mib: int
    storage_gb: int | None = None
    network_performance: str
    architecture: str

    @property
    def family(self) -> str:
        return family_of(self.instance_type)

    @property
    def memory_gib(self) -> int:
        # Whole GiB, truncated (3000 MiB -> 2)
        return self.memory_mib // 1024

    @property
    def storage_display(self) -> str:
        if self.storage_gb is None:
            return "EBS Only"
        return f"{self.storage_gb} GB"


class InstanceFamily(BaseModel):
    name: str
    instance_types: list[InstanceTypeSpec] = Field(default_factory=list)


class InstanceTypeReport(BaseModel):
    instance_types: list[InstanceTypeSpec] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.instance_types

    @property
    def families(self) -> list[InstanceFamily]:
        """
        Groups consecutive rows by family. A new group starts whenever the
        family changes, so rows must already be sorted by type name.
        """
        return [
            InstanceFamily(name=name, instance_types=list(rows))
            for name, rows in groupby(self.instance_types, key=lambda t: t.family)
        ]

    @property
    def family_counts(self) -> dict[str, int]:
        counts = Counter(t.family for t in self.instance_types)
        return dict(sorted(counts.items()))


class KeyPair(BaseModel):
    key_name: str
    key_pair_id: str
    fingerprint: str
    key_type: str


class KeyPairReport(BaseModel):
    key_pairs: list[KeyPair] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.key_pairs
