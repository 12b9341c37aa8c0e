"""Simple Instance Data Models

Simple data models for AWS EC2 instance management."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ec2it.core.constants import GROUP_TAG_KEY, NAME_TAG_KEY, ROLE_TAG_KEY
from .tags import tags_to_dict


class InstanceState(Enum):
    """EC2 Instance states."""
    PENDING = "pending"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"
    SHUTTING_DOWN = "shutting-down"
    TERMINATED = "terminated"


@dataclass
class InstanceInfo:
    """Simple instance information model."""
    instance_id: str
    name: Optional[str] = None
    status: str = ""
    role: Optional[str] = None
    group: Optional[str] = None
    private_ip: Optional[str] = None
    public_ip: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)
    described: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_running(self) -> bool:
        return self.status == InstanceState.RUNNING.value

    @property
    def display_name(self) -> str:
        """Name tag, or the instance id for untagged instances."""
        return self.name or self.instance_id

    def to_row(self) -> str:
        """Tab separated listing row used by the list command."""
        return "\t".join([
            self.instance_id,
            f"{self.name or ''}:{self.status}({self.role or ''}){{{self.group or ''}}}",
            self.private_ip or "",
            self.public_ip or "",
        ])

    @classmethod
    def from_aws_instance(cls, instance: Dict[str, Any]) -> "InstanceInfo":
        """Create InstanceInfo from AWS instance data."""
        tags = tags_to_dict(instance.get("Tags"))

        return cls(
            instance_id=instance["InstanceId"],
            name=tags.get(NAME_TAG_KEY),
            status=instance.get("State", {}).get("Name", ""),
            role=tags.get(ROLE_TAG_KEY),
            group=tags.get(GROUP_TAG_KEY),
            private_ip=instance.get("PrivateIpAddress"),
            public_ip=instance.get("PublicIpAddress"),
            tags=tags,
            described=instance,
        )
