"""Simple data models for AWS AMI management."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ec2it.core.constants import GROUP_TAG_KEY, NAME_TAG_KEY, ROLE_TAG_KEY
from .tags import tags_to_dict


@dataclass
class AMIInfo:
    """Simple AMI information model."""
    image_id: str
    name: Optional[str] = None
    status: str = ""
    role: Optional[str] = None
    group: Optional[str] = None
    creation_date: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)
    described: Dict[str, Any] = field(default_factory=dict, repr=False)

    def snapshot_ids(self) -> List[str]:
        """Snapshot ids of the EBS block device mappings, in mapping order."""
        snapshot_ids = []
        for mapping in self.described.get("BlockDeviceMappings", []):
            snapshot_id = (mapping.get("Ebs") or {}).get("SnapshotId")
            if snapshot_id:
                snapshot_ids.append(snapshot_id)
        return snapshot_ids

    def to_row(self) -> str:
        """Tab separated listing row used by the list-ami command."""
        return "\t".join([
            self.image_id,
            f"{self.name or ''}:{self.status}({self.role or ''}){{{self.group or ''}}}",
            self.creation_date or "",
        ])

    @classmethod
    def from_aws_image(cls, image: Dict[str, Any]) -> "AMIInfo":
        """Create AMIInfo from AWS image data."""
        tags = tags_to_dict(image.get("Tags"))

        return cls(
            image_id=image["ImageId"],
            # Name tag first, the image's own name otherwise
            name=tags.get(NAME_TAG_KEY) or image.get("Name"),
            status=image.get("State", ""),
            role=tags.get(ROLE_TAG_KEY),
            group=tags.get(GROUP_TAG_KEY),
            creation_date=image.get("CreationDate"),
            tags=tags,
            described=image,
        )
