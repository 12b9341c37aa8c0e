"""Resolve instances and images by id or Name tag."""

from typing import Callable, List, Optional, TypeVar

from ec2it.core.aws.ec2 import EC2Manager
from ec2it.core.constants import IMAGE_OWNER_SELF
from ec2it.core.models import AMIInfo, InstanceInfo
from ec2it.utils.ec2_utils import build_tag_filters, matches_tags
from ec2it.utils.exceptions import ResolutionError
from ec2it.utils.logger import setup_logger

T = TypeVar("T", InstanceInfo, AMIInfo)


def _exactly_one(resources: List[T], kind: str, selector: str) -> T:
    if not resources:
        raise ResolutionError(f"No {kind} found for {selector}")
    if len(resources) > 1:
        ids = ", ".join(
            getattr(r, "instance_id", None) or getattr(r, "image_id") for r in resources
        )
        raise ResolutionError(
            f"Multiple {kind}s found for {selector}: {ids}. Use the id instead."
        )
    return resources[0]


class ResourceResolver:
    """Looks up instances and images through an EC2Manager.

    Role/group/name constraints are sent to EC2 as filters and checked
    again on the returned tags.
    """

    def __init__(self, ec2: EC2Manager):
        self.ec2 = ec2
        self.logger = setup_logger(__name__, "resolver.log")

    # Instances

    def fetch_instances(
        self,
        role: Optional[str] = None,
        group: Optional[str] = None,
        name: Optional[str] = None,
    ) -> List[InstanceInfo]:
        """All instances, optionally filtered by role, group and Name tags."""
        described = self.ec2.describe_instances(
            filters=build_tag_filters(role=role, group=group, name=name)
        )
        instances = [InstanceInfo.from_aws_instance(i) for i in described]
        return self._filter(instances, role, group, name)

    def fetch_instance(
        self, instance_id: Optional[str] = None, name: Optional[str] = None
    ) -> InstanceInfo:
        """Exactly one instance, by id or by Name tag. The id wins when both are given."""
        return self._fetch_one(
            "instance",
            instance_id,
            name,
            by_id=lambda: [
                InstanceInfo.from_aws_instance(i)
                for i in self.ec2.describe_instances(instance_ids=[instance_id])
            ],
            by_name=lambda: self.fetch_instances(name=name),
        )

    # Images

    def fetch_images(
        self,
        role: Optional[str] = None,
        group: Optional[str] = None,
        name: Optional[str] = None,
    ) -> List[AMIInfo]:
        """Images owned by the caller, optionally filtered by role, group and Name tags."""
        described = self.ec2.describe_images(
            filters=build_tag_filters(role=role, group=group, name=name),
            owners=[IMAGE_OWNER_SELF],
        )
        images = [AMIInfo.from_aws_image(i) for i in described]
        return self._filter(images, role, group, name)

    def fetch_image(
        self, image_id: Optional[str] = None, name: Optional[str] = None
    ) -> AMIInfo:
        """Exactly one image, by id or by Name tag. The id wins when both are given."""
        return self._fetch_one(
            "image",
            image_id,
            name,
            by_id=lambda: self._images_by_id(image_id),
            by_name=lambda: self.fetch_images(name=name),
        )

    def fetch_image_by_id(self, image_id: str) -> AMIInfo:
        """One image by id, without restricting the owner."""
        return self.fetch_image(image_id=image_id)

    def _images_by_id(self, image_id: str) -> List[AMIInfo]:
        return [
            AMIInfo.from_aws_image(i)
            for i in self.ec2.describe_images(image_ids=[image_id])
        ]

    # Shared

    def _fetch_one(
        self,
        kind: str,
        resource_id: Optional[str],
        name: Optional[str],
        by_id: Callable[[], List[T]],
        by_name: Callable[[], List[T]],
    ) -> T:
        if resource_id:
            self.logger.debug(f"Resolving {kind} by id {resource_id}")
            return _exactly_one(by_id(), kind, f"id {resource_id}")
        if name:
            self.logger.debug(f"Resolving {kind} by name {name}")
            return _exactly_one(by_name(), kind, f"name {name}")
        raise ResolutionError(f"Either an {kind} id or a name is required")

    @staticmethod
    def _filter(
        resources: List[T],
        role: Optional[str],
        group: Optional[str],
        name: Optional[str],
    ) -> List[T]:
        return [r for r in resources if matches_tags(r.tags, role=role, group=group, name=name)]
