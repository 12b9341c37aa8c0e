#!/usr/bin/env python3

from typing import Any, Dict, List, Optional, Sequence

from .base import BaseJob
from ec2it.core.models import dict_to_tags, format_tags, inherited_tags
from ec2it.utils.exceptions import CLIError, ValidationRules


class LaunchInstanceJob(BaseJob):
    """Job to run one instance from an AMI

    Features:
    - Instance type, availability zone and security group from config defaults
    - The new instance inherits every tag of the AMI except Name
    """

    def __init__(self, ec2, config=None):
        super().__init__(ec2, config, job_name="launch_instance")

    def execute(
        self,
        ami_id: str,
        name: str,
        instance_type: Optional[str] = None,
        availability_zone: Optional[str] = None,
        security_groups: Sequence[str] = (),
        dry_run: bool = False,
        **kwargs,
    ) -> Dict[str, Any]:
        if not ValidationRules.validate_ami_id(ami_id):
            raise CLIError(f"Invalid AMI id: {ami_id}")

        instance_type = instance_type or self.config.default_instance_type
        if not instance_type:
            raise CLIError(
                "No instance type given and instance.default_instance_type is not configured"
            )
        availability_zone = availability_zone or self.config.default_availability_zone
        security_group_ids = self._security_groups(security_groups)

        image = self.resolver.fetch_image_by_id(ami_id)
        self.log(
            f"Launching {instance_type} from {image.image_id} ({image.name}) "
            f"in {availability_zone or 'any zone'} with groups {security_group_ids} "
            f"(Dry Run: {dry_run})"
        )

        instance = self.ec2.run_instance(
            image_id=image.image_id,
            instance_type=instance_type,
            security_group_ids=security_group_ids,
            availability_zone=availability_zone,
            dry_run=dry_run,
        )
        instance_id = instance["InstanceId"]
        self.echo(f"Launched instance. ID={instance_id}")

        tags = inherited_tags(name, image.tags)
        self.ec2.create_tags([instance_id], dict_to_tags(tags))
        self.echo("Added tags:")
        self.echo(format_tags(tags))
        self.echo("Done.")

        return {
            "instance_id": instance_id,
            "image_id": image.image_id,
            "tags": tags,
            "correlation_id": self.correlation_id,
        }

    def _security_groups(self, security_groups: Sequence[str]) -> List[str]:
        """Configured default group first, then the given ones, without duplicates."""
        groups = []
        if self.config.default_security_group:
            groups.append(self.config.default_security_group)
        groups.extend(security_groups or ())
        return list(dict.fromkeys(groups))
