#!/usr/bin/env python3

from typing import List, Optional

from .base import BaseJob
from ec2it.core.models import AMIInfo


class ListAMIJob(BaseJob):
    """Print one tab separated row per AMI owned by the account."""

    def __init__(self, ec2, config=None):
        super().__init__(ec2, config, job_name="list_amis")

    def execute(
        self, role: Optional[str] = None, group: Optional[str] = None, **kwargs
    ) -> List[AMIInfo]:
        images = self.resolver.fetch_images(role=role, group=group)
        self.log(f"Listing {len(images)} image(s) (role: {role}, group: {group})")

        for image in images:
            self.echo(image.to_row())
        return images
