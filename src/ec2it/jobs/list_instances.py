#!/usr/bin/env python3

from typing import List, Optional

from .base import BaseJob
from ec2it.core.models import InstanceInfo


class ListInstancesJob(BaseJob):
    """Print one tab separated row per instance."""

    def __init__(self, ec2, config=None):
        super().__init__(ec2, config, job_name="list_instances")

    def execute(
        self, role: Optional[str] = None, group: Optional[str] = None, **kwargs
    ) -> List[InstanceInfo]:
        instances = self.resolver.fetch_instances(role=role, group=group)
        self.log(f"Listing {len(instances)} instance(s) (role: {role}, group: {group})")

        for instance in instances:
            self.echo(instance.to_row())
        return instances
