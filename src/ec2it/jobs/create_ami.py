#!/usr/bin/env python3

import datetime
from typing import Any, Callable, Dict, List, Optional

from .base import BaseJob
from ec2it.core.constants import (
    AMI_NAME_TIMESTAMP_FORMAT,
    DESCRIPTION_TIME_FORMAT,
    EPHEMERAL_BLOCK_DEVICE_MAPPINGS,
)
from ec2it.core.models import dict_to_tags, inherited_tags
from ec2it.core.waiters import wait_for_snapshot


def ami_name_for(instance_name: str, now: datetime.datetime) -> str:
    """<instance-name>.<YYYYMMDD_HHMM>"""
    return f"{instance_name}.{now.strftime(AMI_NAME_TIMESTAMP_FORMAT)}"


def ephemeral_block_device_mappings() -> List[Dict[str, str]]:
    return [
        {"DeviceName": device, "VirtualName": virtual}
        for device, virtual in EPHEMERAL_BLOCK_DEVICE_MAPPINGS
    ]


class CreateAMIJob(BaseJob):
    """Job to create an AMI from an EC2 instance

    The AMI and its snapshot are tagged like the source instance, with
    the AMI name as their Name tag.
    """

    def __init__(self, ec2, config=None, clock: Callable[[], datetime.datetime] = None, **wait_options):
        super().__init__(ec2, config, job_name="create_ami")
        self.clock = clock or (lambda: datetime.datetime.now().astimezone())
        self.wait_options = wait_options

    def execute(
        self,
        instance_id: Optional[str] = None,
        name: Optional[str] = None,
        dry_run: bool = False,
        **kwargs,
    ) -> Dict[str, Any]:
        """Create AMI from the instance resolved by id or name"""
        self.check_instance_id(instance_id)
        instance = self.resolver.fetch_instance(instance_id=instance_id, name=name)

        now = self.clock()
        instance_name = instance.display_name
        ami_name = ami_name_for(instance_name, now)
        description = f"Created from {instance_name} at {now.strftime(DESCRIPTION_TIME_FORMAT).strip()}"

        self.log(
            f"Creating AMI '{ami_name}' from instance {instance_name} "
            f"({instance.instance_id}, Dry Run: {dry_run})"
        )
        ami_id = self.ec2.create_image(
            instance_id=instance.instance_id,
            name=ami_name,
            description=description,
            block_device_mappings=ephemeral_block_device_mappings(),
            no_reboot=True,
            dry_run=dry_run,
        )
        self.echo(f"Created AMI. ID={ami_id}, name={ami_name}")

        tags = inherited_tags(ami_name, instance.tags)
        self.ec2.create_tags([ami_id], dict_to_tags(tags))
        self.echo("Added tags for AMI.")

        snapshot_id = wait_for_snapshot(
            self.ec2,
            ami_id,
            on_retry=self._report_wait,
            **self.wait_options,
        )

        self.ec2.create_tags([snapshot_id], dict_to_tags(tags))
        self.echo(f"Added tags for snapshot. ID={snapshot_id}")

        self.log(f"Successfully created AMI {ami_id} with snapshot {snapshot_id}")
        return {
            "instance_id": instance.instance_id,
            "instance_name": instance_name,
            "ami_id": ami_id,
            "ami_name": ami_name,
            "snapshot_id": snapshot_id,
            "tags": tags,
            "correlation_id": self.correlation_id,
        }

    def _report_wait(self, retry: int) -> None:
        self.echo(f"Waiting for snapshot to be available ... {retry}")
