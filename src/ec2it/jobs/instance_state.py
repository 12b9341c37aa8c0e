#!/usr/bin/env python3
"""Start, stop and terminate a single EC2 instance.

The instance is resolved by id or Name tag, then exactly one state
change call is issued for it.
"""

from typing import Any, Dict, Optional

from .base import BaseJob


class InstanceStateJob(BaseJob):
    """Shared flow for the start/stop/terminate jobs."""

    action: str = ""
    past_tense: str = ""

    def __init__(self, ec2, config=None):
        super().__init__(ec2, config, job_name=f"{self.action}_instance")

    def execute(
        self,
        instance_id: Optional[str] = None,
        name: Optional[str] = None,
        dry_run: bool = False,
        **kwargs,
    ) -> Dict[str, Any]:
        self.check_instance_id(instance_id)
        instance = self.resolver.fetch_instance(instance_id=instance_id, name=name)
        self.log(
            f"Requesting {self.action} for instance {instance.instance_id} "
            f"({instance.display_name}, currently {instance.status}, Dry Run: {dry_run})"
        )

        response = self._change_state([instance.instance_id], dry_run)

        self.echo(f"Successfully {self.past_tense} instance.")
        return {
            "instance_id": instance.instance_id,
            "instance_name": instance.name,
            "aws_response": response,
            "correlation_id": self.correlation_id,
        }

    def _change_state(self, instance_ids, dry_run: bool) -> Dict[str, Any]:
        raise NotImplementedError


class StartInstanceJob(InstanceStateJob):
    action = "start"
    past_tense = "started"

    def _change_state(self, instance_ids, dry_run: bool) -> Dict[str, Any]:
        return self.ec2.start_instances(instance_ids, dry_run=dry_run)


class StopInstanceJob(InstanceStateJob):
    action = "stop"
    past_tense = "stopped"

    def _change_state(self, instance_ids, dry_run: bool) -> Dict[str, Any]:
        return self.ec2.stop_instances(instance_ids, dry_run=dry_run)


class TerminateInstanceJob(InstanceStateJob):
    action = "terminate"
    past_tense = "terminated"

    def _change_state(self, instance_ids, dry_run: bool) -> Dict[str, Any]:
        return self.ec2.terminate_instances(instance_ids, dry_run=dry_run)
