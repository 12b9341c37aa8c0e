"""Simple EC2 Manager for AWS operations."""

from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError

from ec2it.core.constants import DRY_RUN_ERROR_CODE
from ec2it.utils.exceptions import DryRunSucceeded
from ec2it.utils.logger import setup_logger


class EC2Manager:
    """Thin wrapper over one boto3 EC2 client.

    Provider errors propagate unchanged, except the DryRunOperation answer
    to a dry-run request, which becomes DryRunSucceeded.
    """

    def __init__(self, session: boto3.Session, region: Optional[str] = None, client=None):
        """Initialize EC2Manager."""
        self.session = session
        self.region = region or (session.region_name if session else None)
        self.ec2_client = client or session.client("ec2", region_name=self.region)
        self.logger = setup_logger(__name__, "ec2_manager.log")

    def _call(self, operation: str, **params) -> Dict[str, Any]:
        """Invoke a client operation, translating a successful dry run."""
        self.logger.debug(f"{operation}: {params}")
        try:
            return getattr(self.ec2_client, operation)(**params)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == DRY_RUN_ERROR_CODE:
                self.logger.info(f"DRY RUN: {operation} would have succeeded")
                raise DryRunSucceeded(operation) from e
            self.logger.error(f"Error calling {operation}: {e}")
            raise

    def describe_instances(
        self,
        filters: Optional[List[Dict[str, Any]]] = None,
        instance_ids: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        """Describe EC2 instances with optional filtering."""
        params = {}
        if filters:
            params["Filters"] = filters
        if instance_ids:
            params["InstanceIds"] = instance_ids

        response = self._call("describe_instances", **params)
        instances = []

        for reservation in response.get("Reservations", []):
            for instance in reservation.get("Instances", []):
                instances.append(instance)

        return instances

    def describe_images(
        self,
        image_ids: Optional[List[str]] = None,
        filters: Optional[List[Dict[str, Any]]] = None,
        owners: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        """Describe AMI images."""
        params = {}
        if owners:
            params["Owners"] = owners
        if image_ids:
            params["ImageIds"] = image_ids
        if filters:
            params["Filters"] = filters
        response = self._call("describe_images", **params)
        return response.get("Images", [])

    def start_instances(self, instance_ids: List[str], dry_run: bool = False) -> Dict[str, Any]:
        """Start EC2 instances."""
        response = self._call("start_instances", InstanceIds=instance_ids, DryRun=dry_run)
        self.logger.info(f"Started instances: {instance_ids}")
        return response

    def stop_instances(self, instance_ids: List[str], dry_run: bool = False) -> Dict[str, Any]:
        """Stop EC2 instances."""
        response = self._call("stop_instances", InstanceIds=instance_ids, DryRun=dry_run)
        self.logger.info(f"Stopped instances: {instance_ids}")
        return response

    def terminate_instances(self, instance_ids: List[str], dry_run: bool = False) -> Dict[str, Any]:
        """Terminate EC2 instances."""
        response = self._call("terminate_instances", InstanceIds=instance_ids, DryRun=dry_run)
        self.logger.info(f"Terminated instances: {instance_ids}")
        return response

    def run_instance(
        self,
        image_id: str,
        instance_type: str,
        security_group_ids: List[str],
        availability_zone: Optional[str] = None,
        dry_run: bool = False,
    ) -> Dict[str, Any]:
        """Launch exactly one instance and return its description."""
        params = {
            "ImageId": image_id,
            "InstanceType": instance_type,
            "MinCount": 1,
            "MaxCount": 1,
            "DryRun": dry_run,
        }
        if security_group_ids:
            params["SecurityGroupIds"] = security_group_ids
        if availability_zone:
            params["Placement"] = {"AvailabilityZone": availability_zone}

        response = self._call("run_instances", **params)
        instance = response["Instances"][0]
        self.logger.info(f"Launched instance {instance['InstanceId']} from {image_id}")
        return instance

    def create_image(
        self,
        instance_id: str,
        name: str,
        description: str,
        block_device_mappings: List[Dict[str, str]],
        no_reboot: bool = True,
        dry_run: bool = False,
    ) -> str:
        """Create an AMI from an instance and return the new image id."""
        response = self._call(
            "create_image",
            InstanceId=instance_id,
            Name=name,
            Description=description,
            NoReboot=no_reboot,
            DryRun=dry_run,
            BlockDeviceMappings=block_device_mappings,
        )
        self.logger.info(f"Created image {response['ImageId']} ({name}) from {instance_id}")
        return response["ImageId"]

    def create_tags(self, resource_ids: List[str], tags: List[Dict[str, str]]) -> None:
        """Create or overwrite tags on resources."""
        self._call("create_tags", Resources=resource_ids, Tags=tags)
        self.logger.info(f"Tagged {resource_ids} with {len(tags)} tag(s)")
