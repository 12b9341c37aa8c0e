"""Shared fixtures for ec2it tests."""

import os
import tempfile

# Keep log files out of the home directory; must run before ec2it is imported
os.environ.setdefault("LOG_PATH", tempfile.mkdtemp(prefix="ec2it-logs-"))

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from ec2it.core.aws.ec2 import EC2Manager
from ec2it.utils.config import Config


def make_tags(**tags):
    return [{"Key": k, "Value": v} for k, v in tags.items()]


def make_instance(instance_id, state="running", private_ip=None, public_ip=None, **tags):
    instance = {
        "InstanceId": instance_id,
        "State": {"Name": state},
        "Tags": make_tags(**tags),
    }
    if private_ip:
        instance["PrivateIpAddress"] = private_ip
    if public_ip:
        instance["PublicIpAddress"] = public_ip
    return instance


def make_image(image_id, state="available", name=None, created="2026-10-01T00:00:00.000Z",
               snapshot_id=None, **tags):
    image = {
        "ImageId": image_id,
        "State": state,
        "CreationDate": created,
        "Tags": make_tags(**tags),
        "BlockDeviceMappings": [{"DeviceName": "/dev/sdm", "VirtualName": "ephemeral0"}],
    }
    if name:
        image["Name"] = name
    if snapshot_id:
        image["BlockDeviceMappings"].insert(
            0, {"DeviceName": "/dev/xvda", "Ebs": {"SnapshotId": snapshot_id}}
        )
    return image


def reservations(*instances):
    return {"Reservations": [{"Instances": list(instances)}]}


def client_error(code, operation="DescribeImages", message="boom"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.fixture
def ec2_client():
    """A MagicMock standing in for the boto3 EC2 client."""
    client = MagicMock()
    client.describe_instances.return_value = {"Reservations": []}
    client.describe_images.return_value = {"Images": []}
    return client


@pytest.fixture
def ec2(ec2_client):
    return EC2Manager(session=None, region="ap-southeast-2", client=ec2_client)


@pytest.fixture
def config():
    return Config(
        default_instance_type="t3.micro",
        default_security_group="sg-default",
        default_availability_zone="ap-southeast-2a",
    )
