"""Tests for the command jobs."""

import datetime
from unittest.mock import MagicMock

import pytest

from ec2it.jobs import (
    CreateAMIJob,
    LaunchInstanceJob,
    StartInstanceJob,
    StopInstanceJob,
    TerminateInstanceJob,
)
from ec2it.jobs.create_ami import ami_name_for
from ec2it.utils.config import Config
from ec2it.utils.exceptions import CLIError, DryRunSucceeded
from tests.conftest import client_error, make_image, make_instance, reservations

AMI_ID = "ami-0123456789abcdef0"
INSTANCE_ID = "i-0123456789abcdef0"


def tag_dict(tags):
    return {t["Key"]: t["Value"] for t in tags}


@pytest.fixture
def source_image(ec2_client):
    ec2_client.describe_images.return_value = {
        "Images": [
            make_image(
                AMI_ID,
                Name="web-base",
                role="web",
                group="prod",
                **{"aws:cloudformation:stack-name": "stack"},
            )
        ]
    }
    ec2_client.run_instances.return_value = {"Instances": [{"InstanceId": "i-new"}]}


@pytest.mark.usefixtures("source_image")
class TestLaunchInstanceJob:
    def test_tags_are_name_plus_image_tags(self, ec2, ec2_client, config):
        result = LaunchInstanceJob(ec2, config).execute(ami_id=AMI_ID, name="web-2")

        kwargs = ec2_client.create_tags.call_args.kwargs
        assert kwargs["Resources"] == ["i-new"]
        assert tag_dict(kwargs["Tags"]) == {"Name": "web-2", "role": "web", "group": "prod"}
        assert result["instance_id"] == "i-new"

    def test_uses_config_defaults(self, ec2, ec2_client, config):
        LaunchInstanceJob(ec2, config).execute(
            ami_id=AMI_ID, name="web-2", security_groups=("sg-extra", "sg-default")
        )

        kwargs = ec2_client.run_instances.call_args.kwargs
        assert kwargs["ImageId"] == AMI_ID
        assert kwargs["InstanceType"] == "t3.micro"
        assert kwargs["SecurityGroupIds"] == ["sg-default", "sg-extra"]
        assert kwargs["Placement"] == {"AvailabilityZone": "ap-southeast-2a"}
        assert kwargs["MinCount"] == kwargs["MaxCount"] == 1
        assert kwargs["DryRun"] is False

    def test_flags_override_config(self, ec2, ec2_client, config):
        LaunchInstanceJob(ec2, config).execute(
            ami_id=AMI_ID, name="web-2", instance_type="m5.large",
            availability_zone="ap-southeast-2b",
        )

        kwargs = ec2_client.run_instances.call_args.kwargs
        assert kwargs["InstanceType"] == "m5.large"
        assert kwargs["Placement"] == {"AvailabilityZone": "ap-southeast-2b"}

    def test_requires_instance_type(self, ec2, ec2_client):
        with pytest.raises(CLIError, match="instance type"):
            LaunchInstanceJob(ec2, Config()).execute(ami_id=AMI_ID, name="web-2")
        ec2_client.run_instances.assert_not_called()

    def test_without_security_groups(self, ec2, ec2_client):
        LaunchInstanceJob(ec2, Config(default_instance_type="t3.micro")).execute(
            ami_id=AMI_ID, name="web-2"
        )

        kwargs = ec2_client.run_instances.call_args.kwargs
        assert "SecurityGroupIds" not in kwargs
        assert "Placement" not in kwargs

    def test_rejects_malformed_ami_id(self, ec2, config):
        with pytest.raises(CLIError, match="Invalid AMI id"):
            LaunchInstanceJob(ec2, config).execute(ami_id="web-base", name="web-2")

    def test_dry_run_stops_before_tagging(self, ec2, ec2_client, config):
        ec2_client.run_instances.side_effect = client_error("DryRunOperation", "RunInstances")

        with pytest.raises(DryRunSucceeded):
            LaunchInstanceJob(ec2, config).execute(ami_id=AMI_ID, name="web-2", dry_run=True)

        assert ec2_client.run_instances.call_args.kwargs["DryRun"] is True
        ec2_client.create_tags.assert_not_called()

    def test_output(self, ec2, config, capsys):
        LaunchInstanceJob(ec2, config).execute(ami_id=AMI_ID, name="web-2")

        assert capsys.readouterr().out.splitlines() == [
            "Launched instance. ID=i-new",
            "Added tags:",
            "{Name => web-2},{role => web},{group => prod}",
            "Done.",
        ]


class TestCreateAMIJob:
    NOW = datetime.datetime(2026, 10, 19, 14, 5, 33)

    @pytest.fixture
    def instance(self, ec2_client):
        ec2_client.describe_instances.return_value = reservations(
            make_instance(INSTANCE_ID, Name="web-1", role="web", group="prod")
        )
        ec2_client.create_image.return_value = {"ImageId": "ami-new"}

    def make_job(self, ec2, sleep=None):
        return CreateAMIJob(ec2, Config(), clock=lambda: self.NOW, sleep=sleep or MagicMock())

    def test_ami_name_format(self):
        assert ami_name_for("web-1", self.NOW) == "web-1.20261019_1405"

    @pytest.mark.usefixtures("instance")
    def test_creates_and_tags_image_and_snapshot(self, ec2, ec2_client):
        ec2_client.describe_images.return_value = {
            "Images": [make_image("ami-new", state="pending", snapshot_id="snap-1")]
        }

        result = self.make_job(ec2).execute(name="web-1")

        kwargs = ec2_client.create_image.call_args.kwargs
        assert kwargs["InstanceId"] == INSTANCE_ID
        assert kwargs["Name"] == "web-1.20261019_1405"
        assert kwargs["Description"].startswith("Created from web-1 at 2026-10-19 14:05:33")
        assert kwargs["NoReboot"] is True
        assert kwargs["BlockDeviceMappings"] == [
            {"DeviceName": "/dev/sdm", "VirtualName": "ephemeral0"},
            {"DeviceName": "/dev/sdn", "VirtualName": "ephemeral1"},
            {"DeviceName": "/dev/sdo", "VirtualName": "ephemeral2"},
            {"DeviceName": "/dev/sdp", "VirtualName": "ephemeral3"},
        ]

        expected_tags = {"Name": "web-1.20261019_1405", "role": "web", "group": "prod"}
        tag_calls = ec2_client.create_tags.call_args_list
        assert [c.kwargs["Resources"] for c in tag_calls] == [["ami-new"], ["snap-1"]]
        assert all(tag_dict(c.kwargs["Tags"]) == expected_tags for c in tag_calls)
        assert result["snapshot_id"] == "snap-1"

    @pytest.mark.usefixtures("instance")
    def test_waits_for_snapshot(self, ec2, ec2_client, capsys):
        ec2_client.describe_images.side_effect = [
            {"Images": [make_image("ami-new", state="pending")]},
            {"Images": [make_image("ami-new", state="pending", snapshot_id="snap-1")]},
        ]
        sleep = MagicMock()

        self.make_job(ec2, sleep).execute(instance_id=INSTANCE_ID)

        sleep.assert_called_once_with(30)
        assert capsys.readouterr().out.splitlines() == [
            "Created AMI. ID=ami-new, name=web-1.20261019_1405",
            "Added tags for AMI.",
            "Waiting for snapshot to be available ... 1",
            "Added tags for snapshot. ID=snap-1",
        ]

    def test_untagged_instance_uses_id(self, ec2, ec2_client):
        ec2_client.describe_instances.return_value = reservations(make_instance(INSTANCE_ID))
        ec2_client.create_image.return_value = {"ImageId": "ami-new"}
        ec2_client.describe_images.return_value = {
            "Images": [make_image("ami-new", snapshot_id="snap-1")]
        }

        result = self.make_job(ec2).execute(instance_id=INSTANCE_ID)

        assert result["ami_name"] == f"{INSTANCE_ID}.20261019_1405"

    @pytest.mark.usefixtures("instance")
    def test_dry_run_stops_before_tagging(self, ec2, ec2_client):
        ec2_client.create_image.side_effect = client_error("DryRunOperation", "CreateImage")

        with pytest.raises(DryRunSucceeded):
            self.make_job(ec2).execute(name="web-1", dry_run=True)

        ec2_client.create_tags.assert_not_called()


@pytest.mark.parametrize(
    "job_class, operation, message",
    [
        (StartInstanceJob, "start_instances", "Successfully started instance."),
        (StopInstanceJob, "stop_instances", "Successfully stopped instance."),
        (TerminateInstanceJob, "terminate_instances", "Successfully terminated instance."),
    ],
)
def test_instance_state_jobs(ec2, ec2_client, capsys, job_class, operation, message):
    ec2_client.describe_instances.return_value = reservations(make_instance(INSTANCE_ID, Name="web-1"))

    result = job_class(ec2).execute(name="web-1", dry_run=False)

    getattr(ec2_client, operation).assert_called_once_with(InstanceIds=[INSTANCE_ID], DryRun=False)
    assert result["instance_id"] == INSTANCE_ID
    assert capsys.readouterr().out.strip() == message


@pytest.mark.parametrize(
    "job_class", [StartInstanceJob, StopInstanceJob, TerminateInstanceJob, CreateAMIJob]
)
def test_malformed_instance_id_is_rejected(ec2, ec2_client, job_class):
    with pytest.raises(CLIError, match="Invalid instance id"):
        job_class(ec2).execute(instance_id="web-1")
    ec2_client.describe_instances.assert_not_called()
