"""ec2it jobs package."""

from .base import BaseJob
from .list_instances import ListInstancesJob
from .instance_state import StartInstanceJob, StopInstanceJob, TerminateInstanceJob
from .launch_instance import LaunchInstanceJob
from .list_amis import ListAMIJob
from .create_ami import CreateAMIJob

__all__ = [
    "BaseJob",
    "ListInstancesJob",
    "StartInstanceJob",
    "StopInstanceJob",
    "TerminateInstanceJob",
    "LaunchInstanceJob",
    "ListAMIJob",
    "CreateAMIJob",
]
