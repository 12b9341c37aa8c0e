"""Base job class for ec2it commands."""

from abc import ABC, abstractmethod
from typing import Any, Optional
import uuid

import click

from ec2it.core.aws.ec2 import EC2Manager
from ec2it.core.resolver import ResourceResolver
from ec2it.utils.config import Config
from ec2it.utils.exceptions import CLIError, ValidationRules
from ec2it.utils.logger import setup_logger


class BaseJob(ABC):
    """Base class for all ec2it jobs.

    A job receives the EC2Manager and Config built once by the CLI group,
    so every command in one invocation shares the same client.
    """

    def __init__(self, ec2: EC2Manager, config: Optional[Config] = None, job_name: str = None):
        self.ec2 = ec2
        self.config = config or Config()
        self.resolver = ResourceResolver(ec2)

        self.job_name = job_name or self.__class__.__name__.lower().replace('job', '')
        self.correlation_id = str(uuid.uuid4())[:8]  # Short correlation ID for tracking

        self.logger = setup_logger(
            name=self.__class__.__module__,
            log_file=f"{self.job_name}.log",
            level=self.config.log_level,
        )

    def echo(self, message: str) -> None:
        """Print a line of command output."""
        click.echo(message)

    def check_instance_id(self, instance_id: Optional[str]) -> None:
        """Reject a malformed instance id given on the command line."""
        if instance_id and not ValidationRules.validate_instance_id(instance_id):
            raise CLIError(f"Invalid instance id: {instance_id}")

    def log(self, message: str) -> None:
        self.logger.info(f"[{self.correlation_id}] {message}")

    @abstractmethod
    def execute(self, **kwargs) -> Any:
        """Execute the job with given parameters."""
        pass
