"""Exception classes and validation utilities for ec2it.

This module contains the exception hierarchy raised by the resolver,
the jobs and the configuration layer, plus simple id format checks
used by the command line.
"""

import re


class Ec2ItError(Exception):
    """Base class for ec2it errors."""

    pass


class ResolutionError(Ec2ItError):
    """Raised when an id or name does not resolve to exactly one resource."""

    pass


class SnapshotNotFoundError(Ec2ItError):
    """Raised while a new AMI has no EBS snapshot associated yet."""

    pass


class ConfigError(Ec2ItError):
    """Raised when the settings file cannot be read."""

    pass


class CLIError(Ec2ItError):
    """Custom exception for CLI-related errors."""

    pass


class DryRunSucceeded(Ec2ItError):
    """EC2 validated a dry-run request that would otherwise have run."""

    def __init__(self, operation: str):
        super().__init__(f"{operation}: request would have succeeded")
        self.operation = operation


class ValidationRules:
    """Validation utilities for AWS resource ids."""

    @staticmethod
    def validate_instance_id(instance_id: str) -> bool:
        """Validate EC2 instance id format (i- followed by 8 or 17 hex chars)."""
        return bool(re.match(r"^i-[0-9a-f]{8}([0-9a-f]{9})?$", instance_id))

    @staticmethod
    def validate_ami_id(image_id: str) -> bool:
        """Validate AMI id format (ami- followed by 8 or 17 hex chars)."""
        return bool(re.match(r"^ami-[0-9a-f]{8}([0-9a-f]{9})?$", image_id))
