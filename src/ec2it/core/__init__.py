"""Core EC2 operations module."""

from .aws import EC2Manager
from .models import (
    InstanceInfo,
    AMIInfo,
    InstanceState,
)

__all__ = [
    # AWS Managers
    "EC2Manager",
    # Models
    "InstanceInfo",
    "AMIInfo",
    # Enums
    "InstanceState",
]
