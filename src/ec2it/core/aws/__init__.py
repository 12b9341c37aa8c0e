"""AWS core modules."""

from .ec2 import EC2Manager

__all__ = [
    "EC2Manager",
]
