"""Simple data models for AWS resources."""

# Instance models
from .instance import (
    InstanceState,
    InstanceInfo,
)

# AMI models
from .ami import (
    AMIInfo,
)

# Tag helpers
from .tags import (
    tags_to_dict,
    dict_to_tags,
    inherited_tags,
    format_tags,
)

__all__ = [
    # Instance models
    "InstanceState",
    "InstanceInfo",
    # AMI models
    "AMIInfo",
    # Tag helpers
    "tags_to_dict",
    "dict_to_tags",
    "inherited_tags",
    "format_tags",
]
