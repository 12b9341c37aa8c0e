"""Tag conversion helpers for AWS resources."""

from typing import Any, Dict, List, Optional

from ec2it.core.constants import NAME_TAG_KEY, RESERVED_TAG_PREFIX


def tags_to_dict(tags: Optional[List[Dict[str, Any]]]) -> Dict[str, str]:
    """Convert the AWS [{"Key": k, "Value": v}] form into a dictionary."""
    result = {}
    for tag in tags or []:
        if tag.get("Key"):
            result[tag["Key"]] = tag.get("Value", "")
    return result


def dict_to_tags(tags: Dict[str, str]) -> List[Dict[str, str]]:
    """Convert a dictionary into the AWS tag list form, preserving order."""
    return [{"Key": k, "Value": v} for k, v in tags.items()]


def inherited_tags(name: str, source_tags: Dict[str, str]) -> Dict[str, str]:
    """Tags for a resource derived from another one.

    The new resource gets its own Name; every other tag of the source is
    carried over, except the reserved aws: ones EC2 refuses to write.
    """
    tags = {NAME_TAG_KEY: name}
    for key, value in source_tags.items():
        if key == NAME_TAG_KEY or key.startswith(RESERVED_TAG_PREFIX):
            continue
        tags[key] = value
    return tags


def format_tags(tags: Dict[str, str]) -> str:
    """Render tags as {key => value},{key => value}."""
    return ",".join(f"{{{k} => {v}}}" for k, v in tags.items())
