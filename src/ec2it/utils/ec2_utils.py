#!/usr/bin/env python3
"""
EC2 utility functions for ec2it.

This module provides the tag filter helpers shared by instance and
image lookups.
"""

from typing import Dict, List, Optional

from ec2it.core.constants import GROUP_TAG_KEY, NAME_TAG_KEY, ROLE_TAG_KEY


def build_tag_filters(
    role: Optional[str] = None,
    group: Optional[str] = None,
    name: Optional[str] = None,
) -> List[Dict]:
    """
    Build EC2 describe filters for tag equality.

    Args:
        role: Required value of the role tag
        group: Required value of the group tag
        name: Required value of the Name tag

    Returns:
        List of filter dictionaries, empty when nothing is constrained

    Example:
        filters = build_tag_filters(role='web', group='prod')
        # [{'Name': 'tag:role', 'Values': ['web']},
        #  {'Name': 'tag:group', 'Values': ['prod']}]
    """
    filters = []
    for key, value in _tag_constraints(role, group, name).items():
        filters.append({"Name": f"tag:{key}", "Values": [value]})
    return filters


def matches_tags(
    tags: Dict[str, str],
    role: Optional[str] = None,
    group: Optional[str] = None,
    name: Optional[str] = None,
) -> bool:
    """
    Check a tag dictionary against the same constraints as build_tag_filters.

    Example:
        matches_tags({'role': 'web', 'group': 'prod'}, role='web')  # True
        matches_tags({'role': 'web', 'group': 'prod'}, role='db')   # False
    """
    return all(
        tags.get(key) == value
        for key, value in _tag_constraints(role, group, name).items()
    )


def _tag_constraints(
    role: Optional[str], group: Optional[str], name: Optional[str]
) -> Dict[str, str]:
    constraints = {}
    if name is not None:
        constraints[NAME_TAG_KEY] = name
    if role is not None:
        constraints[ROLE_TAG_KEY] = role
    if group is not None:
        constraints[GROUP_TAG_KEY] = group
    return constraints
