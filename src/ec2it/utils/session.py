#!/usr/bin/env python3
"""
utils/session.py

Session management utilities for AWS interactions.

Builds the boto3 Session used for every EC2 call in one invocation.
Credentials come from the standard boto3 chain (environment, shared
credentials file, instance profile).
"""

from typing import Optional

import boto3

from ec2it.core.constants import DEFAULT_AWS_REGION
from .logger import setup_logger

logger = setup_logger(__name__, "session.log")


class SessionManager:
    """Creates boto3 sessions for a profile and region."""

    @classmethod
    def get_session(
        cls,
        profile: Optional[str] = None,
        region: Optional[str] = None,
    ) -> boto3.Session:
        """Create a boto3 Session, falling back to the default region.

        The region is taken from the argument, then from the profile's own
        configuration, then DEFAULT_AWS_REGION.
        """
        session = boto3.Session(profile_name=profile, region_name=region)
        if not session.region_name:
            logger.info(f"No region configured, using {DEFAULT_AWS_REGION}")
            session = boto3.Session(profile_name=profile, region_name=DEFAULT_AWS_REGION)

        logger.debug(
            f"Created session (profile: {profile or 'default'}, region: {session.region_name})"
        )
        return session
