#!/usr/bin/env python3
"""Core constants for ec2it."""

# Tag Constants
NAME_TAG_KEY = "Name"
ROLE_TAG_KEY = "role"
GROUP_TAG_KEY = "group"
RESERVED_TAG_PREFIX = "aws:"

# Format Constants
AMI_NAME_TIMESTAMP_FORMAT = "%Y%m%d_%H%M"
DESCRIPTION_TIME_FORMAT = "%Y-%m-%d %H:%M:%S %z"

# AWS Service Constants
DEFAULT_AWS_REGION = "ap-southeast-2"
IMAGE_OWNER_SELF = "self"

# Ephemeral volumes attached to every AMI created by create-ami
EPHEMERAL_BLOCK_DEVICE_MAPPINGS = (
    ("/dev/sdm", "ephemeral0"),
    ("/dev/sdn", "ephemeral1"),
    ("/dev/sdo", "ephemeral2"),
    ("/dev/sdp", "ephemeral3"),
)

# Snapshot wait
SNAPSHOT_WAIT_MAX_RETRIES = 10
SNAPSHOT_WAIT_DELAY_SECONDS = 30
RETRYABLE_IMAGE_ERROR_CODES = frozenset(
    {"InvalidAMIID.NotFound", "InvalidAMIID.Unavailable"}
)
DRY_RUN_ERROR_CODE = "DryRunOperation"

# File and Directory Constants
DEFAULT_CONFIG_DIR = "~/.ec2it"
CONFIG_ENV_VAR = "EC2IT_CONFIG"
