"""Wait for a newly created AMI to get its EBS snapshot.

CreateImage returns before the snapshot exists, so the image is polled
with a fixed delay. Each poll yields an AttemptResult:

- FOUND: a snapshot id is present on an EBS block device mapping (the last
  one wins when there are several)
- RETRY: no snapshot yet, or EC2 does not see the new image yet
- FATAL: any other provider error, raised without further attempts
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from botocore.exceptions import ClientError

from ec2it.core.aws.ec2 import EC2Manager
from ec2it.core.constants import (
    RETRYABLE_IMAGE_ERROR_CODES,
    SNAPSHOT_WAIT_DELAY_SECONDS,
    SNAPSHOT_WAIT_MAX_RETRIES,
)
from ec2it.core.models import AMIInfo
from ec2it.utils.exceptions import SnapshotNotFoundError
from ec2it.utils.logger import setup_logger

logger = setup_logger(__name__, "waiters.log")


class AttemptStatus(Enum):
    """Outcome of one polling attempt."""
    FOUND = "found"
    RETRY = "retry"
    FATAL = "fatal"


@dataclass
class AttemptResult:
    """Result of one polling attempt."""
    status: AttemptStatus
    snapshot_id: Optional[str] = None
    error: Optional[Exception] = None


def check_snapshot(ec2: EC2Manager, image_id: str) -> AttemptResult:
    """Describe the image once and classify the outcome."""
    try:
        images = ec2.describe_images(image_ids=[image_id])
    except ClientError as e:
        code = e.response.get("Error", {}).get("Code")
        if code in RETRYABLE_IMAGE_ERROR_CODES:
            return AttemptResult(AttemptStatus.RETRY, error=e)
        return AttemptResult(AttemptStatus.FATAL, error=e)

    for image in images:
        snapshot_ids = AMIInfo.from_aws_image(image).snapshot_ids()
        if snapshot_ids:
            return AttemptResult(AttemptStatus.FOUND, snapshot_id=snapshot_ids[-1])

    return AttemptResult(
        AttemptStatus.RETRY,
        error=SnapshotNotFoundError(f"Can't find Snapshot for AMI {image_id}!"),
    )


def wait_for_snapshot(
    ec2: EC2Manager,
    image_id: str,
    max_retries: int = SNAPSHOT_WAIT_MAX_RETRIES,
    delay: float = SNAPSHOT_WAIT_DELAY_SECONDS,
    on_retry: Optional[Callable[[int], None]] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> str:
    """Poll until the image has a snapshot and return its id.

    Makes one initial attempt plus up to max_retries retries, sleeping a
    fixed delay before each retry. on_retry receives the retry number
    (1..max_retries) before the sleep.

    Raises:
        SnapshotNotFoundError: the snapshot never appeared
        ClientError: a fatal provider error, or the last retryable one
    """
    sleep = sleep or time.sleep
    retry = 0
    while True:
        result = check_snapshot(ec2, image_id)

        if result.status is AttemptStatus.FOUND:
            logger.info(f"Found snapshot {result.snapshot_id} for image {image_id}")
            return result.snapshot_id

        if result.status is AttemptStatus.FATAL:
            logger.error(f"Giving up on snapshot for image {image_id}: {result.error}")
            raise result.error

        retry += 1
        if retry > max_retries:
            logger.error(
                f"No snapshot for image {image_id} after {max_retries} retries: {result.error}"
            )
            raise result.error

        logger.debug(f"Snapshot for {image_id} not ready ({result.error}), retry {retry}")
        if on_retry:
            on_retry(retry)
        sleep(delay)
