"""Decorators binding click commands to ec2it jobs."""

import importlib
from functools import wraps
from typing import Callable, Type

import click
from botocore.exceptions import BotoCoreError, ClientError

from ec2it.jobs.base import BaseJob
from ec2it.utils.exceptions import DryRunSucceeded, Ec2ItError
from ec2it.utils.logger import setup_logger

# Centralized job registry, keyed by operation type then by a keyword of
# the command function name
JOB_REGISTRY = {
    "instance": {
        "list": "ec2it.jobs.list_instances.ListInstancesJob",
        "start": "ec2it.jobs.instance_state.StartInstanceJob",
        "stop": "ec2it.jobs.instance_state.StopInstanceJob",
        "terminate": "ec2it.jobs.instance_state.TerminateInstanceJob",
        "launch": "ec2it.jobs.launch_instance.LaunchInstanceJob",
    },
    "ami": {
        "list": "ec2it.jobs.list_amis.ListAMIJob",
        "create": "ec2it.jobs.create_ami.CreateAMIJob",
    },
}


def get_job_class(operation_type: str, func_name: str) -> Type[BaseJob]:
    """Dynamically resolve job class based on operation type and function name.

    Args:
        operation_type: Type of operation (instance, ami)
        func_name: Function name to determine specific job

    Returns:
        Job class for the operation

    Raises:
        ValueError: If operation type or function name is not recognized
    """
    registry = JOB_REGISTRY.get(operation_type, {})

    for keyword, job_path in registry.items():
        if keyword in func_name:
            module_path, class_name = job_path.rsplit(".", 1)
            module = importlib.import_module(module_path)
            return getattr(module, class_name)

    raise ValueError(f"Unknown {operation_type} operation: {func_name}")


def handle_operation_error(operation_name: str, error: Exception) -> None:
    """Centralized error handling for operations.

    Args:
        operation_name: Name of the operation that failed
        error: Exception that occurred
    """
    error_msg = f"Error in {operation_name}: {str(error)}"
    click.echo(error_msg, err=True)

    logger = setup_logger("ec2it.errors", "errors.log")
    logger.error(
        error_msg,
        extra={"operation": operation_name, "error_type": type(error).__name__},
    )


def aws_operation(job_class: Type[BaseJob]):
    """Run job_class with the EC2Manager and Config stored on the click context.

    Known failures print a message and exit with status 1; a dry run that
    EC2 accepted exits with status 0.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(ctx, **kwargs):
            operation_name = ctx.info_name or func.__name__
            job = job_class(ctx.obj["ec2"], ctx.obj.get("config"))

            try:
                return job.execute(**kwargs)
            except DryRunSucceeded:
                click.echo(f"[DRY RUN] {operation_name}: request would have succeeded.")
                return None
            except (Ec2ItError, ClientError, BotoCoreError) as e:
                handle_operation_error(operation_name, e)
                ctx.exit(1)
            except Exception as e:
                handle_operation_error(operation_name, e)
                raise

        return wrapper

    return decorator


def operation_decorator(operation_type: str):
    """Generic decorator for all operation types."""

    def decorator(func: Callable) -> Callable:
        job_class = get_job_class(operation_type, func.__name__)
        return aws_operation(job_class=job_class)(func)

    return decorator


def instance_operation():
    """Decorator for instance-related operations."""
    return operation_decorator("instance")


def ami_operation():
    """Decorator for AMI-related operations."""
    return operation_decorator("ami")
