#!/usr/bin/env python3
"""
ec2it - EC2 instance and AMI helper
List, start, stop, launch and terminate instances; list and create AMIs
"""

import click
from botocore.exceptions import BotoCoreError

from ec2it import __version__
from ec2it.core.aws.ec2 import EC2Manager
from ec2it.utils.config import load_config
from ec2it.utils.decorators import ami_operation, instance_operation
from ec2it.utils.exceptions import Ec2ItError
from ec2it.utils.logger import set_console_level, setup_logger
from ec2it.utils.session import SessionManager


def setup_logging(verbose: bool = False):
    set_console_level(verbose)
    return setup_logger("ec2it.cli", "cli.log", "DEBUG" if verbose else "INFO")


# Common CLI options
def add_instance_selector_options(func):
    func = click.option("--name", "-n", help="Name tag of the instance")(func)
    func = click.option("--instance-id", "-i", help="Instance ID")(func)
    return func


def add_tag_filter_options(func):
    func = click.option("--group", "-g", help="Only show resources with this group tag")(func)
    func = click.option("--role", "-r", help="Only show resources with this role tag")(func)
    return func


def add_dry_run_option(func):
    return click.option(
        "--dry-run", is_flag=True, default=False,
        help="Ask EC2 to validate the request without executing it",
    )(func)


@click.group(invoke_without_command=True)
@click.option(
    "--config", "config_file", type=click.Path(dir_okay=False),
    help="Settings file (default: $EC2IT_CONFIG or ~/.ec2it/settings.yaml)",
)
@click.option("--region", help="AWS region (default: from settings or AWS profile)")
@click.option("--profile", help="AWS profile name")
@click.option("--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx, config_file, region, profile, verbose):
    """ec2it - EC2 instances and AMIs with tag based lookups"""
    ctx.ensure_object(dict)
    logger = setup_logging(verbose)

    try:
        if "config" not in ctx.obj:
            ctx.obj["config"] = load_config(config_file)
        config = ctx.obj["config"]

        # One client for every call made in this invocation; version needs none
        if "ec2" not in ctx.obj and ctx.invoked_subcommand != "version":
            session = SessionManager.get_session(
                profile=profile or config.profile,
                region=region or config.region,
            )
            ctx.obj["ec2"] = EC2Manager(session)
    except (Ec2ItError, BotoCoreError) as e:
        logger.error(f"Failed to initialise: {e}")
        raise click.ClickException(str(e))

    if ctx.invoked_subcommand is None:
        ctx.invoke(list_instances)


@cli.command("list")
@add_tag_filter_options
@click.pass_context
@instance_operation()
def list_instances(ctx, role, group):
    """List instances"""
    pass


@cli.command()
@add_instance_selector_options
@add_dry_run_option
@click.pass_context
@instance_operation()
def start(ctx, instance_id, name, dry_run):
    """Start an instance"""
    pass


@cli.command()
@add_instance_selector_options
@add_dry_run_option
@click.pass_context
@instance_operation()
def stop(ctx, instance_id, name, dry_run):
    """Stop an instance"""
    pass


@cli.command()
@click.option("--ami-id", "-i", required=True, help="AMI to launch from")
@click.option("--name", "-n", required=True, help="Name tag of the new instance")
@click.option("--instance-type", "-t", help="Instance type (default: instance.default_instance_type)")
@click.option(
    "--availability-zone", "-z",
    help="Availability zone (default: vpc.default_availability_zone)",
)
@click.option(
    "--security-groups", "-s", multiple=True,
    help="Security group ID, added to instance.default_security_group (repeatable)",
)
@add_dry_run_option
@click.pass_context
@instance_operation()
def launch(ctx, ami_id, name, instance_type, availability_zone, security_groups, dry_run):
    """Run Instance from an AMI

    The new instance gets the AMI's tags, with its Name tag set from --name.
    """
    pass


@cli.command()
@add_instance_selector_options
@add_dry_run_option
@click.pass_context
@instance_operation()
def terminate(ctx, instance_id, name, dry_run):
    """Terminate an instance"""
    pass


@cli.command("list-ami")
@add_tag_filter_options
@click.pass_context
@ami_operation()
def list_ami(ctx, role, group):
    """List AMIs"""
    pass


@cli.command("create-ami")
@add_instance_selector_options
@add_dry_run_option
@click.pass_context
@ami_operation()
def create_ami(ctx, instance_id, name, dry_run):
    """Create AMI from an instance

    The AMI is named <instance-name>.<YYYYMMDD_HHMM> and, like its
    snapshot, tagged with the instance's tags.
    """
    pass


@cli.command()
def version():
    """Show version information"""
    click.echo(f"ec2it {__version__}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
