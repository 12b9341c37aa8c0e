"""ec2it - opinionated EC2 instance and AMI helper."""

__version__ = "1.0.0"
