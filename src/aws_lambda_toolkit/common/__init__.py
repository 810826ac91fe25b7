"""Common Lambda utilities.

Provides configuration, exceptions, logging, metrics, SSM parameters and
small helpers shared by the DynamoDB and event stream modules.
"""
