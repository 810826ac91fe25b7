__all__ = [
    "BaseTest",
    "AwsBaseTest",
]

from typing import Optional

from aibs_informatics_aws_utils.core import get_client, get_resource
from aibs_informatics_test_resources import BaseTest as _BaseTest
from moto import mock_aws


class BaseTest(_BaseTest):
    maxDiff: Optional[int] = None


class AwsBaseTest(BaseTest):
    ACCOUNT_ID = "123456789012"
    US_EAST_1 = "us-east-1"
    US_WEST_2 = "us-west-2"

    @property
    def DEFAULT_REGION(self) -> str:
        return self.US_WEST_2

    def set_region(self, region: Optional[str] = None):
        self.set_env_vars(
            ("AWS_REGION", region or self.DEFAULT_REGION),
            ("AWS_DEFAULT_REGION", region or self.DEFAULT_REGION),
        )

    def set_credentials(self, access_key: Optional[str] = None, secret_key: Optional[str] = None):
        self.set_env_vars(
            ("AWS_ACCESS_KEY_ID", access_key or "testing"),
            ("AWS_SECRET_ACCESS_KEY", secret_key or "testing"),
            ("AWS_SECURITY_TOKEN", "testing"),
            ("AWS_SESSION_TOKEN", "testing"),
        )

    def set_aws_credentials(self):
        self.set_credentials()
        self.set_region()
        self.set_env_vars(("AWS_ACCOUNT_ID", self.ACCOUNT_ID))

    def start_mock_aws(self):
        """Mock all AWS services for the rest of the test."""
        self.set_aws_credentials()
        # clients are cached per service and region
        get_client.cache_clear()
        get_resource.cache_clear()
        mock = mock_aws()
        mock.start()
        self.addCleanup(mock.stop)
