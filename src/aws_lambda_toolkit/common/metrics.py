"""Metrics utilities for AWS Lambda handlers.

Provides utilities for collecting and publishing CloudWatch metrics
using AWS Lambda Powertools.
"""

from datetime import datetime
from typing import Optional, Union

from aws_lambda_powertools.metrics import EphemeralMetrics, Metrics, MetricUnit

from aws_lambda_toolkit.common.base import HandlerMixins
from aws_lambda_toolkit.common.config import get_metrics_namespace


def add_duration_metric(
    start: datetime,
    end: Optional[datetime] = None,
    name: str = "",
    metrics: Optional[Union[EphemeralMetrics, Metrics]] = None,
):
    """Record the time between start and end (default now) as '{name}Duration' in ms."""
    end = end or datetime.now(start.tzinfo)
    duration = end - start
    if metrics is None:
        metrics = EphemeralMetrics()
    metrics.add_metric(
        name=f"{name}Duration", unit=MetricUnit.Milliseconds, value=duration.total_seconds() * 1000
    )


def add_success_metric(name: str = "", metrics: Optional[Union[EphemeralMetrics, Metrics]] = None):
    if metrics is None:
        metrics = EphemeralMetrics()
    metrics.add_metric(name=f"{name}Success", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"{name}Failure", unit=MetricUnit.Count, value=0)


def add_failure_metric(name: str = "", metrics: Optional[Union[EphemeralMetrics, Metrics]] = None):
    if metrics is None:
        metrics = EphemeralMetrics()
    metrics.add_metric(name=f"{name}Success", unit=MetricUnit.Count, value=0)
    metrics.add_metric(name=f"{name}Failure", unit=MetricUnit.Count, value=1)


class MetricsMixins(HandlerMixins):
    """Mixin class providing CloudWatch metrics capabilities."""

    @property
    def metrics(self) -> Metrics:
        """Get the metrics collector, creating one for the service if needed."""
        try:
            return self._metrics
        except AttributeError:
            self.metrics = self.get_metrics(service=self.service_name())
        return self.metrics

    @metrics.setter
    def metrics(self, value: Metrics):
        self._metrics = value

    @classmethod
    def get_metrics(
        cls,
        service: Optional[str] = None,
        namespace: Optional[str] = None,
        **additional_dimensions: str,
    ) -> Metrics:
        """Create a new Metrics instance.

        Args:
            service (Optional[str]): The service name for metrics.
            namespace (Optional[str]): The CloudWatch namespace. Defaults to the
                POWERTOOLS_METRICS_NAMESPACE env var, else the library name.
            **additional_dimensions (str): Additional metric dimensions as key-value pairs.

        Returns:
            A configured Metrics instance.
        """
        metrics = Metrics(service=service, namespace=namespace or get_metrics_namespace())
        for dimension_name, dimension_value in additional_dimensions.items():
            metrics.add_dimension(name=dimension_name, value=dimension_value)
        return metrics
