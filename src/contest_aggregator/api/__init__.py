"""HTTP façade over the contest and problem services."""

from contest_aggregator.api.app import create_app

__all__ = ["create_app"]
