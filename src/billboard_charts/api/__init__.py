"""REST API over the chart facade."""

from billboard_charts.api.app import create_app

__all__ = ["create_app"]
