"""Insight derivation package."""

from mocha.insights.engine import INSIGHT_NAMESPACE, derive_insights, insight_id

__all__ = ["INSIGHT_NAMESPACE", "derive_insights", "insight_id"]
