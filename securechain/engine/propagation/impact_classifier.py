"""
Impact Classifier: qualitative severity of a propagation outcome.

Classification is a waterfall over (affected count, average risk), checked in
order:

- LOW:      nothing affected
- LOW:      < 3 affected and average risk < 50
- MEDIUM:   < 5 affected and average risk < 70
- HIGH:     < 10 affected or average risk < 80
- CRITICAL: otherwise

A source whose own severity is critical forces CRITICAL as soon as anything
at all is affected.

Note the HIGH rule is a disjunction, so CRITICAL is only reachable through
the override or with >= 10 affected nodes averaging >= 80 risk. The ordering
is kept as-is.
"""

from typing import Optional

import structlog

from securechain.models.enums import ImpactLevel, Severity

logger = structlog.get_logger()


# Waterfall thresholds, evaluated top to bottom
IMPACT_THRESHOLDS = {
    "LOW": {"max_affected": 3, "max_avg_risk": 50.0},
    "MEDIUM": {"max_affected": 5, "max_avg_risk": 70.0},
    "HIGH": {"max_affected": 10, "max_avg_risk": 80.0},
    # Anything past HIGH = CRITICAL
}


class ImpactClassifier:
    """
    Maps affected count, average risk and source severity to an ImpactLevel.

    Example:
        >>> classifier = ImpactClassifier()
        >>> classifier.classify(affected_count=1, average_risk=90.0)
        <ImpactLevel.HIGH: 'high'>
    """

    def __init__(self, thresholds: Optional[dict] = None):
        """
        Initialize the classifier.

        Args:
            thresholds: Optional replacement for IMPACT_THRESHOLDS
        """
        self.thresholds = thresholds or IMPACT_THRESHOLDS

    def classify(
        self,
        affected_count: int,
        average_risk: float,
        source_severity: Optional[Severity] = None,
    ) -> ImpactLevel:
        """
        Classify a propagation outcome.

        Args:
            affected_count: Affected nodes excluding the source
            average_risk: Mean risk score over the affected set, source included
            source_severity: Severity of the source node, if known

        Returns:
            ImpactLevel classification
        """
        level = self._classify_by_thresholds(affected_count, average_risk)

        if source_severity == Severity.CRITICAL and affected_count > 0:
            if level != ImpactLevel.CRITICAL:
                logger.debug(
                    "impact_level_overridden",
                    computed=level.value,
                    reason="critical_source",
                )
            level = ImpactLevel.CRITICAL

        return level

    def _classify_by_thresholds(
        self, affected_count: int, average_risk: float
    ) -> ImpactLevel:
        if affected_count == 0:
            return ImpactLevel.LOW

        low = self.thresholds["LOW"]
        if affected_count < low["max_affected"] and average_risk < low["max_avg_risk"]:
            return ImpactLevel.LOW

        med = self.thresholds["MEDIUM"]
        if affected_count < med["max_affected"] and average_risk < med["max_avg_risk"]:
            return ImpactLevel.MEDIUM

        high = self.thresholds["HIGH"]
        if affected_count < high["max_affected"] or average_risk < high["max_avg_risk"]:
            return ImpactLevel.HIGH

        return ImpactLevel.CRITICAL
