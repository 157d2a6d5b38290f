# wxrisk/risk/messaging.py
"""
Messaging builder.

Renders an aggregated result into alerts, a plain-text summary, a
guest-facing message and an ops checklist.

Note: Uses templates only. Delivery (email, banners, push) belongs to the
caller.
"""

from typing import List

from .models import (
    AggregatedRiskResult,
    Alert,
    AlertSeverity,
    AssessmentStatus,
    HIGH_THRESHOLD,
    MODERATE_THRESHOLD,
    MessagingBundle,
    RiskTier,
)

INSUFFICIENT_DATA_SUMMARY = "Insufficient data for a reliable weather risk assessment."
NORMAL_SUMMARY = "Weather normal."

GUEST_MESSAGE_TEMPLATES = {
    RiskTier.HIGH_DISRUPTION: (
        "Weather conditions at your airport are currently challenging and may cause "
        "significant delays or changes to your flight. Our team is actively planning "
        "around the weather and will contact you directly with any updates."
    ),
    RiskTier.MONITOR: (
        "We are keeping an eye on the weather for your flight. Some minor delays are "
        "possible, but no changes are expected at this time. We will let you know if "
        "anything changes."
    ),
    RiskTier.NORMAL: (
        "Weather conditions look good for your flight. No weather-related delays are "
        "expected."
    ),
}

OPS_ACTIONABLES = {
    RiskTier.HIGH_DISRUPTION: (
        "Initiate diversion and contingency planning, including alternate airports",
        "Notify stakeholders: crew, passengers, FBO and handling agents",
        "Review fuel planning for holding and alternate requirements",
        "Confirm crew and aircraft performance limits against current conditions",
    ),
    RiskTier.MONITOR: (
        "Increase weather refresh cadence until departure",
        "Coordinate with crew on current conditions and forecast trend",
        "Identify a suitable alternate in case conditions deteriorate",
    ),
    RiskTier.NORMAL: (
        "No action required",
    ),
}


def factor_title(name: str) -> str:
    """ceiling_clouds -> Ceiling Clouds"""
    return " ".join(word.capitalize() for word in name.split("_") if word)


def build_alerts(agg: AggregatedRiskResult) -> List[Alert]:
    """One alert per factor scoring 40 or more, in breakdown order."""
    alerts = []
    for factor in agg.factor_breakdown:
        if factor.score < MODERATE_THRESHOLD:
            continue
        alerts.append(Alert(
            title=factor_title(factor.name),
            message="; ".join(factor.messages),
            severity=AlertSeverity.CRITICAL if factor.score >= HIGH_THRESHOLD else AlertSeverity.WARNING,
            factor=factor.name,
        ))
    return alerts


def build_summary(agg: AggregatedRiskResult, alerts: List[Alert]) -> str:
    if agg.status == AssessmentStatus.INSUFFICIENT_DATA:
        return INSUFFICIENT_DATA_SUMMARY
    if alerts:
        return f"{alerts[0].title}: {alerts[0].message}"
    return NORMAL_SUMMARY


def build_messaging(agg: AggregatedRiskResult) -> MessagingBundle:
    """
    Build the messaging bundle for an aggregated result.

    Args:
        agg: Aggregated risk result

    Returns:
        MessagingBundle with alerts, summary, guest message and ops checklist
    """
    alerts = build_alerts(agg)
    return MessagingBundle(
        alerts=tuple(alerts),
        plain_text_summary=build_summary(agg, alerts),
        guest_message_template=GUEST_MESSAGE_TEMPLATES[agg.tier],
        ops_actionables=OPS_ACTIONABLES[agg.tier],
    )
