"""Prometheus metrics for monitoring profile outcomes, SMS parsing and validation"""

from prometheus_client import Counter, Histogram

# Profile metrics
profile_counter = Counter(
    "creditgo_profile_total",
    "Financial profiles computed",
    ["tier"],  # bronze | silver | gold | platinum
)

safe_repayment_histogram = Histogram(
    "creditgo_safe_repayment_naira",
    "Safe monthly repayment per computed profile",
    buckets=[0, 10_000, 25_000, 50_000, 100_000, 250_000, 500_000],
)

# SMS metrics
sms_messages_counter = Counter(
    "creditgo_sms_messages_total",
    "Bank alert messages processed",
    ["outcome"],  # parsed | dropped
)

message_import_failures_counter = Counter(
    "creditgo_message_import_failures_total",
    "Device inbox imports that could not read any messages",
)

# Validation metrics
validation_failures_counter = Counter(
    "creditgo_validation_failures_total",
    "Rejected onboarding inputs",
    ["validator"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_profile(tier: str, safe_monthly_repayment: int) -> None:
    """Record tier distribution and repayment capacity for a computed profile"""
    profile_counter.labels(tier=tier).inc()
    safe_repayment_histogram.observe(safe_monthly_repayment)


def record_sms_parse(received: int, parsed: int) -> None:
    """Record how many messages became transactions and how many were dropped"""
    sms_messages_counter.labels(outcome="parsed").inc(parsed)
    sms_messages_counter.labels(outcome="dropped").inc(max(0, received - parsed))


def record_validation_failure(validator: str) -> None:
    validation_failures_counter.labels(validator=validator).inc()
