"""Metrics for cyclone-scm."""

from prometheus_client import Counter, Histogram

DEFAULT_BUCKETS_EXTERNAL_API = (0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)

gitlab_request = Counter(
    "cyclone_scm_external_api_gitlab_requests_total",
    "Total number of GitLab API requests",
    ["method", "verb"],
)

gitlab_request_errors = Counter(
    "cyclone_scm_external_api_gitlab_request_errors_total",
    "Total number of failed GitLab API requests",
    ["method", "verb"],
)

gitlab_request_duration = Histogram(
    "cyclone_scm_external_api_gitlab_request_duration_seconds",
    "GitLab API request duration in seconds",
    ["method", "verb"],
    buckets=DEFAULT_BUCKETS_EXTERNAL_API,
)

# outcome is "detected" for a clean classification and "fallback" when an
# ambiguous status was defaulted to v3
gitlab_version_probes = Counter(
    "cyclone_scm_gitlab_version_probes_total",
    "Number of GitLab API version probes",
    ["version", "outcome"],
)

gitlab_version_cache_lookups = Counter(
    "cyclone_scm_gitlab_version_cache_lookups_total",
    "Number of GitLab API version cache lookups",
    ["result"],
)
