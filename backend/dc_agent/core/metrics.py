"""
Prometheus metrics configuration
"""
import os

from prometheus_client import (CONTENT_TYPE_LATEST, Counter, Histogram,
                               generate_latest)
from prometheus_client.multiprocess import MultiProcessCollector
from prometheus_client.registry import REGISTRY, CollectorRegistry

if os.environ.get('PROMETHEUS_MULTIPROC_DIR'):
    _EXPOSITION_REGISTRY = CollectorRegistry()
    MultiProcessCollector(_EXPOSITION_REGISTRY)
else:
    _EXPOSITION_REGISTRY = REGISTRY

# ============================================================================
# HTTP Request Metrics
# ============================================================================

http_requests_total = Counter(
    'http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint', 'status_code'],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0)
)

http_errors_total = Counter(
    'http_errors_total',
    'Total number of HTTP errors',
    ['method', 'endpoint', 'status_code', 'error_type']
)

# ============================================================================
# Configuration Header Metrics
# ============================================================================

config_decode_total = Counter(
    'config_decode_total',
    'Number of configuration headers decoded',
    ['outcome', 'source']  # outcome: 'success' | 'failure', source: 'header' | 'default'
)


def get_metrics():
    """
    Get Prometheus metrics in text format

    Returns:
        bytes: Metrics in Prometheus text format
    """
    return generate_latest(_EXPOSITION_REGISTRY)


def get_metrics_content_type():
    return CONTENT_TYPE_LATEST
