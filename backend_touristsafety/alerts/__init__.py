"""
Alert engine — threshold-triggered alert descriptors.

Derives alerts from the composite score, individual subscores, geofence
violations and movement anomalies. Stateless: no storage and no
deduplication across evaluations.
"""

from backend_touristsafety.alerts.engine import (
    AlertConfig,
    generate_alerts,
)

__all__ = [
    "AlertConfig",
    "generate_alerts",
]
