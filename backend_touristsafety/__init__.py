"""
Backend Tourist Safety — safety scoring and movement anomaly engine.

Turns raw positional and behavioral signals into a bounded composite risk
score, a risk tier, and a set of actionable alerts. Modular architecture with
clear separation between geofencing, anomaly detection, scoring, alerting,
and the collaborator interfaces (zone catalog, position history).
"""

__version__ = "0.1.0"
