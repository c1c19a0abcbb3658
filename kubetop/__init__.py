"""kubetop - CPU/memory utilization report for Kubernetes pods and nodes."""

__version__ = "1.2.0"
