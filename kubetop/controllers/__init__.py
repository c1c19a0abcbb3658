"""Controllers module for kubetop.

This module provides the controllers that fetch and aggregate Kubernetes
cluster data for a report.
"""

from __future__ import annotations

# Base classes
from kubetop.controllers.base import BaseController, TimedControllerMixin

# Cluster domain
from kubetop.controllers.cluster.controller import (
    ClusterController,
    FetchStatus,
)

__all__ = [
    # Base
    "BaseController",
    # Domain Controllers
    "ClusterController",
    # Cluster domain
    "FetchStatus",
    "TimedControllerMixin",
]
