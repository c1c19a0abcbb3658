"""Base controller classes."""

from kubetop.controllers.base.base_controller import BaseController, TimedControllerMixin

__all__ = ["BaseController", "TimedControllerMixin"]
