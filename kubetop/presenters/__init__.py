"""Presenters turning report records into display tables."""

from kubetop.presenters.report_presenter import DisplayCell, ReportPresenter, ReportTable

__all__ = ["DisplayCell", "ReportPresenter", "ReportTable"]
