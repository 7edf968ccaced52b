"""Report rendering and serialization for aggregate evaluations."""

from installguard.report.renderer import ReportRenderer
from installguard.report.serialize import aggregate_to_dict, script_to_dict

__all__ = ["ReportRenderer", "aggregate_to_dict", "script_to_dict"]
