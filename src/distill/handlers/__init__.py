"""Handler layer exports."""

from .pipeline_handler import DeliveryStatus, OutputType, PipelineHandler, PipelineResult

__all__ = ["DeliveryStatus", "OutputType", "PipelineHandler", "PipelineResult"]
