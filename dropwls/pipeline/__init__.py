"""Pipeline entrypoints."""

from dropwls.pipeline.runner import PipelineOutputs, run_pipeline

__all__ = ["PipelineOutputs", "run_pipeline"]
