"""
PureCut: background removal backed by a generative image model.

The pipeline lives in `purecut.pipeline.cutout`; model access (providers,
configuration) lives in `purecut.models`.
"""
