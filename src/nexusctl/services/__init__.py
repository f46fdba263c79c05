"""Service layer — the funding, call-building, and result-resolution pipeline.

Command services (network, tool) compose the pipeline stages and return
ServiceResult; the stages themselves raise NexusError subclasses.
"""
