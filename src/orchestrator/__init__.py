"""
Orchestrator — console session, command line and integration pipeline.
"""

from .config import OrchestratorConfig
from .pipeline import IntegrationPipeline
from .session import ConsoleSession

__all__ = [
    "OrchestratorConfig",
    "IntegrationPipeline",
    "ConsoleSession",
]
