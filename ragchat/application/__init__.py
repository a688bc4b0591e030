"""
Application services.

Exports: IndexBuilder, SessionManager, build_pipeline_components
"""

from ragchat.application.index_builder import IndexBuilder
from ragchat.application.pipeline_factory import PipelineComponents, build_pipeline_components
from ragchat.application.session_manager import SessionManager

__all__ = ["IndexBuilder", "PipelineComponents", "SessionManager", "build_pipeline_components"]
