"""Provider clients and the result types they return."""

from .registry import create_model_client, resolve_provider
from .types import GenerationResult, ModelClient, RemoteCallError

__all__ = ["create_model_client", "resolve_provider", "GenerationResult", "ModelClient", "RemoteCallError"]
