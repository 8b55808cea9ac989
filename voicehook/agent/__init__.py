"""Voice agent turn orchestration."""

from voicehook.agent.orchestrator import ProviderFactory, TurnFailedError, TurnOrchestrator

__all__ = ["ProviderFactory", "TurnFailedError", "TurnOrchestrator"]
