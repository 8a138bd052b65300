"""Client-side state manager for campaign fronts.

Fronts -> Dangers -> Secrets / Grim Portents, kept in sync with a remote
store that is the single source of truth. Every write is followed by a full
refetch; see front_manager.orchestrator for the protocol.
"""
