"""
Event system for the ACE engine.

Transitions publish what happened on a process-wide bus so that storage,
transport and UI layers can react without the engine knowing about them.
"""

from acegame.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "EngineEventType"]
