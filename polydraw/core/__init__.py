"""
Editing core: features, store, actions, history, events, modes state machine
and configuration.
"""

from polydraw.core.actions import Action, ActionType, CreateAction, DeleteAction, UpdateAction
from polydraw.core.config import (
    DEFAULT_CONFIG_FILE,
    EditorConfig,
    load_editor_config,
    save_editor_config,
)
from polydraw.core.events import (
    EVENT_TYPES,
    CreateEvent,
    DeleteEvent,
    EventBus,
    ModeChangeEvent,
    SelectionChangeEvent,
    UpdateEvent,
)
from polydraw.core.feature_store import FeatureStore, new_feature_id
from polydraw.core.features import Feature, clone_feature
from polydraw.core.history import DEFAULT_HISTORY_LIMIT, HistoryManager
from polydraw.core.mode_manager import ModeManager, parse_mode_name

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_HISTORY_LIMIT",
    "EVENT_TYPES",
    "Action",
    "ActionType",
    "CreateAction",
    "CreateEvent",
    "DeleteAction",
    "DeleteEvent",
    "EditorConfig",
    "EventBus",
    "Feature",
    "FeatureStore",
    "HistoryManager",
    "ModeChangeEvent",
    "ModeManager",
    "SelectionChangeEvent",
    "UpdateAction",
    "UpdateEvent",
    "clone_feature",
    "load_editor_config",
    "new_feature_id",
    "parse_mode_name",
    "save_editor_config",
]
