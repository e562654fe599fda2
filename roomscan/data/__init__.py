# RoomScan Data Module
from .knowledge_base import (
    OBJECT_CATEGORIES,
    BASE_THRESHOLDS,
    ROOM_THRESHOLD_OVERRIDES,
    CONTEXT_FILTERS,
    DEDUP_STRATEGIES,
    ROOM_COUNT_MULTIPLIERS,
    ARCHITECTURAL_FEATURES,
    ROOM_EXPECTATIONS,
    GRID_CONFIGS,
    ROOM_NAME_MAP,
    # Lookup functions
    get_room_type_from_name,
    get_room_thresholds,
    get_context_filter,
    get_dedup_strategy,
    get_room_multiplier,
    get_architectural_features,
    get_typical_count_range,
    get_room_expectations,
    get_grid_config,
    get_all_supported_objects,
    get_supported_room_types,
)

__all__ = [
    'OBJECT_CATEGORIES',
    'BASE_THRESHOLDS',
    'ROOM_THRESHOLD_OVERRIDES',
    'CONTEXT_FILTERS',
    'DEDUP_STRATEGIES',
    'ROOM_COUNT_MULTIPLIERS',
    'ARCHITECTURAL_FEATURES',
    'ROOM_EXPECTATIONS',
    'GRID_CONFIGS',
    'ROOM_NAME_MAP',
    # Lookup functions
    'get_room_type_from_name',
    'get_room_thresholds',
    'get_context_filter',
    'get_dedup_strategy',
    'get_room_multiplier',
    'get_architectural_features',
    'get_typical_count_range',
    'get_room_expectations',
    'get_grid_config',
    'get_all_supported_objects',
    'get_supported_room_types',
]
