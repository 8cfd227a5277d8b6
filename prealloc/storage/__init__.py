from .allocator import FillerAllocator
from .layout import GIB, MIB, MIN_RECLAIM_SIZE, RESERVED_DIR_NAME, UNIT_SIZE, reserved_dir
from .reclaimer import FillerReclaimer
from .volume import VolumeInspector, VolumeUsage

__all__ = [
    'FillerAllocator',
    'FillerReclaimer',
    'VolumeInspector',
    'VolumeUsage',
    'GIB',
    'MIB',
    'MIN_RECLAIM_SIZE',
    'RESERVED_DIR_NAME',
    'UNIT_SIZE',
    'reserved_dir',
]
