from mmdsync.inject.injector import find_anchors, inject

__all__ = ["find_anchors", "inject"]
