from mmdsync.storage.local import IGNORED_DIRS, LocalStorage

__all__ = ["IGNORED_DIRS", "LocalStorage"]
