"""Collaborator interfaces for storage and rendering backends."""

from mmdsync.interfaces.renderer import Renderer
from mmdsync.interfaces.storage import Storage

__all__ = ["Renderer", "Storage"]
