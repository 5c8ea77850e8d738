"""Local preview builds for OpenZeppelin documentation components."""

from .driver import Previewer, prepare_preview
from .models import ContentSource, SyncResult

__all__ = ["ContentSource", "Previewer", "SyncResult", "prepare_preview"]
