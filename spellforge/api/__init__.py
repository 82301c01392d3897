from spellforge.api.builder import router as builder_router
from spellforge.api.codec import router as codec_router
from spellforge.api.health import router as health_router
from spellforge.api.share import router as share_router

__all__ = [
    "builder_router",
    "codec_router",
    "health_router",
    "share_router",
]
