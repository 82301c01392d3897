from spellforge.db.database import get_session, init_db
from spellforge.db.operations import (
    SHARE_TYPES,
    ShareIdExhaustedError,
    build_redirect_target,
    create_share_link,
    generate_share_id,
    get_share_link,
    purge_expired_share_links,
)

__all__ = [
    "SHARE_TYPES",
    "ShareIdExhaustedError",
    "build_redirect_target",
    "create_share_link",
    "generate_share_id",
    "get_session",
    "get_share_link",
    "init_db",
    "purge_expired_share_links",
]
