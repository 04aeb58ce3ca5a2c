from pokebrowser.db.database import get_session, init_db
from pokebrowser.db.operations import (
    count_users,
    create_user,
    delete_user,
    find_user_by_email,
    find_user_by_id,
    list_users,
    normalize_email,
    update_user,
    user_to_model,
)

__all__ = [
    "count_users",
    "create_user",
    "delete_user",
    "find_user_by_email",
    "find_user_by_id",
    "get_session",
    "init_db",
    "list_users",
    "normalize_email",
    "update_user",
    "user_to_model",
]
