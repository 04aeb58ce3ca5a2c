from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """
    A demo user as exposed outside the database layer.

    The password is never carried here.
    """

    id: int
    email: str
    name: str
    created_at: datetime
    updated_at: datetime
