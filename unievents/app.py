import hmac

from unievents.config import Config
from unievents.storage import EventDatabase
from unievents.store import EventStore


def authenticate(username: str, password: str, config: Config) -> bool:
    """Check the single coordinator credential pair.

    Args:
        username: Entered username; surrounding whitespace is ignored.
        password: Entered password, compared exactly.
        config: Configuration holding the expected credentials.

    Returns:
        bool: True when both match.
    """
    username_ok = hmac.compare_digest(
        (username or "").strip().encode(), config.username.encode()
    )
    password_ok = hmac.compare_digest((password or "").encode(), config.password.encode())
    return username_ok and password_ok


def open_store(config: Config, **kwargs) -> EventStore:
    """Bootstrap storage and load the event store.

    Args:
        config: Configuration with the data file locations.
        **kwargs: Passed through to EventStore (ex: clock).

    Returns:
        EventStore: Store loaded from the event file.

    Raises:
        BootstrapError: If the data directory or event file cannot be created.
    """
    database = EventDatabase(config.events_path)
    kwargs.setdefault("name_categories", config.name_categories)
    return EventStore(database, **kwargs)
