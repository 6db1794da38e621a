from datetime import datetime


def get_now() -> datetime:
    """
    Current instant for one request.

    Routers resolve it once and pass it down, so every temporal check made
    while serving a request compares against the same value. Tests override
    this dependency with a fixed instant.
    """
    return datetime.now().replace(microsecond=0)
