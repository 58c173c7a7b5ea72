import datetime


def utcnow() -> datetime.datetime:
    """Naive UTC timestamp; every stored timestamp comes from here."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
