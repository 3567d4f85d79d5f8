from datetime import datetime, timedelta
import pytz
from quizmaster.config import settings

def get_timezone():
    """Configured display timezone for timestamps"""
    return pytz.timezone(settings.timezone)

def get_current_time():
    """Get current time in the configured timezone"""
    return datetime.now(get_timezone())

def to_local_time(dt):
    """Convert an aware or naive-UTC datetime to the configured timezone"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=pytz.UTC)
    return dt.astimezone(get_timezone())

def is_older_than(dt, minutes):
    """Check whether a timestamp lies more than `minutes` in the past"""
    return get_current_time() - to_local_time(dt) > timedelta(minutes=minutes)
