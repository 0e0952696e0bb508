"""CLI output utilities and formatting."""

from datetime import datetime, timedelta, timezone
from colorama import Fore, Style

BANNER = f"""
{Fore.GREEN}{Style.BRIGHT}  _            _       {Style.RESET_ALL}
{Fore.GREEN}{Style.BRIGHT} | |___      _(_) __ _ {Style.RESET_ALL}
{Fore.GREEN}{Style.BRIGHT} | __\\ \\ /\\ / / |/ _` |{Style.RESET_ALL}
{Fore.GREEN}{Style.BRIGHT} | |_ \\ V  V /| | (_| |{Style.RESET_ALL}
{Fore.GREEN}{Style.BRIGHT}  \\__| \\_/\\_/ |_|\\__, |{Style.RESET_ALL}
{Fore.GREEN}{Style.BRIGHT}                 |___/ {Style.RESET_ALL}
   {Fore.WHITE}{Style.BRIGHT}A tiny version control system{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def short_hash(repo, commit_hash: str) -> str:
    """Abbreviate a hash to the core.abbrev length."""
    length = repo.config.get_int('core', 'abbrev', 7)
    return commit_hash[:max(4, length)]


def format_date(timestamp: int, tz: str) -> str:
    """Format a commit timestamp in its own timezone, e.g. 'Thu Jan 01 00:00:00 1970 +0000'."""
    try:
        sign = -1 if tz.startswith('-') else 1
        offset = timedelta(hours=int(tz[1:3]), minutes=int(tz[3:5])) * sign
    except (ValueError, IndexError):
        offset, tz = timedelta(0), '+0000'
    dt = datetime.fromtimestamp(timestamp, timezone(offset))
    return f"{dt.strftime('%a %b %d %H:%M:%S %Y')} {tz}"
