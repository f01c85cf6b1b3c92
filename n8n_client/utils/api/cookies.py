# n8n_client/utils/api/cookies.py

"""
Loading of Netscape/Mozilla cookie files for session authentication.

Cookies end up in a list of ``Morsel`` objects, one per line, so cookies
sharing a name across domains all survive. Each is handed to
``aiohttp.CookieJar.update_cookies`` when the client session is created and
the jar keeps the ones matching the base URL.
"""

import logging
import os
import tempfile
import time
from email.utils import formatdate
from http.cookies import CookieError, Morsel
from pathlib import Path
from typing import List, Optional

from ...core.exceptions import CookieFileError
from ...core.utils import get_file_extension, is_within_directory

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".txt", ".cookies", ".cookie", "")
HTTP_ONLY_PREFIX = "#HttpOnly_"
COOKIE_FIELDS = 7

def get_allowed_directories() -> List[str]:
    """Directories an absolute cookie file path may live in"""
    allowed_dirs = ["/tmp", "/var/tmp", tempfile.gettempdir()]
    try:
        allowed_dirs.append(str(Path.home()))
    except RuntimeError:
        pass
    try:
        allowed_dirs.append(os.getcwd())
    except OSError:
        pass
    return allowed_dirs

def validate_cookie_file_path(cookie_file: str) -> str:
    """
    Check a cookie file path before it is opened.

    Returns the normalized path. Raises CookieFileError when the path is
    empty, contains a ``..`` segment, points outside the allowed
    directories, or has an unexpected extension.
    """
    if not cookie_file:
        raise CookieFileError("cookie file path cannot be empty")

    clean_path = os.path.normpath(cookie_file)
    raw_parts = cookie_file.replace("\\", "/").split("/")
    if ".." in raw_parts or ".." in Path(clean_path).parts:
        raise CookieFileError(f"cookie file path contains invalid path traversal: {cookie_file}")

    if os.path.isabs(clean_path):
        if not any(is_within_directory(clean_path, d) for d in get_allowed_directories()):
            raise CookieFileError(f"cookie file path outside allowed directories: {cookie_file}")

    ext = get_file_extension(clean_path)
    if ext not in ALLOWED_EXTENSIONS:
        raise CookieFileError(
            f"cookie file has invalid extension: {ext} "
            "(allowed: .txt, .cookies, .cookie, or no extension)"
        )

    return clean_path

def parse_cookie_line(line: str, now: Optional[float] = None) -> Optional[Morsel]:
    """
    Parse one line of a Netscape cookie file.

    Returns None for comments, blank or short lines, illegal cookie names
    and cookies that have already expired.
    """
    line = line.strip()
    http_only = line.startswith(HTTP_ONLY_PREFIX)
    if http_only:
        line = line[len(HTTP_ONLY_PREFIX):]
    elif not line or line.startswith("#"):
        return None

    parts = line.split("\t")
    if len(parts) < COOKIE_FIELDS:
        return None

    domain, _subdomains, path, secure, expiration, name, value = parts[:COOKIE_FIELDS]

    try:
        expires = int(expiration)
    except ValueError:
        expires = 0

    # 0 marks a session cookie without fixed expiry
    if expires and expires < (now if now is not None else time.time()):
        return None

    morsel: Morsel = Morsel()
    try:
        morsel.set(name, value, value)
    except CookieError:
        logger.debug("Skipping cookie with illegal name %r", name)
        return None

    morsel["domain"] = domain.lstrip(".")
    morsel["path"] = path or "/"
    if expires:
        try:
            morsel["expires"] = formatdate(expires, usegmt=True)
        except (ValueError, OverflowError, OSError):
            # Beyond what a date can hold, e.g. millisecond epochs; never expires
            logger.debug("Cookie %r expiry %d out of range, keeping it without expiry", name, expires)
    if secure.upper() == "TRUE":
        morsel["secure"] = True
    if http_only:
        morsel["httponly"] = True
    return morsel

def load_cookies_from_file(cookie_file: str) -> List[Morsel]:
    """Validate, read and parse a cookie file; one Morsel per usable line, in file order"""
    clean_path = validate_cookie_file_path(cookie_file)

    cookies: List[Morsel] = []
    now = time.time()
    try:
        with open(clean_path, "r", encoding="utf-8") as f:
            for line in f:
                morsel = parse_cookie_line(line, now)
                if morsel is not None:
                    cookies.append(morsel)
    except OSError as e:
        raise CookieFileError(f"failed to open cookie file: {e}") from e
    except UnicodeDecodeError as e:
        raise CookieFileError(f"error reading cookie file: {e}") from e

    return cookies
