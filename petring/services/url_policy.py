from urllib.parse import urlsplit

from petring.core.errors import InvalidUrl


MEMBER_URL_BLOCKLIST = (
    "discord",
    "localhost",
    "127.0.0.1",
    "google",
    "twitter",
    "x.com",
    "reddit",
    "pixiv",
    "tumblr",
    "facebook",
    "instagram",
    "youtube",
    "tiktok",
    "snapchat",
    "pinterest",
    "github",
    "gitlab",
    "bitbucket",
    "medium",
    "linkedin",
    "stackoverflow",
    "stackexchange",
)

AD_IMAGE_URL_BLOCKLIST = (
    "discord",
    "localhost",
    "127.0.0.1",
    "catbox",
    "fileditch",
    "imageshack",
    "google",
    "imgbb",
    "gyazo",
    "twitter",
    "reddit",
    "pixiv",
    "tumblr",
)


def _host(url: str) -> str:
    parts = urlsplit(url.strip())
    if parts.scheme not in ("http", "https") or not parts.hostname:
        return ""
    return parts.hostname.lower()


def check_url(url: str, blocklist: tuple[str, ...], message: str = "Invalid url") -> str:
    host = _host(url)
    if not host or any(pattern in host for pattern in blocklist):
        raise InvalidUrl(message)
    return url.strip()


def check_member_url(url: str) -> str:
    return check_url(url, MEMBER_URL_BLOCKLIST)


def check_ad_image_url(url: str) -> str:
    return check_url(url, AD_IMAGE_URL_BLOCKLIST, message="Invalid image url")
