import pytest

from petring.core.errors import InvalidUrl
from petring.services.url_policy import check_ad_image_url, check_member_url


@pytest.mark.parametrize(
    "url",
    [
        "https://alice.neocities.org",
        "http://bob.example/home/",
        "  https://carol.dev/  ",
    ],
)
def test_member_urls_accepted(url):
    assert check_member_url(url) == url.strip()


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/alice",
        "https://www.youtube.com/@alice",
        "http://localhost:8080",
        "http://127.0.0.1/",
        "ftp://alice.example",
        "alice.example",
        "",
    ],
)
def test_member_urls_rejected(url):
    with pytest.raises(InvalidUrl):
        check_member_url(url)


def test_blocklist_only_looks_at_host():
    assert check_member_url("https://alice.example/github-projects")


def test_ad_image_hosts():
    assert check_ad_image_url("https://alice.example/ad.png")
    with pytest.raises(InvalidUrl) as exc:
        check_ad_image_url("https://files.catbox.moe/abc.png")
    assert exc.value.message == "Invalid image url"
    with pytest.raises(InvalidUrl):
        check_ad_image_url("https://cdn.discordapp.com/attachments/1/2/ad.png")
