"""Tests for platform detection and the shared registry."""

from __future__ import annotations

import pytest

from modules.downloader.models import Platform
from modules.downloader.platforms import (
    PLATFORM_MAPPING,
    PLATFORM_RULES,
    detect_platform,
    get_platform,
    get_platform_for_url,
)

EXPECTED_ENDPOINTS = {
    Platform.INSTAGRAM: "instagram",
    Platform.TIKTOK: "tiktok",
    Platform.TWITTER: "twitter",
    Platform.DOUYIN: "dou_douyin",
    Platform.SNACKVIDEO: "snackvideo",
    Platform.MEDIAFIRE: "mediafire",
    Platform.SOUNDCLOUD: "soundcloud",
    Platform.THREADS: "threads",
    Platform.XVIDEOS: "xvideos",
    Platform.SPOTIFY: "spotify",
    Platform.YOUTUBE: "youtube",
    Platform.FACEBOOK: "facebook",
}


def test_registry_covers_every_platform_once():
    assert [rule.platform for rule in PLATFORM_RULES] == list(Platform)
    assert set(PLATFORM_MAPPING) == set(Platform)
    for rule in PLATFORM_RULES:
        assert rule.endpoint == EXPECTED_ENDPOINTS[rule.platform]
        assert get_platform(rule.platform).platform is rule.platform


@pytest.mark.parametrize(
    "rule,domain",
    [(rule, domain) for rule in PLATFORM_RULES for domain in rule.match_domains],
    ids=lambda value: getattr(value, "endpoint", value),
)
def test_every_domain_maps_to_its_endpoint(rule, domain):
    detected = detect_platform(f"https://{domain}/some/post?id=1")
    assert detected is not None
    assert detected.platform is rule.platform
    assert detected.endpoint == rule.endpoint


def test_detection_is_case_insensitive_and_matches_anywhere():
    assert detect_platform("HTTPS://WWW.INSTAGRAM.COM/p/abc").platform is Platform.INSTAGRAM
    # substring matching also fires inside query strings
    rule = detect_platform("https://example.org/share?target=soundcloud.com/artist")
    assert rule.platform is Platform.SOUNDCLOUD


def test_subdomains_match():
    assert detect_platform("https://m.facebook.com/watch?v=1").platform is Platform.FACEBOOK
    assert detect_platform("https://vm.tiktok.com/ZMabc/").platform is Platform.TIKTOK
    assert detect_platform("https://youtu.be/dQw4w9WgXcQ").platform is Platform.YOUTUBE


def test_first_registered_rule_wins():
    url = "https://www.instagram.com/p/abc?ref=tiktok.com"
    assert detect_platform(url).platform is Platform.INSTAGRAM


@pytest.mark.parametrize("url", ["https://example.com/video.mp4", "", "not a url", None])
def test_unknown_urls_are_unsupported(url):
    assert detect_platform(url) is None
    assert get_platform_for_url(url) is None


def test_get_platform_for_url_returns_handler():
    handler = get_platform_for_url("https://twitter.com/user/status/1")
    assert handler.name == "Twitter"
    assert handler.is_supported("https://x.com/user/status/1")
