"""YouTube-specific parsing helpers.

Host classification used by the link resolver, plus small readers for the
``ytInitialData`` tree embedded in YouTube pages.
"""

from __future__ import annotations

import html as html_lib
import re
from typing import Any, List, Optional

from link_extractor.core.scraping.json_navigator import opt_value
from link_extractor.core.scraping.normalizer import (
    UrlLike,
    decode_url_utf8,
    get_host,
    string_to_url,
)
from link_extractor.core.scraping.parser import extract_json_assignment
from link_extractor.exceptions import MalformedUrlError, ParsingError

YOUTUBE_BASE_URL = "https://www.youtube.com"

GOOGLE_URLS = ("google.", "m.google.", "www.google.")

YOUTUBE_URLS = frozenset(
    {"youtube.com", "www.youtube.com", "m.youtube.com", "music.youtube.com"}
)
YOUTUBE_NOCOOKIE_HOST = "www.youtube-nocookie.com"
YOUTUBE_SHORT_HOST = "youtu.be"
Y2UBE_HOST = "y2u.be"
HOOKTUBE_HOST = "hooktube.com"

# Invidious / Piped front-ends known to proxy YouTube watch pages.
INVIDIOUS_URLS = frozenset(
    {
        "invidio.us",
        "dev.invidio.us",
        "www.invidio.us",
        "redirect.invidious.io",
        "invidious.snopyta.org",
        "yewtu.be",
        "tube.connect.cafe",
        "tubus.eduvid.org",
        "invidious.kavin.rocks",
        "invidious.site",
        "invidious-us.kavin.rocks",
        "piped.kavin.rocks",
        "vid.mint.lgbt",
        "invidiou.site",
        "invidious.fdn.fr",
        "invidious.048596.xyz",
        "invidious.zee.li",
        "vid.puffyan.us",
        "ytprivate.com",
        "invidious.namazso.eu",
        "invidious.silkky.cloud",
        "ytb.trom.tf",
        "invidious.exonip.de",
        "inv.riverside.rocks",
        "invidious.blamefran.net",
        "y.com.cm",
        "invidious.moomoo.me",
        "yt.cyberhost.uk",
    }
)

AD_HOSTS = frozenset({"googleads.g.doubleclick.net"})

INITIAL_DATA_REGEXES = (
    re.compile(r'window\["ytInitialData"\]\s*=\s*(\{.*?\});'),
    re.compile(r"var\s*ytInitialData\s*=\s*(\{.*?\});"),
)


def extract_cached_url_if_needed(url: Optional[str]) -> Optional[str]:
    """Turn ``webcache.googleusercontent.com/search?q=cache:<url>`` into ``<url>``."""
    if url is None:
        return None
    if "webcache.googleusercontent.com" in url and "cache:" in url:
        return url.split("cache:", 1)[1]
    return url


def is_google_url(url: Optional[str]) -> bool:
    cached = extract_cached_url_if_needed(url)
    if not cached:
        return False
    try:
        host = get_host(string_to_url(cached))
    except MalformedUrlError:
        return False
    return any(host.startswith(prefix) for prefix in GOOGLE_URLS)


def is_youtube_url(url: UrlLike) -> bool:
    return get_host(url) in YOUTUBE_URLS


def is_youtube_service_url(url: UrlLike) -> bool:
    return get_host(url) in (YOUTUBE_NOCOOKIE_HOST, YOUTUBE_SHORT_HOST)


def is_hooktube_url(url: UrlLike) -> bool:
    return get_host(url) == HOOKTUBE_HOST


def is_invidious_url(url: UrlLike) -> bool:
    return get_host(url) in INVIDIOUS_URLS


def is_y2ube_url(url: UrlLike) -> bool:
    return get_host(url) == Y2UBE_HOST


def is_ad_url(url: UrlLike) -> bool:
    return get_host(url) in AD_HOSTS


# Mixes (auto-generated playlists) ---------------------------------------


def is_youtube_mix_id(playlist_id: str) -> bool:
    return playlist_id.startswith("RD")


def is_youtube_my_mix_id(playlist_id: str) -> bool:
    return playlist_id.startswith("RDMM")


def is_youtube_music_mix_id(playlist_id: str) -> bool:
    return playlist_id.startswith(("RDAMVM", "RDCLAK"))


def is_youtube_channel_mix_id(playlist_id: str) -> bool:
    return playlist_id.startswith("RDCM")


def is_youtube_genre_mix_id(playlist_id: str) -> bool:
    return playlist_id.startswith("RDGMEM")


def extract_video_id_from_mix_id(playlist_id: str) -> str:
    """Return the video a stream mix was built from.

    Channel and genre mixes are not based on one video and raise.
    """
    if not playlist_id:
        raise ParsingError("Video id could not be determined from empty playlist id")
    if is_youtube_my_mix_id(playlist_id):
        return playlist_id[4:]
    if is_youtube_music_mix_id(playlist_id):
        return playlist_id[6:]
    if is_youtube_channel_mix_id(playlist_id):
        raise ParsingError(
            f"Video id could not be determined from channel mix id: {playlist_id}"
        )
    if is_youtube_genre_mix_id(playlist_id):
        raise ParsingError(
            f"Video id could not be determined from genre mix id: {playlist_id}"
        )
    if is_youtube_mix_id(playlist_id):
        # RD + 11 character video id
        if len(playlist_id) != 13:
            raise ParsingError(
                f"Video id could not be determined from mix id: {playlist_id}"
            )
        return playlist_id[2:]
    raise ParsingError(
        f"Video id could not be determined from playlist id: {playlist_id}"
    )


# ytInitialData ----------------------------------------------------------


def get_initial_data(page_html: str) -> dict:
    try:
        return extract_json_assignment(page_html, INITIAL_DATA_REGEXES)
    except ParsingError as exc:
        raise ParsingError("Could not get ytInitialData") from exc


def parse_duration_string(text: str) -> int:
    """``"1:02:03"`` -> 3723. Accepts up to days:hours:minutes:seconds."""
    parts = text.split(":") if ":" in text else text.split(".")
    if not 1 <= len(parts) <= 4:
        raise ParsingError(f"Error duration string with unknown format: {text}")

    multipliers = (1, 60, 60 * 60, 24 * 60 * 60)
    total = 0
    for part, multiplier in zip(reversed(parts), multipliers):
        digits = re.sub(r"\D", "", part)
        total += int(digits or 0) * multiplier
    return total


def get_url_from_navigation_endpoint(endpoint: Any) -> Optional[str]:
    """Return the absolute URL a ``navigationEndpoint`` object points at."""
    if not isinstance(endpoint, dict):
        return None

    if "urlEndpoint" in endpoint:
        intern_url = opt_value(endpoint, "urlEndpoint.url")
        if not intern_url:
            return None
        if intern_url.startswith(YOUTUBE_BASE_URL + "/redirect?"):
            intern_url = intern_url[len(YOUTUBE_BASE_URL) :]
        if intern_url.startswith("/redirect?"):
            for param in intern_url[len("/redirect?") :].split("&"):
                key, _, value = param.partition("=")
                if key == "q":
                    return decode_url_utf8(value)
        elif intern_url.startswith("http"):
            return intern_url
        elif intern_url.startswith(("/channel", "/user", "/watch")):
            return YOUTUBE_BASE_URL + intern_url

    if "browseEndpoint" in endpoint:
        browse_id = opt_value(endpoint, "browseEndpoint.browseId")
        canonical = opt_value(endpoint, "browseEndpoint.canonicalBaseUrl")
        if browse_id:
            if browse_id.startswith("UC"):
                return f"{YOUTUBE_BASE_URL}/channel/{browse_id}"
            if browse_id.startswith("VL"):
                return f"{YOUTUBE_BASE_URL}/playlist?list={browse_id[2:]}"
        if canonical:
            return YOUTUBE_BASE_URL + canonical

    if "watchEndpoint" in endpoint:
        watch = endpoint["watchEndpoint"]
        if not isinstance(watch, dict):
            return None
        url = f"{YOUTUBE_BASE_URL}/watch?v={watch.get('videoId')}"
        if "playlistId" in watch:
            url += f"&list={watch['playlistId']}"
        if "startTimeSeconds" in watch:
            url += f"&t={int(watch['startTimeSeconds'])}"
        return url

    if "watchPlaylistEndpoint" in endpoint:
        playlist_id = opt_value(endpoint, "watchPlaylistEndpoint.playlistId")
        return f"{YOUTUBE_BASE_URL}/playlist?list={playlist_id}"

    meta_url = opt_value(endpoint, "commandMetadata.webCommandMetadata.url")
    if meta_url:
        return YOUTUBE_BASE_URL + meta_url

    return None


def get_text_from_object(text_object: Any, html: bool = False) -> Optional[str]:
    """Read a ``{"simpleText": ...}`` or ``{"runs": [...]}`` text object.

    With ``html=True`` runs are rendered with links and bold/italic/strike
    markup, newlines become ``<br>``.
    """
    if not isinstance(text_object, dict) or not text_object:
        return None

    if "simpleText" in text_object:
        simple_text = opt_value(text_object, "simpleText")
        return simple_text if isinstance(simple_text, str) else None

    runs = opt_value(text_object, "runs", [])
    if not runs:
        return None

    chunks: List[str] = []
    for run in runs:
        if not isinstance(run, dict):
            continue
        text = run.get("text") or ""
        if not html:
            chunks.append(text)
            continue

        if "navigationEndpoint" in run:
            url = get_url_from_navigation_endpoint(run["navigationEndpoint"])
            if url:
                text = (
                    f'<a href="{html_lib.escape(url)}">{html_lib.escape(text)}</a>'
                )

        tags = [
            tag
            for tag, flag in (("b", "bold"), ("i", "italics"), ("s", "strikethrough"))
            if run.get(flag) is True
        ]
        opening = "".join(f"<{t}>" for t in tags)
        closing = "".join(f"</{t}>" for t in reversed(tags))
        chunks.append(f"{opening}{text}{closing}")

    result = "".join(chunks)
    if html:
        result = result.replace("\n", "<br>").replace("  ", " &nbsp;")
    return result


def get_text_from_object_or_raise(text_object: Any, error: str) -> str:
    result = get_text_from_object(text_object)
    if result is None:
        raise ParsingError(f"Could not extract text: {error}")
    return result
