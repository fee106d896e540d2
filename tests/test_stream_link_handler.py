"""Testes do resolvedor de links de vídeo do YouTube.

Cobrem a ordem de resolução: atalho de esquema do app, parse da URL,
checagem de domínio (com anúncios tratados à parte), tabela de hosts e
validação do id de 11 caracteres. Nada aqui acessa a rede.
"""

import pytest

from link_extractor.exceptions import (
    AdDetectedError,
    IdentifierNotFoundError,
    MalformedUrlError,
    ParsingError,
    UrlRejectedError,
)
from link_extractor.services.youtube.stream_link_handler import (
    YoutubeStreamLinkHandlerFactory,
    assert_is_id,
    extract_id,
    stream_link_handler_factory,
)

VIDEO_ID = "dQw4w9WgXcQ"

factory = stream_link_handler_factory


def test_round_trip_on_canonical_domain():
    for video_id in (VIDEO_ID, "a-b_c1234XY", "___________", "00000000000"):
        assert factory.get_id(factory.get_url(video_id)) == video_id


def test_get_url_is_watch_url():
    assert factory.get_url(VIDEO_ID) == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    # base_url does not change the canonical link
    assert factory.get_url(VIDEO_ID, "https://invidio.us") == factory.get_url(VIDEO_ID)


def test_embed_path_and_watch_query():
    assert factory.get_id("https://www.youtube.com/embed/dQw4w9WgXcQ") == VIDEO_ID
    # extra parameters are ignored
    assert factory.get_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=30") == VIDEO_ID
    assert factory.get_id("https://www.youtube.com/watch?t=30&v=dQw4w9WgXcQ") == VIDEO_ID


@pytest.mark.parametrize(
    "url",
    [
        "https://youtube.com/watch?v=dQw4w9WgXcQ",
        "http://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://m.youtube.com/watch?v=dQw4w9WgXcQ&feature=youtu.be",
        "https://music.youtube.com/watch?v=dQw4w9WgXcQ&list=RDAMVMdQw4w9WgXcQ",
        "https://WWW.YouTube.com/watch?v=dQw4w9WgXcQ",
        "https://www.youtube.com/shorts/dQw4w9WgXcQ",
        "https://www.youtube.com/live/dQw4w9WgXcQ?feature=share",
        "https://www.youtube.com/v/dQw4w9WgXcQ",
        "https://www.youtube.com/w/dQw4w9WgXcQ",
        "https://www.youtube.com/watch/dQw4w9WgXcQ",
        "https://www.youtube-nocookie.com/embed/dQw4w9WgXcQ?rel=0",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ?t=42",
        "https://y2u.be/dQw4w9WgXcQ",
        "https://hooktube.com/watch?v=dQw4w9WgXcQ",
        "https://hooktube.com/embed/dQw4w9WgXcQ",
        "https://invidio.us/dQw4w9WgXcQ",
        "https://yewtu.be/watch?v=dQw4w9WgXcQ",
        "https://piped.kavin.rocks/watch?v=dQw4w9WgXcQ",
        "https://www.youtube.com/attribution_link?a=JdfC0C9V6ZI&u=%2Fwatch%3Fv%3DdQw4w9WgXcQ%26feature%3Dshare",
    ],
)
def test_known_urls_resolve(url):
    assert factory.get_id(url) == VIDEO_ID
    assert factory.accept_url(url) is True


def test_every_mirror_host_with_v_query():
    from link_extractor.services.youtube.parsing_helper import INVIDIOUS_URLS

    for host in sorted(INVIDIOUS_URLS) + ["hooktube.com"]:
        url = f"https://{host}/watch?v={VIDEO_ID}"
        assert factory.get_id(url) == VIDEO_ID, host


def test_short_link_prefers_v_query_over_path():
    assert factory.get_id("https://youtu.be/watch?v=dQw4w9WgXcQ") == VIDEO_ID
    assert factory.get_id("https://youtu.be/aaaaaaaaaaa?v=dQw4w9WgXcQ") == VIDEO_ID


def test_trailing_characters_are_truncated():
    assert factory.get_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ-extra") == VIDEO_ID
    assert factory.get_id("https://youtu.be/dQw4w9WgXcQ/extra") == VIDEO_ID
    assert extract_id("dQw4w9WgXcQ-extra") == VIDEO_ID


def test_short_candidate_is_rejected():
    with pytest.raises(IdentifierNotFoundError):
        factory.get_id("https://www.youtube.com/watch?v=short")
    with pytest.raises(IdentifierNotFoundError):
        assert_is_id("abc")
    with pytest.raises(IdentifierNotFoundError):
        assert_is_id(None)


def test_matched_prefix_with_bad_candidate_does_not_fall_through():
    # embed/ matched, so the valid v= is never consulted
    with pytest.raises(IdentifierNotFoundError):
        factory.get_id("https://www.youtube.com/embed/bad?v=dQw4w9WgXcQ")


def test_nocookie_only_reads_embed():
    with pytest.raises(IdentifierNotFoundError):
        factory.get_id("https://www.youtube-nocookie.com/watch?v=dQw4w9WgXcQ")


def test_canonical_domain_has_no_bare_path_fallback():
    with pytest.raises(IdentifierNotFoundError):
        factory.get_id("https://www.youtube.com/dQw4w9WgXcQ")
    with pytest.raises(IdentifierNotFoundError):
        factory.get_id("https://www.youtube.com/feed/subscriptions")


def test_attribution_link_without_destination():
    with pytest.raises(IdentifierNotFoundError):
        factory.get_id("https://www.youtube.com/attribution_link?a=xyz")


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "not a url",
        "www.youtube.com/watch?v=dQw4w9WgXcQ",
        "foo:bar",
        "https://",
        "https://www.youtube.com:99999999/watch?v=dQw4w9WgXcQ",
        "http://[youtube.com/watch?v=dQw4w9WgXcQ",
    ],
)
def test_unparsable_input_is_malformed(raw):
    with pytest.raises(MalformedUrlError):
        factory.get_id(raw)
    assert factory.accept_url(raw) is False
    with pytest.raises(ParsingError):
        factory.from_url(raw)


def test_from_url_with_unclosed_bracket_is_malformed():
    with pytest.raises(MalformedUrlError):
        factory.from_url("http://[youtube.com/watch?v=dQw4w9WgXcQ")


def test_attribution_link_with_unsplittable_destination():
    url = "https://www.youtube.com/attribution_link?u=%2F%2F%5Bx"
    assert factory.accept_url(url) is False
    with pytest.raises(IdentifierNotFoundError):
        factory.get_id(url)
    with pytest.raises(UrlRejectedError):
        factory.from_url(url)


def test_unknown_host_is_not_found():
    with pytest.raises(IdentifierNotFoundError):
        factory.get_id("https://example.com/watch?v=dQw4w9WgXcQ")
    with pytest.raises(IdentifierNotFoundError):
        factory.get_id("https://vimeo.com/123456789")


def test_non_default_port_or_protocol_is_not_owned():
    with pytest.raises(IdentifierNotFoundError):
        factory.get_id("https://www.youtube.com:8443/watch?v=dQw4w9WgXcQ")
    with pytest.raises(IdentifierNotFoundError):
        factory.get_id("ftp://www.youtube.com/watch?v=dQw4w9WgXcQ")
    # explicit default port is fine
    assert factory.get_id("https://www.youtube.com:443/watch?v=dQw4w9WgXcQ") == VIDEO_ID


def test_ad_host_is_distinguished():
    url = "https://googleads.g.doubleclick.net/watch?v=dQw4w9WgXcQ"
    with pytest.raises(AdDetectedError):
        factory.get_id(url)
    # never collapsed into False
    with pytest.raises(AdDetectedError):
        factory.on_accept_url(url)
    with pytest.raises(AdDetectedError):
        factory.from_url(url)

    err = AdDetectedError(url)
    assert isinstance(err, ParsingError)
    assert not isinstance(err, IdentifierNotFoundError)


def test_ad_host_on_other_port_is_still_an_ad():
    with pytest.raises(AdDetectedError):
        factory.get_id("http://googleads.g.doubleclick.net:8080/pagead/ads")


def test_deep_link_scheme_shortcut():
    assert factory.get_id("vnd.youtube:dQw4w9WgXcQ") == VIDEO_ID
    assert factory.get_id("vnd.youtube://dQw4w9WgXcQ") == VIDEO_ID
    assert factory.get_id("vnd.youtube.launch:dQw4w9WgXcQ") == VIDEO_ID
    assert factory.get_id("VND.YOUTUBE:dQw4w9WgXcQ") == VIDEO_ID


def test_deep_link_falls_back_to_https_url():
    assert factory.get_id("vnd.youtube://www.youtube.com/watch?v=dQw4w9WgXcQ") == VIDEO_ID
    assert factory.get_id("vnd.youtube:youtu.be/dQw4w9WgXcQ") == VIDEO_ID
    assert factory.get_id("vnd.youtube.launch://youtu.be/dQw4w9WgXcQ") == VIDEO_ID


def test_deep_link_with_nothing_usable():
    with pytest.raises(IdentifierNotFoundError):
        factory.get_id("vnd.youtube://example.com/x")


def test_from_url_builds_handler():
    handler = factory.from_url("https://youtu.be/dQw4w9WgXcQ?t=42")
    assert handler.id == VIDEO_ID
    assert handler.original_url == "https://youtu.be/dQw4w9WgXcQ?t=42"
    assert handler.url == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    assert handler.base_url == "https://www.youtube.com"


def test_from_url_unwraps_google_redirect():
    google = (
        "https://www.google.com/url?sa=t&url="
        "https%3A%2F%2Fwww.youtube.com%2Fwatch%3Fv%3DdQw4w9WgXcQ&usg=x"
    )
    handler = factory.from_url(google)
    assert handler.id == VIDEO_ID
    assert handler.original_url == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def test_from_url_with_base_url_does_not_unwrap():
    google = (
        "https://www.google.com/url?url="
        "https%3A%2F%2Fwww.youtube.com%2Fwatch%3Fv%3DdQw4w9WgXcQ"
    )
    with pytest.raises(UrlRejectedError):
        factory.from_url(google, "https://www.google.com")


def test_from_url_rejections():
    with pytest.raises(UrlRejectedError):
        factory.from_url("https://example.com/watch?v=dQw4w9WgXcQ")
    with pytest.raises(MalformedUrlError):
        factory.from_url("")


def test_from_id():
    handler = factory.from_id(VIDEO_ID)
    assert handler.original_url == handler.url == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    assert handler.id == VIDEO_ID


def test_factory_is_stateless():
    other = YoutubeStreamLinkHandlerFactory()
    url = "https://youtu.be/dQw4w9WgXcQ"
    assert other.from_url(url) == factory.from_url(url)
