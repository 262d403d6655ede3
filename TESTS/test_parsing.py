import pytest

from catalog.errors import EmptyContentError, FormatError
from catalog.m3u import iter_attributes, parse_attributes, parse_extinf, scan
from catalog.models import RawEntry


def test_single_channel():
    text = '#EXTM3U\n#EXTINF:-1 group-title="Haber",CNN HD\nhttp://x/cnn.m3u8\n'
    assert scan(text) == [RawEntry(title="CNN HD", url="http://x/cnn.m3u8", group_title="Haber")]


def test_logo_and_unknown_attributes():
    text = (
        "#EXTM3U\n"
        '#EXTINF:-1 tvg-id="trt1.tr" tvg-logo="http://img/trt.png" group-title="Ulusal",TRT 1\n'
        "https://cdn/trt1.m3u8\n"
    )
    [e] = scan(text)
    assert e.title == "TRT 1"
    assert e.group_title == "Ulusal"
    assert e.logo_url == "http://img/trt.png"
    assert e.url == "https://cdn/trt1.m3u8"


@pytest.mark.parametrize("extinf", ['#EXTINF:-1,Foo', '#EXTINF:-1 group-title="",Foo'])
def test_missing_or_empty_group_defaults_to_other(extinf):
    [e] = scan(f"#EXTM3U\n{extinf}\nhttp://x/foo\n")
    assert e.group_title == "Other"
    assert e.logo_url is None


def test_title_is_after_last_comma_outside_quotes():
    info = parse_extinf('#EXTINF:-1 group-title="Films, Action" tvg-logo="http://l/a,b.png",Mad Max, Fury Road')
    assert info.title == "Fury Road"
    assert info.group_title == "Films, Action"
    assert info.logo_url == "http://l/a,b.png"


def test_extinf_without_comma_is_dropped_with_its_url():
    text = (
        "#EXTM3U\n"
        '#EXTINF:-1 group-title="Haber" CNN\n'
        "http://x/cnn.m3u8\n"
        "#EXTINF:-1,Kept\n"
        "http://x/kept.m3u8\n"
    )
    assert [e.title for e in scan(text)] == ["Kept"]


def test_malformed_extinf_clears_previous_pending_entry():
    text = "#EXTM3U\n#EXTINF:-1,First\n#EXTINF:-1 no comma\nhttp://x/1\n"
    assert scan(text) == []


def test_consecutive_extinf_last_one_wins():
    text = "#EXTM3U\n#EXTINF:-1,First\n#EXTINF:-1,Second\nhttp://x/2\n"
    assert [e.title for e in scan(text)] == ["Second"]


def test_trailing_extinf_without_url_is_dropped():
    text = "#EXTM3U\n#EXTINF:-1,A\nhttp://x/a\n#EXTINF:-1,B\n"
    assert [e.title for e in scan(text)] == ["A"]


def test_stray_urls_comments_and_blank_lines_are_ignored():
    text = (
        "#EXTM3U\n"
        "http://x/stray\n"
        "\n"
        "#EXTINF:-1,A\n"
        "#EXTVLCOPT:http-user-agent=VLC\n"
        "   \n"
        "  http://x/a  \n"
        "rtmp://x/not-http\n"
    )
    [e] = scan(text)
    assert e.title == "A"
    assert e.url == "http://x/a"


def test_order_follows_source_and_crlf_lines():
    text = "#EXTM3U\r\n#EXTINF:-1,B\r\nhttp://x/b\r\n#EXTINF:-1,A\r\nhttp://x/a\r\n"
    assert [e.title for e in scan(text)] == ["B", "A"]


def test_entry_count_matches_valid_pairs():
    text = (
        "#EXTM3U\n"
        "#EXTINF:-1,One\nhttp://x/1\n"
        "#EXTINF:-1 broken\nhttp://x/2\n"
        "#EXTINF:-1,   \nhttp://x/3\n"
        "#EXTINF:-1,Four\nhttps://x/4\n"
        "#EXTINF:-1,Five\n"
    )
    assert [e.title for e in scan(text)] == ["One", "Four"]


def test_header_without_entries_is_valid():
    assert scan("#EXTM3U\n") == []


@pytest.mark.parametrize("text", ["", "   \n\t  "])
def test_empty_content(text):
    with pytest.raises(EmptyContentError):
        scan(text)


def test_missing_marker():
    with pytest.raises(FormatError) as exc:
        scan("#EXTINF:-1,A\nhttp://x/a\n")
    assert not isinstance(exc.value, EmptyContentError)


def test_empty_content_is_a_format_error():
    with pytest.raises(FormatError):
        scan("")


def test_attribute_scanner():
    pairs = list(iter_attributes('-1 tvg-id="a" tvg-logo="http://l" group-title="G"'))
    assert pairs == [("tvg-id", "a"), ("tvg-logo", "http://l"), ("group-title", "G")]
    assert list(iter_attributes('-1 group-title="unterminated')) == []


def test_parse_attributes_explicit_optionals():
    assert parse_attributes('-1 tvg-name="x"') == {"group-title": None, "tvg-logo": None}
    assert parse_attributes('-1 group-title="A" group-title="B"')["group-title"] == "A"


def test_attribute_values_are_kept_verbatim():
    [e] = scan('#EXTM3U\n#EXTINF:-1 group-title=" Haber ",CNN\nhttp://x/cnn\n')
    assert e.group_title == " Haber "
    [blank] = scan('#EXTM3U\n#EXTINF:-1 group-title="  ",CNN\nhttp://x/cnn\n')
    assert blank.group_title == "  "


def test_attribute_keys_are_case_sensitive():
    [e] = scan('#EXTM3U\n#EXTINF:-1 GROUP-TITLE="Haber" TVG-LOGO="http://l.png",CNN\nhttp://x/cnn\n')
    assert e.group_title == "Other"
    assert e.logo_url is None
