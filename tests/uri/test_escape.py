from urikit.escape import decode, encode, normalize, Component


def test_decode_replaces_escapes():
    assert decode("/path/to/some%20file") == "/path/to/some file"
    assert decode("a%2Fb%2fc") == "a/b/c"


def test_decode_keeps_malformed_escapes():
    assert decode("100%") == "100%"
    assert decode("%zz%4") == "%zz%4"
    assert decode("%4g%41") == "%4gA"


def test_decode_keeps_bytes_that_are_not_utf8():
    decoded = decode("a%FFb")
    assert decoded == "a\udcffb"
    assert decoded.encode("utf-8", "surrogateescape") == b"a\xffb"
    assert encode(decoded, Component.PATH_SEGMENT) == "a%FFb"
    assert decode("caf%C3%A9") == "caf\u00e9"


def test_decode_without_escapes_returns_text():
    assert decode("plain") == "plain"


def test_encode_path_segment_escapes_delimiters():
    assert encode("a b/c?d#e", Component.PATH_SEGMENT) == "a%20b%2Fc%3Fd%23e"
    assert encode("user:name@host", Component.PATH_SEGMENT) == "user:name@host"


def test_encode_keeps_existing_escapes():
    assert encode("some%20file", Component.PATH_SEGMENT) == "some%20file"
    assert encode("50% off", Component.PATH_SEGMENT) == "50%25%20off"


def test_encode_query_escapes_separators():
    assert encode("a=b&c", Component.QUERY) == "a%3Db%26c"
    assert encode("x/y?z", Component.QUERY) == "x/y?z"


def test_encode_userinfo_and_fragment():
    assert encode("user:pass", Component.USERINFO) == "user:pass"
    assert encode("us@er", Component.USERINFO) == "us%40er"
    assert encode("t=10,20", Component.FRAGMENT) == "t=10,20"
    assert encode("a#b", Component.FRAGMENT) == "a%23b"


def test_encode_non_ascii_as_utf8():
    assert encode("café", Component.PATH_SEGMENT) == "caf%C3%A9"


def test_normalize_decodes_unreserved_only():
    assert normalize("item%2dobj") == "item-obj"
    assert normalize("%41%7e%5F%2E") == "A~_."
    assert normalize("to%7d") == "to%7D"
    assert normalize("a%2fb") == "a%2Fb"


def test_normalize_leaves_malformed_escapes():
    assert normalize("%g1%") == "%g1%"


def test_normalize_is_idempotent():
    text = "P%61ss%3a%7d%2D"
    assert normalize(normalize(text)) == normalize(text) == "Pass%3A%7D-"
