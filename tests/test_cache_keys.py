from core.cache_keys import build_cache_key, is_user_specific_endpoint


def test_user_specific_endpoints():
    assert is_user_specific_endpoint("/api/kliq-feed") is True
    assert is_user_specific_endpoint("/api/notifications/unread") is True
    # unknown /api/ routes default to private
    assert is_user_specific_endpoint("/api/something-new") is True


def test_public_endpoints_and_non_api_paths():
    assert is_user_specific_endpoint("/api/memes") is False
    assert is_user_specific_endpoint("/api/gifs/trending") is False
    assert is_user_specific_endpoint("/health") is False


def test_user_id_scopes_private_endpoints_only():
    assert build_cache_key("/api/kliq-feed", user_id="42") == "/api/kliq-feed|uid:42"
    assert build_cache_key("/api/memes", user_id="42") == "/api/memes"
    assert build_cache_key("/api/kliq-feed") == "/api/kliq-feed"


def test_headers_are_sorted_by_name():
    key = build_cache_key(
        "/api/posts",
        method="GET",
        headers={"x-b": "2", "accept": "application/json"},
    )
    assert key == "/api/posts|method:GET|headers:accept:application/json,x-b:2"


def test_json_string_body_is_normalized():
    spaced = build_cache_key("/api/polls", method="POST", body='{ "a": 1,  "b": [1, 2] }')
    compact = build_cache_key("/api/polls", method="POST", body='{"a":1,"b":[1,2]}')

    assert spaced == compact == '/api/polls|method:POST|body:{"a":1,"b":[1,2]}'


def test_dict_and_raw_bodies():
    assert build_cache_key("/x", body={"q": "olá"}) == '/x|body:{"q":"olá"}'
    assert build_cache_key("/x", body="not json") == "/x|body:not json"
    assert build_cache_key("/x", body="") == "/x"
