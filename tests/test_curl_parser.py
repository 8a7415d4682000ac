import pytest

from reqtools.curl import extract_request, generate_request_name, parse_curl_command, parse_curl_commands
from reqtools.curl import parser as curl_parser
from reqtools.exceptions import CurlParseError, EmptyCommandError, MissingUrlError
from reqtools.models import ApiKeyAuth, BasicAuth, BearerAuth, NoAuth, QueryParam


def test_post_with_json_body():
    request = parse_curl_command(
        """curl -X POST https://api.example.com/users -H "Content-Type: application/json" -d '{"name": "John Doe"}'"""
    )
    assert request.method == "POST"
    assert request.url == "https://api.example.com/users"
    assert request.headers == {"Content-Type": "application/json"}
    assert request.body == '{"name": "John Doe"}'
    assert request.query_params == []
    assert request.auth == NoAuth()


def test_query_string_is_moved_into_params():
    request = parse_curl_command('curl "https://api.example.com/users?page=1&limit=10"')
    assert request.url == "https://api.example.com/users"
    assert request.query_params == [
        QueryParam(key="page", value="1", enabled=True),
        QueryParam(key="limit", value="10", enabled=True),
    ]


def test_query_values_are_decoded():
    request = parse_curl_command("curl 'https://x.com/search?q=hello%20world&tag=a+b&flag='")
    assert [(p.key, p.value) for p in request.query_params] == [
        ("q", "hello world"),
        ("tag", "a b"),
        ("flag", ""),
    ]


def test_url_rewrite_drops_fragment_and_credentials():
    request = parse_curl_command("curl 'https://user:pw@host.example.com:8443/a/b?x=1#top'")
    assert request.url == "https://host.example.com:8443/a/b"


def test_bearer_auth_from_header():
    request = parse_curl_command('curl -H "Authorization: Bearer my-token" https://api.example.com')
    assert request.auth == BearerAuth(token="my-token")
    assert request.auth.to_dict() == {"type": "bearer", "token": "my-token"}


def test_bearer_auth_is_case_insensitive():
    request = parse_curl_command("curl -H 'authorization: bearer  abc ' https://x.com")
    assert request.auth == BearerAuth(token="abc")


@pytest.mark.parametrize("command", ["", "   ", "\n\t"])
def test_empty_command(command):
    with pytest.raises(EmptyCommandError, match="Empty cURL command"):
        parse_curl_command(command)


def test_curl_without_url():
    with pytest.raises(MissingUrlError) as exc_info:
        parse_curl_command("curl")
    assert "URL not found" in str(exc_info.value)


def test_url_must_be_http():
    with pytest.raises(MissingUrlError):
        parse_curl_command("curl -X POST ftp://example.com/file")


def test_extract_request_with_no_tokens():
    with pytest.raises(EmptyCommandError):
        extract_request([])


def test_leading_curl_token_is_optional():
    request = extract_request(["-X", "PUT", "https://x.com/items/1"])
    assert request.method == "PUT"
    assert request.url == "https://x.com/items/1"


def test_structural_errors_are_value_errors():
    assert issubclass(CurlParseError, ValueError)


@pytest.mark.parametrize(
    "command, method",
    [
        ("curl -X post https://x.com", "POST"),
        ("curl --request DELETE https://x.com", "DELETE"),
        ("curl -X options https://x.com", "OPTIONS"),
        ("curl -X FETCH https://x.com", "GET"),
        ("curl https://x.com -X", "GET"),
        ("curl https://x.com", "GET"),
    ],
)
def test_method(command, method):
    assert parse_curl_command(command).method == method


def test_data_does_not_imply_post():
    assert parse_curl_command("curl https://x.com -d a=b").method == "GET"


def test_explicit_url_flag_wins():
    request = parse_curl_command("curl https://b.example.com/y --url https://a.example.com/x")
    assert request.url == "https://a.example.com/x"


def test_explicit_url_with_template_variable():
    request = parse_curl_command("curl --url '{{baseUrl}}/users?page=2'")
    assert request.url == "{{baseUrl}}/users"
    assert request.query_params == []


def test_headers():
    request = parse_curl_command(
        "curl https://x.com -H 'Accept: application/json' --header 'X-Trace:  abc:def ' "
        "-H 'NoColonHere' -H 'accept: text/plain'"
    )
    assert request.headers == {
        "Accept": "application/json",
        "X-Trace": "abc:def",
        "accept": "text/plain",
    }


def test_duplicate_header_last_wins():
    request = parse_curl_command("curl https://x.com -H 'X-A: 1' -H 'X-A: 2'")
    assert request.headers == {"X-A": "2"}


@pytest.mark.parametrize(
    "command, body",
    [
        ("curl https://x.com -d a=1", "a=1"),
        ("curl https://x.com --data a=1", "a=1"),
        ("curl https://x.com --data-raw 'a=1'", "a=1"),
        ("curl https://x.com --data-binary @payload.bin", "@payload.bin"),
        ("curl https://x.com --data=a=1", "a=1"),
        ("curl https://x.com -da=1", "a=1"),
        ("curl https://x.com", ""),
    ],
)
def test_body_sources(command, body):
    assert parse_curl_command(command).body == body


def test_first_data_flag_wins():
    request = parse_curl_command("curl https://x.com --data-binary first -d second")
    assert request.body == "first"

    request = parse_curl_command("curl https://x.com -d first --data-raw second")
    assert request.body == "first"


def test_basic_auth():
    assert parse_curl_command("curl -u user:pass https://x.com").auth == BasicAuth("user", "pass")
    assert parse_curl_command("curl --user alice https://x.com").auth == BasicAuth("alice", "")
    assert parse_curl_command("curl -u bob:pa:ss https://x.com").auth == BasicAuth("bob", "pa:ss")


def test_bearer_beats_basic():
    request = parse_curl_command("curl -u user:pass -H 'Authorization: Bearer t' https://x.com")
    assert request.auth == BearerAuth("t")


def test_basic_beats_api_key():
    request = parse_curl_command("curl -u user:pass -H 'X-API-Key: k' https://x.com")
    assert request.auth == BasicAuth("user", "pass")


@pytest.mark.parametrize("header", ["X-API-Key", "X-Api-Key", "API-Key", "apikey", "x-api-key", "api-key"])
def test_api_key_headers(header):
    request = parse_curl_command(f"curl -H '{header}: secret' https://x.com")
    assert request.auth == ApiKeyAuth(api_key="secret", header=header)
    assert request.headers == {header: "secret"}


def test_unrecognised_auth_header():
    request = parse_curl_command("curl -H 'Authorization: Basic dXNlcjpwYXNz' https://x.com")
    assert request.auth == NoAuth()


def test_multiline_command():
    command = (
        "curl -X PATCH 'https://api.example.com/items/5?verbose=true' \\\n"
        "  -H 'Content-Type: application/json' \\\n"
        "  --data-raw '{\"done\": true}'"
    )
    request = parse_curl_command(command)
    assert request.method == "PATCH"
    assert request.url == "https://api.example.com/items/5"
    assert request.query_params == [QueryParam("verbose", "true")]
    assert request.body == '{"done": true}'


def test_generate_request_name():
    assert generate_request_name("GET", "https://api.example.com/users/42") == "GET 42"
    assert generate_request_name("POST", "https://api.example.com/users/") == "POST users"
    assert generate_request_name("POST", "https://api.example.com") == "POST Request"
    assert generate_request_name("GET", "{{base}}/users") == "GET Request"


def test_batch_isolates_failures():
    outcomes = parse_curl_commands(["curl https://a.com/x", "", "curl", "curl -X PUT https://b.com"])

    assert [o.success for o in outcomes] == [True, False, False, True]
    assert [o.index for o in outcomes] == [1, 2, 3, 4]
    assert outcomes[0].request.url == "https://a.com/x"
    assert outcomes[1].error == "Empty cURL command"
    assert "URL not found" in outcomes[2].error
    assert outcomes[3].request.method == "PUT"
    assert outcomes[1].to_dict() == {"success": False, "error": "Empty cURL command"}


def test_batch_default_error_message(monkeypatch):
    def fail(command):
        raise CurlParseError("")

    monkeypatch.setattr(curl_parser, "parse_curl_command", fail)
    outcomes = parse_curl_commands(["curl https://a.com", "curl https://b.com"])
    assert [o.error for o in outcomes] == ["Failed to parse command 1", "Failed to parse command 2"]
