import pytest

from reqtools.environment.dotenv import DotenvStrategy, unquote_value


@pytest.fixture
def strategy():
    return DotenvStrategy()


def test_parse(strategy, dotenv_content):
    (env,) = strategy.parse(dotenv_content)

    assert env.name == "staging"
    assert env.display_name == "Staging"
    assert env.variables == {
        "BASE_URL": "https://staging.example.com",
        "API_KEY": "s3cr3t value",
        "TIMEOUT": "30",
        "EMPTY": "",
    }
    assert env.is_default == 0


def test_confidence_counts_comments(strategy, dotenv_content):
    # 4 assignments out of 5 non-blank lines
    assert strategy.get_confidence(dotenv_content) == pytest.approx(0.8)
    assert strategy.get_confidence("A=1\nnot a pair") == pytest.approx(0.5)
    assert strategy.get_confidence("A=1\nB=2") == 1.0


@pytest.mark.parametrize("content", ["", "   \n\n", "# only a comment", '{"name": "x"}', "1BAD=x"])
def test_no_confidence(strategy, content):
    assert strategy.get_confidence(content) == 0.0
    assert not strategy.detect(content)


def test_environment_comment_wins(strategy):
    (env,) = strategy.parse("# environment:  QA Box \nA=1", source_name="prod.env")
    assert env.display_name == "QA Box"
    assert env.name == "qa_box"


def test_file_stem_names_environment(strategy):
    (env,) = strategy.parse("# Shared settings\nA=1", source_name="config/production.env")
    assert env.display_name == "production"
    assert env.name == "production"


@pytest.mark.parametrize("source_name", [None, ".env", ".env.local", "/srv/app/.env.production"])
def test_last_comment_names_environment(strategy, source_name):
    (env,) = strategy.parse("# First\nA=1\n# Shared settings\nB=2", source_name=source_name)
    assert env.display_name == "Shared settings"
    assert env.name == "shared_settings"


def test_default_name(strategy):
    (env,) = strategy.parse("A=1")
    assert env.display_name == "Imported Environment"
    assert env.name == "imported_environment"


def test_values(strategy):
    content = "\n".join(
        [
            "URL=http://x?a=b",
            "SINGLE='quoted value'",
            "MISMATCHED=\"open'",
            "LONE=\"",
            "  INDENTED = yes  ",
            "not a pair",
            "1BAD=x",
            "A=first",
            "A=second",
        ]
    )
    (env,) = strategy.parse(content)
    assert env.variables == {
        "URL": "http://x?a=b",
        "SINGLE": "quoted value",
        "MISMATCHED": "\"open'",
        "LONE": "",
        "INDENTED": "yes",
        "A": "second",
    }


def test_empty_content_gives_one_environment(strategy):
    envs = strategy.parse("")
    assert len(envs) == 1
    assert envs[0].variables == {}


@pytest.mark.parametrize(
    "value, expected",
    [
        ('"a b"', "a b"),
        ("'a b'", "a b"),
        ("\"'a'\"", "'a'"),
        ('""', ""),
        ('"', ""),
        ("'", ""),
        ("'a\"", "'a\""),
        ("plain", "plain"),
    ],
)
def test_unquote_value(value, expected):
    assert unquote_value(value) == expected


def test_format_info(strategy):
    info = strategy.get_format_info()
    assert info.name == "env"
    assert info.display_name == ".env File"
    assert info.file_extensions == (".env", ".env.local", ".env.production")
