"""
Unit tests for the CoffeeScript linter adapter.
"""

import json
import pytest
from unittest.mock import Mock

from lint_reviewer.linters.bot_config import BotConfig
from lint_reviewer.linters.coffeescript import CoffeeScriptLinter
from lint_reviewer.linters.engine import CoffeeLintEngine, EngineInvocationError
from lint_reviewer.models.pr_diff import ChangedFile
from lint_reviewer.models.review import RawFinding

from support import (
    FakeCoffeeLint,
    StubEngine,
    build_file,
    build_linter,
    build_owner_fetcher,
)


THOUGHTBOT_CONFIG = {
    "max_line_length": {"value": 80, "level": "error"},
    "no_empty_functions": {"level": "ignore"},
    "indentation": {"value": 2, "level": "error"},
}

LEGACY_CONFIG = {
    "max_line_length": {"value": 120, "level": "warn"},
    "no_trailing_semicolons": {"level": "error"},
}


def violations_in(content, config="{}", filename="test.coffee"):
    linter = build_linter(fetcher=build_owner_fetcher(config))
    review = linter.file_review(build_file(content, filename))
    return [message for violation in review.violations for message in violation.messages]


class TestCanLint:
    """can_lint claims files by exact suffix."""

    @pytest.mark.parametrize("filename", [
        "foo.coffee",
        "app/assets/foo.coffee.erb",
        "foo.coffee.js",
        "lib/deep/path/bar.coffee",
    ])
    def test_claims_coffee_files(self, filename):
        """Test .coffee files and their variants are claimed."""
        assert CoffeeScriptLinter.can_lint(filename) is True

    @pytest.mark.parametrize("filename", [
        "foo.js",
        "foo.coffeescript",
        "foo.coffee.rb",
        "foo.COFFEE",
        "coffee",
        "foo.erb",
    ])
    def test_rejects_other_files(self, filename):
        """Test other files are not claimed."""
        assert CoffeeScriptLinter.can_lint(filename) is False


class TestIsEnabled:
    """is_enabled mirrors the bot config switch."""

    def test_enabled_when_config_enables_linter(self):
        """Test linter is enabled when the bot config says so."""
        bot_config = Mock()
        bot_config.linter_enabled.return_value = True

        linter = build_linter(bot_config=bot_config)

        assert linter.is_enabled() is True
        bot_config.linter_enabled.assert_called_with("coffeescript")

    def test_disabled_when_config_disables_linter(self):
        """Test linter is disabled when the bot config says so."""
        bot_config = Mock()
        bot_config.linter_enabled.return_value = False

        linter = build_linter(bot_config=bot_config)

        assert linter.is_enabled() is False

    def test_bot_config_section(self):
        """Test a real bot config section switches the linter off."""
        bot_config = BotConfig({"coffee_script": {"enabled": False}})

        assert build_linter(bot_config=bot_config).is_enabled() is False


class TestFileReview:
    """file_review assembles completed reviews from engine findings."""

    def test_returns_saved_and_completed_review(self):
        """Test the review is persisted and completed."""
        result = build_linter().file_review(build_file("foo"))

        assert result.persisted is True
        assert result.completed is True
        assert result.violations == []

    def test_long_line_with_default_configuration(self):
        """Test a line over 80 characters yields one violation."""
        linter = build_linter()
        file = build_file("1" * 81)

        violations = linter.file_review(file).violations

        assert len(violations) == 1
        violation = violations[0]
        assert violation.filename == "test.coffee"
        assert violation.line_number == 1
        assert violation.patch_position == 2
        assert violation.patch_position == file.patch_position_for(1)
        assert violation.messages == ["Line exceeds maximum allowed length"]

    def test_trailing_whitespace(self):
        """Test trailing whitespace is reported."""
        messages = violations_in("1   ")

        assert any("trailing whitespace" in message for message in messages)

    def test_non_pascal_case_class(self):
        """Test class names must be UpperCamelCased."""
        assert violations_in("class strange_ClassNAME") == ["Class name should be UpperCamelCased"]

    def test_two_lines_two_violations(self):
        """Test violations on different lines stay separate."""
        content = "class strange_ClassNAME\nfoo = 1  "
        review = build_linter().file_review(build_file(content))

        assert [v.line_number for v in review.violations] == [1, 2]
        assert review.violations[0].messages == ["Class name should be UpperCamelCased"]
        assert review.violations[1].messages == ["Line ends with trailing whitespace"]

    def test_same_line_messages_are_merged(self):
        """Test two findings on one line give one violation with both messages."""
        content = "class strange_ClassNAME" + " " * 70
        review = build_linter().file_review(build_file(content))

        assert len(review.violations) == 1
        assert review.violations[0].messages == [
            "Line exceeds maximum allowed length",
            "Line ends with trailing whitespace",
            "Class name should be UpperCamelCased",
        ]

    def test_duplicate_messages_are_not_repeated(self):
        """Test repeated findings on one line do not duplicate messages."""
        engine = StubEngine([
            RawFinding(1, ["Unexpected token"]),
            RawFinding(1, ["Unexpected token"]),
            RawFinding(1, ["Missing semicolon"]),
        ])
        review = build_linter(engine=engine).file_review(build_file("x"))

        assert len(review.violations) == 1
        assert review.violations[0].messages == ["Unexpected token", "Missing semicolon"]

    def test_violation_on_unchanged_line(self):
        """Test findings on lines outside the diff are dropped."""
        file = ChangedFile(filename="lib/test.coffee", content="'hello'" + "x" * 100)

        review = build_linter().file_review(file)

        assert review.violations == []
        assert review.completed is True

    def test_only_changed_lines_are_reported(self):
        """Test context lines of a hunk do not surface violations."""
        content = "a = 1  \nb = 2  \nc = 3  "
        patch = "@@ -1,3 +1,3 @@\n a = 1  \n-b = 1\n+b = 2  \n c = 3  "
        review = build_linter().file_review(build_file(content, patch=patch))

        assert [(v.line_number, v.patch_position) for v in review.violations] == [(2, 3)]

    def test_idempotent_reviews(self):
        """Test reviewing the same file twice yields identical violations."""
        linter = build_linter()
        file = build_file("class strange_ClassNAME\n" + "1" * 90)

        first = linter.file_review(file)
        second = linter.file_review(file)

        def key(review):
            return [(v.filename, v.line_number, v.patch_position, v.messages) for v in review.violations]

        assert key(first) == key(second)

    def test_engine_failure_propagates(self):
        """Test a broken engine invocation is not swallowed."""
        engine = Mock()
        engine.lint.side_effect = EngineInvocationError("Lint engine not found: coffeelint")

        with pytest.raises(EngineInvocationError):
            build_linter(engine=engine).file_review(build_file("x = 1"))

    def test_default_engine_is_coffeelint(self):
        """Test the adapter builds a CoffeeLint engine when none is given."""
        linter = CoffeeScriptLinter(bot_config=BotConfig(), build=build_linter().build)

        assert isinstance(linter.engine, CoffeeLintEngine)


class TestConfiguration:
    """The resolved configuration reaches the engine."""

    def test_owner_configuration_is_used(self):
        """Test the config file named by the pointer document is passed on."""
        engine = StubEngine()
        fetcher = build_owner_fetcher(json.dumps(THOUGHTBOT_CONFIG))

        build_linter(engine=engine, fetcher=fetcher).file_review(build_file("var foo = 'bar'"))

        assert engine.calls[0][1] == THOUGHTBOT_CONFIG

    def test_owner_configuration_changes_results(self):
        """Test owner settings change what is reported."""
        config = json.dumps({"max_line_length": {"value": 120}})

        assert violations_in("1" * 100, config=config) == []
        assert violations_in("1" * 100) == ["Line exceeds maximum allowed length"]

    def test_legacy_configuration_is_used(self):
        """Test the legacy file is used when the pointed config is unparsable."""
        engine = StubEngine()
        fetcher = build_owner_fetcher("{ not json", extra_files={
            "coffeelint.json": json.dumps(LEGACY_CONFIG),
        })

        build_linter(engine=engine, fetcher=fetcher).file_review(build_file("var foo = 'bar'"))

        assert engine.calls[0][1] == LEGACY_CONFIG

    def test_default_configuration_when_nothing_resolves(self):
        """Test the default config is used when every lookup fails."""
        engine = StubEngine()
        fetcher = build_owner_fetcher("{ not json")

        review = build_linter(engine=engine, fetcher=fetcher).file_review(build_file("x"))

        assert engine.calls[0][1] == {}
        assert review.completed is True

    def test_repository_config_overrides_owner_config(self):
        """Test the reviewed repository's own config file wins per key."""
        engine = StubEngine()
        fetcher = build_owner_fetcher(json.dumps(THOUGHTBOT_CONFIG))
        fetcher.add_files("organization/app", "abc123", {
            "config/coffeelint.json": json.dumps({"max_line_length": {"value": 100}}),
        })
        bot_config = BotConfig({"coffeescript": {"config_file": "config/coffeelint.json"}})

        linter = build_linter(engine=engine, fetcher=fetcher, bot_config=bot_config)
        linter.file_review(build_file("x"))

        config = engine.calls[0][1]
        assert config["max_line_length"] == {"value": 100, "level": "error"}
        assert config["no_empty_functions"] == {"level": "ignore"}


class TestErbFiles:
    """ERB templated files are linted without their tags."""

    def test_lints_coffee_erb_file(self):
        """Test .coffee.erb files are reviewed like .coffee files."""
        review = build_linter().file_review(build_file("class strange_ClassNAME", "test.coffee.erb"))

        assert len(review.violations) == 1
        assert review.violations[0].filename == "test.coffee.erb"
        assert review.violations[0].messages == ["Class name should be UpperCamelCased"]

    def test_removes_erb_tags(self):
        """Test ERB tags are removed, never evaluated, and leave no violations."""
        engine = FakeCoffeeLint()
        content = "leonidasLastWords = <%= raise 'hell' %>"

        review = build_linter(engine=engine).file_review(build_file(content, "test.coffee.erb"))

        linted_content = engine.calls[0][0]
        assert linted_content == "leonidasLastWords ="
        assert "raise" not in linted_content
        assert review.violations == []

    def test_mid_line_erb_tag_keeps_columns(self):
        """Test text after a mid-line tag stays at its column."""
        engine = FakeCoffeeLint()
        content = "x = <%= value %> + 1\ny = 2"

        review = build_linter(engine=engine).file_review(build_file(content, "test.coffee.erb"))

        linted_lines = engine.calls[0][0].split("\n")
        assert linted_lines[0].index("+ 1") == content.index("+ 1")
        assert linted_lines[1] == "y = 2"
        assert review.violations == []
