"""Tests for %TOKEN% substitution."""
import pytest

from kangapp.core.substitution import UndefinedVariableError, render


class TestRender:
    """Test rendering tokens against a variable set."""

    def test_replaces_token(self, variables):
        """Token is replaced by its lowercase-keyed value."""
        assert render("title: '%NAME%'", variables) == "title: 'my-app'"

    def test_tokens_are_case_insensitive(self, variables):
        """%Name%, %name% and %NAME% resolve to the same key."""
        result = render("%Name% %name% %NAME%", variables)
        assert result == "my-app my-app my-app"

    def test_multiple_tokens(self, variables):
        """Every token in the source is replaced."""
        source = '{"name": "%NAME%", "description": "%DESCRIPTION%"}'
        assert render(source, variables) == (
            '{"name": "my-app", "description": "my-app 프로젝트입니다."}'
        )

    def test_source_without_tokens_unchanged(self, variables):
        """Text with no tokens is returned as-is."""
        source = "width: 100%; height: 50%;"
        assert render(source, variables) == source

    def test_lone_percent_signs_ignored(self, variables):
        """A percent sign without a closing partner is not a token."""
        assert render("100% done", variables) == "100% done"

    def test_render_is_idempotent(self, variables):
        """Rendering already-rendered output changes nothing."""
        once = render("title: '%NAME%' - %DESCRIPTION%", variables)
        assert render(once, variables) == once

    def test_undefined_token_raises(self, variables):
        """A token missing from the variable set fails loudly."""
        with pytest.raises(UndefinedVariableError) as exc_info:
            render("version: %VERSION%", variables)

        assert exc_info.value.token == "VERSION"
        assert exc_info.value.key == "version"
        assert "%VERSION%" in str(exc_info.value)

    def test_undefined_token_never_rendered_as_undefined(self):
        """No partial output with the literal 'undefined' is produced."""
        with pytest.raises(UndefinedVariableError):
            render("%NAME%", {})

    def test_uppercase_keys_are_not_matched(self):
        """Lookups use lowercase keys only."""
        with pytest.raises(UndefinedVariableError):
            render("%NAME%", {"NAME": "x"})
