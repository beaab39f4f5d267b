"""Tests for the built-in standard and file predicates."""

import pytest

from formforge.form.fields import FileHandle
from formforge.validation import file_registry, register_all_validators, standard_registry
from formforge.validation.validators import EMAIL_PATTERN, URL_PATTERN, parse_size
from formforge.validation.validators import files, standard


@pytest.fixture(autouse=True)
def builtin_validators():
    register_all_validators()


# =============================================================================
# Pattern Tests
# =============================================================================


class TestPatterns:
    def test_email_valid(self):
        for email in ["test@example.com", "user.name@domain.co.uk", "user+tag@example.org"]:
            assert EMAIL_PATTERN.fullmatch(email), f"{email} should be valid"

    def test_email_invalid(self):
        for email in ["not-an-email", "@example.com", "user@", "user name@example.com"]:
            assert not EMAIL_PATTERN.fullmatch(email), f"{email} should be invalid"

    def test_url(self):
        assert URL_PATTERN.fullmatch("https://example.com/path")
        assert not URL_PATTERN.fullmatch("example.com")


# =============================================================================
# Standard Predicates
# =============================================================================


class TestPresence:
    def test_required(self):
        assert standard.required("x") is True
        assert standard.required("") is False
        assert standard.required(None) is False
        assert standard.required(0) is True

    def test_required_checkbox(self):
        assert standard.required(True) is True
        assert standard.required(False) is False

    def test_empty(self):
        assert standard.empty("") is True
        assert standard.empty("   ") is True
        assert standard.empty(None) is True
        assert standard.empty("x") is False


class TestComparison:
    def test_equals(self):
        assert standard.equals("abc", "abc") is True
        assert standard.equals(5, "5") is True
        assert standard.equals("abc", "abd") is False

    def test_contains(self):
        assert standard.contains("hello world", "world") is True
        assert standard.contains("hello", "world") is False

    def test_matches(self):
        assert standard.matches("abc123", "^[a-z]+[0-9]+$") is True
        assert standard.matches("ABC", "^[a-z]+$") is False
        assert standard.matches("ABC", "^[a-z]+$", "i") is True

    def test_is_in(self):
        assert standard.is_in("red", "red", "green") is True
        assert standard.is_in("blue", "red", "green") is False


class TestFormat:
    def test_numeric(self):
        assert standard.is_numeric("12345") is True
        assert standard.is_numeric("-12") is True
        assert standard.is_numeric("12.5") is False
        assert standard.is_numeric("") is False

    def test_int_with_bounds(self):
        assert standard.is_int("10") is True
        assert standard.is_int("10", "1", "10") is True
        assert standard.is_int("11", "1", "10") is False
        assert standard.is_int("1.5") is False
        assert standard.is_int("007") is False

    def test_float(self):
        assert standard.is_float("1.5") is True
        assert standard.is_float(".5") is True
        assert standard.is_float("1e3") is True
        assert standard.is_float("abc") is False
        assert standard.is_float("") is False
        assert standard.is_float("2.5", "0", "2") is False

    def test_alpha(self):
        assert standard.is_alpha("abc") is True
        assert standard.is_alpha("abc1") is False
        assert standard.is_alphanumeric("abc1") is True
        assert standard.is_alphanumeric("abc-1") is False

    def test_trailing_newline_fails_format_checks(self):
        assert standard.is_alpha("abc\n") is False
        assert standard.is_alphanumeric("abc1\n") is False
        assert standard.is_email("a@b.com\n") is False
        assert standard.is_url("https://example.com\n") is False
        assert standard.is_numeric("12\n") is False
        assert standard.is_int("12\n") is False
        assert standard.is_float("1.5\n") is False

    def test_boolean(self):
        for value in ["true", "false", "1", "0", True, False]:
            assert standard.is_boolean(value) is True
        assert standard.is_boolean("yes") is False

    def test_date(self):
        assert standard.is_date("2024-02-29") is True
        assert standard.is_date("2023-02-29") is False
        assert standard.is_date("tomorrow") is False

    def test_case(self):
        assert standard.is_uppercase("ABC") is True
        assert standard.is_uppercase("AbC") is False
        assert standard.is_lowercase("abc") is True


class TestLength:
    def test_min_length(self):
        assert standard.min_length("abc", "3") is True
        assert standard.min_length("ab", "3") is False

    def test_max_length(self):
        assert standard.max_length("abc", "3") is True
        assert standard.max_length("abcd", "3") is False

    def test_is_length(self):
        assert standard.is_length("abc", "2", "4") is True
        assert standard.is_length("a", "2", "4") is False
        assert standard.is_length("abcde", "2", "4") is False
        assert standard.is_length("abcdefgh", "2") is True

    def test_none_has_zero_length(self):
        assert standard.min_length(None, "1") is False
        assert standard.max_length(None, "0") is True


class TestStandardRegistration:
    def test_registered_names(self):
        for name in ["required", "empty", "isEmail", "minLength", "maxLength", "isLength"]:
            assert standard_registry.is_registered(name)

    def test_file_only_names_not_in_standard(self):
        assert not standard_registry.is_registered("isSingle")


# =============================================================================
# File Predicates
# =============================================================================


def make_files(*specs):
    return [FileHandle(name=name, size=size, type=mime) for name, size, mime in specs]


class TestParseSize:
    def test_plain_bytes(self):
        assert parse_size("500") == 500

    def test_units(self):
        assert parse_size("1kb") == 1024
        assert parse_size("2MB") == 2 * 1024 * 1024
        assert parse_size("1.5kb") == 1536

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_size("lots")


class TestFileCounts:
    def test_required_and_empty(self):
        assert files.required(make_files(("a.txt", 1, "text/plain"))) is True
        assert files.required([]) is False
        assert files.is_empty([]) is True
        assert files.is_empty(None) is True

    def test_single_and_multiple(self):
        one = make_files(("a.txt", 1, "text/plain"))
        two = make_files(("a.txt", 1, "text/plain"), ("b.txt", 1, "text/plain"))
        assert files.is_single(one) is True
        assert files.is_single(two) is False
        assert files.is_multiple(two) is True
        assert files.is_multiple(one) is False

    def test_files_count(self):
        two = make_files(("a.txt", 1, ""), ("b.txt", 1, ""))
        assert files.is_files_count(two, "2") is True
        assert files.is_files_count(two, "3") is False


class TestFileSizes:
    def test_total_size(self):
        selected = make_files(("a.bin", 600, ""), ("b.bin", 600, ""))
        assert files.is_total_size(selected, "1kb") is False
        assert files.is_total_size(selected, "2kb") is True

    def test_each_file_size(self):
        selected = make_files(("a.bin", 600, ""), ("b.bin", 2000, ""))
        assert files.is_each_file_size(selected, "1kb") is False
        assert files.is_each_file_size(selected, "2kb") is True


class TestFileTypes:
    def test_each_file_type_exact(self):
        selected = make_files(("a.pdf", 1, "application/pdf"))
        assert files.is_each_file_type(selected, "application/pdf") is True
        assert files.is_each_file_type(selected, "image/png") is False

    def test_each_file_type_wildcard(self):
        selected = make_files(("a.png", 1, "image/png"), ("b.jpg", 1, "image/jpeg"))
        assert files.is_each_file_type(selected, "image/*") is True
        assert files.is_each_file_type(selected, "image/png") is False
        assert files.is_each_file_type(selected, "image/png", "image/jpeg") is True

    def test_each_file_extension(self):
        selected = make_files(("a.PNG", 1, ""), ("b.jpg", 1, ""))
        assert files.is_each_file_extension(selected, "png", "jpg") is True
        assert files.is_each_file_extension(selected, ".png") is False

    def test_extensionless_file(self):
        assert files.is_each_file_extension(make_files(("README", 1, "")), "md") is False

    def test_registered_in_file_registry(self):
        for name in ["required", "isEmpty", "isSingle", "isEachFileType", "isTotalSize"]:
            assert file_registry.is_registered(name)
