"""Tests for talsim_sos.core.result module."""

import pytest

from talsim_sos.core.result import Result, ValidationError

pytestmark = [pytest.mark.unit, pytest.mark.quick]

# =============================================================================
# ValidationError
# =============================================================================

class TestValidationError:
    """Tests for ValidationError dataclass."""

    def test_str_basic(self):
        err = ValidationError(field="sos_url", message="is required")
        assert str(err) == "sos_url: is required"

    def test_str_with_value(self):
        err = ValidationError(field="timeout", message="must be positive", value=-1)
        assert str(err) == "timeout: must be positive (got: -1)"

    def test_str_with_suggestion(self):
        err = ValidationError(field="x", message="bad", suggestion="try y")
        assert str(err).endswith(". try y")

    def test_frozen(self):
        err = ValidationError(field="x", message="bad")
        with pytest.raises(AttributeError):
            err.field = "y"


# =============================================================================
# Result
# =============================================================================

class TestResult:
    """Tests for Result creation and access."""

    def test_ok(self):
        r = Result.ok(42)
        assert r.is_ok
        assert not r.is_err
        assert r.errors == ()
        assert r.unwrap() == 42

    def test_err_multiple_errors(self):
        e1 = ValidationError(field="a", message="bad a")
        e2 = ValidationError(field="b", message="bad b")
        r = Result.err(e1, e2)
        assert r.is_err
        assert r.errors == (e1, e2)
        assert r.first_error() == e1

    def test_unwrap_raises_on_error(self):
        r = Result.err(ValidationError(field="x", message="bad"))
        with pytest.raises(ValueError, match="Unwrap called on error"):
            r.unwrap()

    def test_unwrap_raises_on_none_value(self):
        with pytest.raises(ValueError, match="value is None"):
            Result(value=None, errors=()).unwrap()

    def test_format_errors_with_prefix(self):
        r = Result.err(ValidationError(field="a", message="bad a"), ValidationError(field="b", message="bad b"))
        assert r.format_errors(prefix="- ") == "- a: bad a\n- b: bad b"

    def test_first_error_none_on_success(self):
        assert Result.ok(1).first_error() is None
