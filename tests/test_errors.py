"""Tests for the larder exception hierarchy."""

import pytest

from larder.errors import ConfigurationError, Forbidden, HTTPError, LarderError, NotFound


class TestHierarchy:
    @pytest.mark.parametrize("cls", [ConfigurationError, HTTPError, NotFound, Forbidden])
    def test_all_derive_from_larder_error(self, cls: type) -> None:
        assert issubclass(cls, LarderError)

    def test_not_found(self) -> None:
        exc = NotFound()
        assert exc.status == 404
        assert str(exc) == "404: Not Found"

    def test_forbidden_default_detail(self) -> None:
        exc = Forbidden()
        assert exc.status == 403
        assert exc.detail == "You cannot access this resource."

    def test_http_error_without_detail(self) -> None:
        assert str(HTTPError(status=503)) == "503"

    def test_http_error_is_immutable(self) -> None:
        exc = HTTPError(status=500)
        with pytest.raises(AttributeError):
            exc.status = 200  # type: ignore[misc]
