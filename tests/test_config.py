"""Tests for larder.config — frozen option records."""

import dataclasses

import pytest

from larder.config import AppConfig, ServeOptions


class TestServeOptions:
    def test_everything_off_by_default(self) -> None:
        options = ServeOptions()
        assert not any(dataclasses.astuple(options))

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            ServeOptions().enable_etag = True  # type: ignore[misc]

    def test_replace(self) -> None:
        options = dataclasses.replace(ServeOptions(), enable_etag=True)
        assert options.enable_etag
        assert not options.enable_last_modified


class TestAppConfig:
    def test_debug_default(self) -> None:
        assert AppConfig().debug is False
