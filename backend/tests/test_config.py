"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from kiosk_menu.core.config import Settings


class TestCategoryNameLimit:
    def test_default_fits_column(self):
        assert Settings().kiosk_max_category_name == 100

    @pytest.mark.parametrize("value", [1, 40, 100])
    def test_accepts_values_within_column_width(self, value):
        assert Settings(kiosk_max_category_name=value).kiosk_max_category_name == value

    @pytest.mark.parametrize("value", [0, 101, 255])
    def test_rejects_values_outside_column_width(self, value):
        with pytest.raises(ValidationError):
            Settings(kiosk_max_category_name=value)
