"""Tests for filename and product validation."""

import pytest

from product_import.validators import (
    ProductValidationError,
    ensure_valid_product,
    validate_filename,
    validate_product_data,
)


class TestValidateFilename:
    def test_valid(self):
        assert validate_filename("Plateau doré_100 MAD.jpeg") == []

    def test_missing_price(self):
        assert validate_filename("Plateau doré.jpeg") == ["No price found in filename"]

    def test_short_name(self):
        assert validate_filename("Ab_100 MAD.jpeg") == ["Product name too short or empty"]

    def test_bad_extension(self):
        errors = validate_filename("Plateau_100 MAD.gif")
        assert errors == ["Invalid file extension (must be .jpeg, .jpg, or .png)"]


class TestValidateProductData:
    """Tests for validate_product_data."""

    def test_valid(self, make_product):
        assert validate_product_data(make_product()) == []

    @pytest.mark.parametrize("price", [0, -5, None])
    def test_invalid_price(self, make_product, price):
        assert "Invalid price" in validate_product_data(make_product(initial_price=price))

    def test_missing_identity(self, make_product):
        errors = validate_product_data(make_product(ref="", slug=""))
        assert "Product reference is missing" in errors
        assert "Product slug is missing" in errors

    def test_short_name(self, make_product):
        assert validate_product_data(make_product(name="Ab")) == ["Product name is too short"]

    def test_gallery_with_main_image(self, make_product):
        product = make_product(gallery=["/Photos avec prix/plateau.jpeg"])
        assert validate_product_data(product) == ["Gallery contains the main image"]

    def test_missing_categories(self, make_product):
        errors = validate_product_data(make_product(main_category="", sub_category=""))
        assert errors == ["Main category is missing", "Sub category is missing"]


class TestEnsureValidProduct:
    def test_raises_with_all_errors(self, make_product):
        with pytest.raises(ProductValidationError) as exc_info:
            ensure_valid_product(make_product(initial_price=0, main_image=""))

        assert exc_info.value.ref == "PLA-ALI-GM-1000"
        assert exc_info.value.errors == ["Main image is missing", "Invalid price"]

    def test_valid_product_passes(self, make_product):
        ensure_valid_product(make_product())
