"""Tests for filename metadata parsing."""

import pytest

from product_import.parser import (
    clean_product_name,
    detect_brand,
    detect_chocolate_type,
    detect_is_gift_box,
    detect_is_premium,
    detect_main_category,
    detect_material,
    detect_shape,
    detect_sub_category,
    detect_tags,
    extract_extension,
    extract_price,
    extract_size_code,
    get_dimensions,
    parse_filename,
)


class TestExtractSizeCode:
    """Tests for size code extraction."""

    def test_size_before_price(self):
        assert extract_size_code("Item GM_500 MAD.jpeg") == "GM"

    def test_no_size(self):
        assert extract_size_code("Item_500 MAD.jpeg") is None

    def test_tgm_is_not_read_as_gm(self):
        assert extract_size_code("Coupe TGM_300 MAD.png") == "TGM"

    def test_lowercase_size_followed_by_space(self):
        assert extract_size_code("coupe pm 300 MAD.jpg") == "PM"

    def test_only_first_size_counts(self):
        assert extract_size_code("Plateau PM MM_100 MAD.jpeg") == "PM"


class TestExtractPrice:
    """Tests for price extraction."""

    def test_price_before_mad(self):
        assert extract_price("Item_999 MAD.jpeg") == 999

    def test_no_price(self):
        assert extract_price("Item.jpeg") is None

    def test_case_insensitive_marker(self):
        assert extract_price("Bol 45mad.jpg") == 45.0

    def test_returns_float(self):
        assert isinstance(extract_price("Bol_120 MAD.png"), float)


class TestCleanProductName:
    """Tests for product name cleanup."""

    def test_strips_size_price_and_extension(self):
        name = clean_product_name(
            "Petit plateau rectangulaire en similicuir rose Alice GM_1000 MAD.jpeg"
        )
        assert name == "Petit plateau rectangulaire en similicuir rose Alice"

    def test_strips_everything_after_price(self):
        assert clean_product_name("Bol en verre_150 MAD (2).png") == "Bol en verre"

    def test_strips_trailing_separators(self):
        assert clean_product_name("A_GM_100 MAD.jpg") == "A"

    def test_extension_is_case_insensitive(self):
        assert clean_product_name("Coupe dorée_80 MAD.JPG") == "Coupe dorée"


class TestExtension:
    def test_known_extension(self):
        assert extract_extension("Bol_10 MAD.PNG") == "png"

    def test_default_extension(self):
        assert extract_extension("Bol_10 MAD") == "jpeg"


class TestDetectMainCategory:
    """Tests for the ordered prefix category table."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Petit plateau doré", "Plateaux"),
            ("Petit pot en verre", "Pots"),
            ("Pot à épices", "Pots"),
            ("Bateau nacre", "Plateaux"),
            ("Coffret royal", "Coffrets"),
            ("ÉCRIN bijoux", "Écrins"),
            ("Vase bleu", "Accessoires"),
        ],
    )
    def test_category(self, name, expected):
        assert detect_main_category(name) == expected

    def test_matches_prefix_only(self):
        assert detect_main_category("Grand plateau") == "Accessoires"


class TestDetectSubCategory:
    """Tests for material-based subcategory detection."""

    def test_material_keyword_is_title_cased(self):
        assert detect_sub_category("Plateau en similicuir rose") == "Similicuir"

    def test_longer_keyword_wins(self):
        assert detect_sub_category("Coupe sur pieds dorée") == "Sur Pieds"

    def test_longer_variant_wins(self):
        assert detect_sub_category("Bol ajourée blanc") == "Ajourée"

    def test_falls_back_to_descriptive_words(self):
        assert detect_sub_category("Vase grand modèle doré") == "modèle doré"

    def test_short_name_is_divers(self):
        assert detect_sub_category("Vase bleu") == "Divers"


class TestDetectBrand:
    """Tests for brand detection."""

    def test_collection_jeff(self):
        assert detect_brand("Coupe Collection Jeff dorée") == "Collection Jeff"

    def test_brand_keyword_case_insensitive(self):
        assert detect_brand("Bol murano bleu") == "Murano"

    def test_brand_keyword_with_punctuation(self):
        assert detect_brand("Plateau Alice, rose") == "Alice"

    def test_capitalized_last_word(self):
        assert detect_brand("Plateau doré Fantasia") == "Fantasia"

    def test_color_is_not_a_brand(self):
        assert detect_brand("Plateau Rouge") is None

    def test_no_brand(self):
        assert detect_brand("Plateau doré") is None


class TestDetectAttributes:
    """Tests for shape, material, chocolate type, tags and flags."""

    def test_shape(self):
        assert detect_shape("Boîte cadeau rectangulaire") == "Rectangulaire"
        assert detect_shape("Plateau carré") == "Carré"
        assert detect_shape("Plateau") is None

    def test_material_from_keyword_list(self):
        assert detect_material("Plateau en inox") == "Inox"

    def test_material_fallback(self):
        assert detect_material("Corbeille en osier") == "Osier"
        assert detect_material("Coupe simili cuir") == "Similicuir"

    def test_no_material(self):
        assert detect_material("Bol bleu") is None

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Coffret chocolat noir", "noir"),
            ("Boîte assortiment varié", "assortiment"),
            ("Coffret lait", "lait"),
            ("Plateau blanc", "blanc"),
            ("Boîte cadeau rectangulaire", "assortiment"),
            ("Plateau doré", None),
        ],
    )
    def test_chocolate_type(self, name, expected):
        assert detect_chocolate_type(name) == expected

    def test_tags_keep_repeats_in_rule_order(self):
        assert detect_tags("Coffret VIP royal") == ["premium", "VIP", "premium", "cadeau"]

    def test_no_tags(self):
        assert detect_tags("Bol bleu") == []

    def test_gift_box(self):
        assert detect_is_gift_box("Boîte cadeau") is True
        assert detect_is_gift_box("Plateau") is False

    def test_premium(self):
        assert detect_is_premium("Coupe Luxe") is True
        assert detect_is_premium("Coupe simple") is False


class TestDimensions:
    def test_known_size(self):
        assert get_dimensions("GM") == "Grand Modèle (40cm)"

    def test_no_size(self):
        assert get_dimensions(None) == "Standard"

    def test_unknown_size(self):
        assert get_dimensions("XL") == "XL"


class TestParseFilename:
    """End-to-end filename scenarios."""

    def test_tray_scenario(self):
        metadata = parse_filename(
            "Petit plateau rectangulaire en similicuir rose Alice GM_1000 MAD.jpeg"
        )

        assert metadata.base_name == "Petit plateau rectangulaire en similicuir rose Alice"
        assert metadata.main_category == "Plateaux"
        assert "Similicuir" in metadata.sub_category
        assert metadata.brand == "Alice"
        assert metadata.size_code == "GM"
        assert metadata.price == 1000
        assert metadata.shape == "Rectangulaire"
        assert metadata.material == "Similicuir"
        assert metadata.extension == "jpeg"

    def test_gift_box_scenario(self):
        metadata = parse_filename("Boîte cadeau rectangulaire PM_220 MAD.jpeg")

        assert metadata.base_name == "Boîte cadeau rectangulaire"
        assert metadata.main_category == "Boîtes"
        assert metadata.is_gift_box is True
        assert metadata.size_code == "PM"
        assert metadata.price == 220
        assert metadata.chocolate_type == "assortiment"
        assert metadata.tags == ["cadeau"]
        assert metadata.brand is None

    def test_missing_price(self):
        metadata = parse_filename("Plateau doré.jpeg")
        assert metadata.price is None
        assert metadata.base_name == "Plateau doré"

    def test_is_deterministic(self):
        filename = "Coffret VIP en bois GM_750 MAD.png"
        assert parse_filename(filename) == parse_filename(filename)
