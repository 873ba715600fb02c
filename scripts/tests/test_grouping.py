"""Tests for image discovery and grouping."""

import pytest

from product_import.grouping import group_files_by_product, product_group_key, read_image_files


class TestProductGroupKey:
    def test_key_uses_name_size_and_price(self):
        assert product_group_key("Plateau GM_100 MAD.jpg") == "Plateau_GM_100"

    def test_missing_parts(self):
        assert product_group_key("Plateau.jpg") == "Plateau_None_None"


class TestGroupFilesByProduct:
    """Tests for group_files_by_product."""

    def test_same_product_images_are_grouped(self):
        groups = group_files_by_product(["A_GM_100 MAD.jpg", "A_GM_100 MAD (2).jpg"])

        assert len(groups) == 1
        assert list(groups.values())[0] == ["A_GM_100 MAD.jpg", "A_GM_100 MAD (2).jpg"]

    def test_different_price_is_a_different_product(self):
        groups = group_files_by_product(["Bol GM_100 MAD.jpg", "Bol GM_120 MAD.jpg"])
        assert len(groups) == 2

    def test_different_size_is_a_different_product(self):
        groups = group_files_by_product(["Bol GM_100 MAD.jpg", "Bol PM_100 MAD.jpg"])
        assert len(groups) == 2

    def test_order_is_preserved(self):
        files = [
            "Coupe MM_80 MAD.png",
            "Bol PM_50 MAD.png",
            "Coupe MM_80 MAD_2.png",
        ]
        groups = group_files_by_product(files)

        assert list(groups.values()) == [
            ["Coupe MM_80 MAD.png", "Coupe MM_80 MAD_2.png"],
            ["Bol PM_50 MAD.png"],
        ]

    def test_every_file_in_exactly_one_group(self):
        files = ["Bol PM_50 MAD.png", "Bol PM_50 MAD_2.png", "Pot_30 MAD.jpg", "Pot_35 MAD.jpg"]
        grouped = [f for group in group_files_by_product(files).values() for f in group]
        assert sorted(grouped) == sorted(files)


class TestReadImageFiles:
    """Tests for read_image_files."""

    def test_only_image_files_sorted(self, image_dir):
        directory = image_dir(["b.jpg", "a.PNG", "notes.txt", "c.jpeg"])
        (directory / "nested.jpg").mkdir()

        assert read_image_files(str(directory)) == ["a.PNG", "b.jpg", "c.jpeg"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_image_files(str(tmp_path / "nope"))
