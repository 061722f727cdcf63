"""
Tests for loading listings from CSV and Excel exports.

Run with: pytest tests/test_listings_loader.py -v
"""

import pandas as pd
import pytest

from listings_loader import (
    ListingsLoadError,
    get_listing_statistics,
    load_listings,
    normalize_category,
    normalize_column,
    parse_price,
)
from engine.vocabulary import Vocabulary


@pytest.fixture
def listings_csv(tmp_path):
    """An admin export with one untitled row and one unpriced row."""
    path = tmp_path / "listings.csv"
    path.write_text(
        "Name,Description,Asking Price,Condition,Category,ID\n"
        'Dell laptop,Lightly used,"₹14,000",used,Electronics,1\n'
        ",No title,500,New,furniture,2\n"
        "Office chair,,free,Like New,Furniture,3\n"
        "Study table,Wooden,1500,second hand,Furniture,4\n",
        encoding="utf-8",
    )
    return path


class TestLoadCsv:
    """Test CSV loading end to end."""

    def test_rows_loaded(self, listings_csv):
        items = load_listings(str(listings_csv))

        assert [item.title for item in items] == ["Dell laptop", "Study table"]
        assert [item.item_id for item in items] == ["1", "4"]

    def test_fields_normalised(self, listings_csv):
        laptop, table = load_listings(str(listings_csv))

        assert laptop.price == 14000.0
        assert laptop.condition == "Used"
        assert laptop.category_slug == "electronics"
        assert laptop.description == "Lightly used"
        assert table.condition == "Used"
        assert table.category_slug == "furniture"

    def test_statistics(self, listings_csv):
        stats = get_listing_statistics(load_listings(str(listings_csv)))

        assert stats["total"] == 2
        assert stats["by_category"] == {"electronics": 1, "furniture": 1}
        assert stats["by_condition"] == {"Used": 2}
        assert stats["min_price"] == 1500
        assert stats["max_price"] == 14000
        assert stats["avg_price"] == 7750.0


class TestLoadExcel:
    """Test Excel loading."""

    def test_xlsx(self, tmp_path):
        path = tmp_path / "listings.xlsx"
        pd.DataFrame({
            "Title": ["Engineering Mathematics", "Study lamp"],
            "Price": [300, 450],
            "Condition": ["pre owned", "Brand New"],
            "Category Slug": ["books-and-stationery", "electronics"],
        }).to_excel(path, index=False)

        items = load_listings(str(path))

        assert [item.title for item in items] == ["Engineering Mathematics", "Study lamp"]
        assert [item.condition for item in items] == ["Used", "New"]
        assert items[0].price == 300.0
        assert items[0].description == ""
        assert items[0].item_id is None


class TestLoadErrors:
    """Test files that can't be read at all."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ListingsLoadError):
            load_listings(str(tmp_path / "missing.csv"))

    def test_unsupported_type(self, tmp_path):
        path = tmp_path / "listings.txt"
        path.write_text("title,price\nchair,100\n")

        with pytest.raises(ListingsLoadError):
            load_listings(str(path))


class TestHelpers:
    """Test the parsing helpers."""

    @pytest.mark.parametrize("header,field", [
        ("Asking Price", "price"),
        ("Category Slug", "category_slug"),
        (" NAME ", "title"),
        ("title", "title"),
        ("Seller Phone", "seller_phone"),
    ])
    def test_normalize_column(self, header, field):
        assert normalize_column(header) == field

    @pytest.mark.parametrize("value,expected", [
        (15000, 15000.0),
        ("₹1,50,000", 150000.0),
        ("Rs. 799.50", 799.5),
        ("free", None),
        ("", None),
        (float("nan"), None),
        (None, None),
    ])
    def test_parse_price(self, value, expected):
        assert parse_price(value) == expected

    def test_normalize_category(self):
        assert normalize_category("Books and Stationery") == "books-and-stationery"
        assert normalize_category(None) == ""

    def test_custom_vocabulary(self, tmp_path):
        path = tmp_path / "listings.csv"
        path.write_text("title,price,condition\nSofa,900,pre loved\n")
        vocab = Vocabulary.from_tables({"Used": ["pre loved"]}, {}, {}, conditions=("Used",))

        assert load_listings(str(path), vocabulary=vocab)[0].condition == "Used"
