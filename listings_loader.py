"""
Listings loader for CSV and Excel exports.

Reads a listings export (one row per listing) into CandidateItem objects
for InMemoryListingRepository. Column headers are matched case-insensitively
through COLUMN_ALIASES, so exports from the marketplace admin ("name",
"asking price", "category") and hand-made sheets ("title", "price",
"category_slug") both load.

Rows without a title or with an unreadable price are skipped and counted.
"""

import re
from pathlib import Path
from typing import List, Optional

import pandas as pd

from engine.context import CandidateItem
from engine.vocabulary import Vocabulary
from engine.structured_logging import get_logger

# Module-level logger
_logger = get_logger("listings_loader")

SUPPORTED_EXTENSIONS = ('.csv', '.xlsx', '.xls')


# =============================================================================
# COLUMN NORMALIZATION MAPPINGS
# =============================================================================
# Maps lower-cased export headers to CandidateItem field names.
# Headers already named after a field need no alias.

COLUMN_ALIASES = {
    # Title
    'name': 'title',
    'item': 'title',
    'item name': 'title',
    'product': 'title',
    'listing': 'title',

    # Description
    'desc': 'description',
    'details': 'description',
    'item description': 'description',

    # Price
    'cost': 'price',
    'amount': 'price',
    'asking price': 'price',
    'price (inr)': 'price',

    # Condition
    'state': 'condition',
    'item condition': 'condition',

    # Category
    'category': 'category_slug',
    'category slug': 'category_slug',
    'slug': 'category_slug',

    # Identifier
    'id': 'item_id',
    'item id': 'item_id',
    'listing id': 'item_id',
}

# Currency marks and separators stripped before parsing a price
PRICE_NOISE = re.compile(r'(?:rs\.?|inr|₹|,|\s)', re.IGNORECASE)


class ListingsLoadError(Exception):
    """Raised when a listings file can't be read at all."""
    pass


# =============================================================================
# PARSING HELPERS
# =============================================================================

def normalize_column(name) -> str:
    """
    Map an export header to a CandidateItem field name.

    Examples:
    - "Asking Price" -> "price"
    - "Category Slug" -> "category_slug"
    - "title" -> "title"
    """
    key = str(name).strip().lower()
    return COLUMN_ALIASES.get(key, key.replace(' ', '_'))


def parse_price(value) -> Optional[float]:
    """
    Parse a price cell.

    Examples:
    - 15000 -> 15000.0
    - "₹1,50,000" -> 150000.0
    - "Rs. 799.50" -> 799.5
    - "free", "" or NaN -> None
    """
    if value is None or pd.isna(value):
        return None

    if isinstance(value, (int, float)):
        return float(value)

    cleaned = PRICE_NOISE.sub('', str(value))
    if not cleaned:
        return None

    try:
        return float(cleaned)
    except ValueError:
        return None


def normalize_category(value) -> str:
    """Category slug form: "Books and Stationery" -> "books-and-stationery"."""
    if value is None or pd.isna(value):
        return ''
    return re.sub(r'\s+', '-', str(value).strip().lower())


def normalize_condition(value, vocabulary: Vocabulary) -> str:
    """
    Canonical condition name where the vocabulary knows it.

    "used", "second hand" -> "Used"; unknown values are kept as written.
    """
    if value is None or pd.isna(value):
        return ''
    text = str(value).strip()
    return vocabulary.lookup_condition(text) or text


def _text(value) -> str:
    if value is None or pd.isna(value):
        return ''
    return str(value).strip()


# =============================================================================
# MAIN LOADER
# =============================================================================

def read_listings_frame(path: str) -> pd.DataFrame:
    """
    Read a listings export into a DataFrame with normalised column names.

    Raises:
        ListingsLoadError: If the file is missing or not CSV/Excel
    """
    file_path = Path(path)
    if not file_path.exists():
        raise ListingsLoadError(f"Listings file not found: {path}")

    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise ListingsLoadError(
            f"Unsupported listings file type '{suffix}' "
            f"(expected one of {', '.join(SUPPORTED_EXTENSIONS)})"
        )

    if suffix == '.csv':
        df = pd.read_csv(file_path)
    else:
        df = pd.read_excel(file_path)

    df.columns = [normalize_column(c) for c in df.columns]
    return df


def load_listings(path: str, vocabulary: Optional[Vocabulary] = None) -> List[CandidateItem]:
    """
    Load listings from a CSV or Excel file.

    Args:
        path: Path to a .csv, .xlsx or .xls export
        vocabulary: Used to canonicalise condition names (default vocabulary)

    Returns:
        List of CandidateItem, in file order

    Raises:
        ListingsLoadError: If the file is missing or not CSV/Excel
    """
    vocabulary = vocabulary or Vocabulary.default()
    df = read_listings_frame(path)

    _logger.info(
        f"Loading listings from {path}: {len(df)} rows, {len(df.columns)} columns",
        extra={"event": "listings_load_start"}
    )

    items = []
    skipped = 0
    errors = []

    for idx, row in df.iterrows():
        title = _text(row.get('title'))
        if not title:
            skipped += 1
            if len(errors) < 10:
                errors.append(f"Row {idx}: No title")
            continue

        price = parse_price(row.get('price'))
        if price is None:
            skipped += 1
            if len(errors) < 10:
                errors.append(f"Row {idx}: Unreadable price {row.get('price')!r}")
            continue

        item_id = _text(row.get('item_id')) or None

        items.append(CandidateItem(
            title=title,
            description=_text(row.get('description')),
            price=price,
            condition=normalize_condition(row.get('condition'), vocabulary),
            category_slug=normalize_category(row.get('category_slug')),
            item_id=item_id,
        ))

    _logger.info(
        f"Loaded {len(items)} listings, skipped {skipped}",
        extra={"event": "listings_load_complete", "results": len(items)}
    )
    for err in errors[:5]:
        _logger.warning(f"Skipped listing: {err}", extra={"event": "listing_skipped"})

    return items


def get_listing_statistics(items: List[CandidateItem]) -> dict:
    """
    Get statistics about loaded listings.

    Returns dict with:
    - total: Total listing count
    - by_category: Count by category slug
    - by_condition: Count by condition
    - min_price / max_price / avg_price: Price span (None when empty)
    """
    stats = {
        'total': len(items),
        'by_category': {},
        'by_condition': {},
        'min_price': None,
        'max_price': None,
        'avg_price': None,
    }

    for item in items:
        category = item.category_slug or 'uncategorised'
        stats['by_category'][category] = stats['by_category'].get(category, 0) + 1

        condition = item.condition or 'unknown'
        stats['by_condition'][condition] = stats['by_condition'].get(condition, 0) + 1

    if items:
        prices = [item.price for item in items]
        stats['min_price'] = min(prices)
        stats['max_price'] = max(prices)
        stats['avg_price'] = round(sum(prices) / len(prices), 2)

    return stats
