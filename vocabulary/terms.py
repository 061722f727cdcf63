"""
Curated vocabulary for listing search.

Every table maps a canonical term to its spelling variants, typos and
synonyms. Values are lower-case; canonical condition names keep the
capitalisation the listings store uses ("Used", "New", "Like New").

Within one table a canonical term must never be listed as a variant of a
different canonical term. engine.vocabulary.Vocabulary checks this when it
is built.
"""

# === Term variants ===
# Products, furniture pieces and conditions. Looked up first by the resolver.

TERM_VARIANTS = {
    # Electronics
    "mobile": [
        "mobl", "mobil", "mbl", "moble", "phone", "smartphone", "cell",
        "fone", "phones", "mobiles", "mobilephone",
    ],
    "laptop": [
        "laptp", "lappy", "laptap", "lptop", "labtop", "laptops", "leptop",
        "notebk", "lapto", "lapop",
    ],
    "tablet": ["tab", "tabet", "tbl", "ipad", "tablets", "ipads", "tablt"],
    "computer": [
        "comp", "cmptr", "computr", "comptr", "pc", "desktop", "computers",
        "desktops", "komputer",
    ],

    # Books and stationery
    "books-and-stationery": [
        "book", "books", "textbook", "novel", "study material", "textbooks",
        "novels", "stationery", "pen", "pencil", "notebook", "academic",
        "notes", "guides", "fiction", "non-fiction", "study materials",
        "stationary", "pens", "pencils", "textbk", "txtbook",
    ],

    # Furniture
    "furniture": ["frntr", "furntr", "furn", "furnitures", "furnit"],
    "chair": ["chr", "chairs", "seat", "seats"],
    "table": ["desk", "study table", "tables", "desks"],

    # Conditions
    "Used": [
        "second hand", "2nd hand", "secondhand", "2ndhand", "used",
        "old", "pre owned", "preowned", "pre-owned", "second-hand", "2nd-hand",
        "preloved", "pre loved", "pre-loved",
    ],
    "New": [
        "brand new", "sealed", "packed", "unopened", "fresh", "unused",
        "box packed", "box-packed", "boxed",
    ],
    "Like New": [
        "almost new", "barely used", "mint", "barely-used", "mint condition",
        "gently used", "lightly used", "excellent condition",
    ],
}

# Canonical condition names, in the order the resolver prefers them
CONDITIONS = ("Used", "New", "Like New")


# === Category keywords ===
# Keys are the category slugs used by the listings store.

CATEGORY_KEYWORDS = {
    "books-and-stationery": [
        "book", "textbook", "novel", "study", "course", "notes", "guide",
        "material", "literature", "stationary", "pen", "pencil", "notebook",
        "paper", "academic", "fiction", "non-fiction", "study materials",
        "books", "textbooks", "novels", "guides", "materials", "stationery",
        "pens", "pencils", "notebooks", "papers", "academics",
    ],
    "electronics": [
        "mobile", "phone", "laptop", "computer", "tablet", "charger",
        "headphone", "earphone", "speaker", "keyboard", "mouse",
        "phones", "laptops", "computers", "tablets", "chargers",
        "headphones", "earphones", "speakers", "keyboards", "mice",
        "electronic", "electronics", "gadget", "gadgets", "device", "devices",
    ],
    "furniture": [
        "chair", "table", "desk", "bed", "furniture", "shelf",
        "rack", "storage", "cupboard", "almirah", "chairs",
        "tables", "desks", "beds", "shelves", "racks",
        "cupboards", "almirahs", "furnishing", "furnishings",
    ],
}


# === Specific products ===
# Well-known product nouns. A match here wins over category inference.

PRODUCT_VARIANTS = {
    "laptop": [
        "laptp", "lappy", "laptap", "lptop", "labtop", "laptops", "leptop",
        "notebk", "lapto", "lapop",
    ],
    "tablet": ["tab", "tabet", "tbl", "ipad", "tablets", "ipads", "tablt"],
    "mobile": ["mobl", "mobil", "mbl", "moble", "mobiles", "mobilephone"],
    "phone": [
        "fone", "phne", "phon", "phones", "smartphone", "smartphones",
        "cell", "cellphone",
    ],
    "computer": ["comp", "cmptr", "pc", "desktop", "komputer"],
}
