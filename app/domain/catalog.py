"""Demo catalog that seeds every new session."""

from app.domain.models import Book, BookStatus

FALLBACK_COVER_URL = "https://placehold.co/400x600?text=No+Cover"


def _cover(isbn: str) -> str:
    return f"https://covers.openlibrary.org/b/isbn/{isbn}-L.jpg"


_SEED: tuple[dict, ...] = (
    {
        "id": "1",
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "genre": "Classic",
        "description": (
            "A portrait of the Jazz Age told through the mysterious millionaire "
            "Jay Gatsby and his obsession with Daisy Buchanan."
        ),
        "status": BookStatus.AVAILABLE,
        "cover_url": _cover("9780743273565"),
        "rating": 4.5,
    },
    {
        "id": "2",
        "title": "1984",
        "author": "George Orwell",
        "genre": "Dystopian",
        "description": (
            "Winston Smith struggles against a totalitarian regime that watches "
            "every move and rewrites history itself."
        ),
        "status": BookStatus.AVAILABLE,
        "cover_url": _cover("9780451524935"),
        "rating": 4.8,
    },
    {
        "id": "3",
        "title": "To Kill a Mockingbird",
        "author": "Harper Lee",
        "genre": "Classic",
        "description": (
            "A child's view of racial injustice in a small Alabama town, and of "
            "the father who stands against it."
        ),
        "status": BookStatus.UNAVAILABLE,
        "cover_url": _cover("9780061120084"),
        "rating": 4.9,
    },
    {
        "id": "4",
        "title": "Dune",
        "author": "Frank Herbert",
        "genre": "Science Fiction",
        "description": (
            "On the desert planet Arrakis, Paul Atreides is drawn into a war over "
            "the most valuable substance in the universe."
        ),
        "status": BookStatus.AVAILABLE,
        "cover_url": _cover("9780441172719"),
        "rating": 4.7,
    },
    {
        "id": "5",
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "genre": "Romance",
        "description": (
            "Elizabeth Bennet and Mr. Darcy spar over manners, marriage and first "
            "impressions in Regency England."
        ),
        "status": BookStatus.AVAILABLE,
        "cover_url": _cover("9780141439518"),
        "rating": 4.6,
    },
    {
        "id": "6",
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "genre": "Fantasy",
        "description": (
            "Bilbo Baggins is swept from his comfortable hole into a quest for a "
            "dragon's hoard."
        ),
        "status": BookStatus.AVAILABLE,
        "cover_url": _cover("9780547928227"),
        "rating": 4.7,
    },
    {
        "id": "7",
        "title": "Sapiens",
        "author": "Yuval Noah Harari",
        "genre": "History",
        "description": (
            "A brief history of humankind, from foraging bands to the scientific "
            "and industrial revolutions."
        ),
        "status": BookStatus.AVAILABLE,
        "cover_url": _cover("9780062316097"),
        "rating": 4.4,
    },
    {
        "id": "8",
        "title": "A Brief History of Time",
        "author": "Stephen Hawking",
        "genre": "Science",
        "description": (
            "Black holes, the big bang and the nature of time explained for the "
            "general reader."
        ),
        "status": BookStatus.UNAVAILABLE,
        "cover_url": _cover("9780553380163"),
        "rating": 4.3,
    },
)


def initial_books() -> list[Book]:
    """Return a fresh, independently mutable copy of the demo catalog."""
    return [Book(**row) for row in _SEED]
