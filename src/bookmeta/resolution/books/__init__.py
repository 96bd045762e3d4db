"""Book metadata providers."""

from bookmeta.resolution.books.crossref import CrossrefProvider
from bookmeta.resolution.books.google_books import GoogleBooksProvider
from bookmeta.resolution.books.internet_archive import InternetArchiveProvider
from bookmeta.resolution.books.isbndb import ISBNdbProvider
from bookmeta.resolution.books.library_of_congress import LibraryOfCongressProvider
from bookmeta.resolution.books.openlibrary import OpenLibraryProvider
from bookmeta.resolution.books.trove import TroveProvider
from bookmeta.resolution.books.wikidata import WikidataProvider

__all__ = [
    "CrossrefProvider",
    "GoogleBooksProvider",
    "ISBNdbProvider",
    "InternetArchiveProvider",
    "LibraryOfCongressProvider",
    "OpenLibraryProvider",
    "TroveProvider",
    "WikidataProvider",
]
