"""A small REST service for books kept in memory."""

import argparse
import asyncio
import dataclasses
import logging
import random
import signal
import time
from dataclasses import dataclass, field

from aiohttp import web

_log = logging.getLogger(__name__)


def _string(data, key):
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _object(value, what):
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a JSON object")
    return value


@dataclass
class Author:
    id: str = ""
    first_name: str = ""
    last_name: str = ""

    def to_json(self):
        return {"id": self.id, "firstName": self.first_name, "lastName": self.last_name}

    @classmethod
    def from_json(cls, data):
        """Build an author from decoded JSON; missing fields stay empty."""
        data = _object(data, "author")
        return cls(_string(data, "id"), _string(data, "firstName"), _string(data, "lastName"))


@dataclass
class Book:
    id: str = ""
    title: str = ""
    isbn: str = ""
    author_details: Author = field(default_factory=Author)

    def to_json(self):
        return {
            "id": self.id,
            "title": self.title,
            "isbn": self.isbn,
            "authorDetails": self.author_details.to_json(),
        }

    @classmethod
    def from_json(cls, data):
        """Build a book from decoded JSON; unknown fields are ignored."""
        data = _object(data, "book")
        return cls(
            id=_string(data, "id"),
            title=_string(data, "title"),
            isbn=_string(data, "isbn"),
            author_details=Author.from_json(data.get("authorDetails")),
        )


@dataclass(frozen=True)
class Response:
    """Status reply; empty fields are left out of the JSON form."""

    status: str = ""
    error_code: str = ""
    error_description: str = ""

    def to_json(self):
        pairs = (
            ("status", self.status),
            ("errorCode", self.error_code),
            ("errorDescription", self.error_description),
        )
        return {key: value for key, value in pairs if value}

    def __str__(self):
        return (
            f'"Status:" {self.status}\n'
            f'"ErrorCode:" {self.error_code}\n'
            f'"ErrorDescription:" {self.error_description}'
        )


NOT_FOUND = Response("Failure", "Not Found", "Book Not Found...")
CREATE_FAILED = Response(
    "Failure", "Internal Server Error", "Error in creating book, Please try again.."
)
MARSHAL_FAILED = Response(
    "Failure", "Internal Server Error", "Error Ocurred due to marshaling the objects"
)
CREATED = Response(status="Book Created Successfully...")
DELETED = Response(status="Book Deleted Successfully...")


class BookStore:
    """Books in insertion order, looked up by id."""

    def __init__(self, books=()):
        self._books = list(books)

    def __iter__(self):
        return iter(list(self._books))

    def __len__(self):
        return len(self._books)

    def find(self, book_id):
        """Return the book with ``book_id``, or None."""
        return next((book for book in self._books if book.id == book_id), None)

    def add(self, book):
        self._books.append(book)
        return book

    def delete(self, book_id):
        """Remove and return the book with ``book_id``; KeyError if absent."""
        book = self.find(book_id)
        if book is None:
            raise KeyError(book_id)
        self._books.remove(book)
        return book

    def replace(self, book_id, book):
        """Swap in ``book`` under ``book_id`` (id kept), moving it to the end."""
        self.delete(book_id)
        updated = dataclasses.replace(book, id=book_id)
        self._books.append(updated)
        return updated


def seed_books():
    """A store holding the three sample books."""
    return BookStore(
        [
            Book("1", "C Programming", "123-asdf-23-sd-23", Author("1", "Dennis", "Ritche")),
            Book("2", "Go Programming", "124-asdf-23-sd-23", Author("1", "Kevin", "Vyene")),
            Book("3", "Java Programming", "125-asdf-23-sd-23", Author("1", "Radu", "Alex")),
        ]
    )


def _reply(payload, status=200):
    return web.json_response(payload, status=status)


@web.middleware
async def _logging_middleware(request, handler):
    _log.info("%s %s %s", request.remote, request.method, request.rel_url)
    start = time.perf_counter()
    try:
        return await handler(request)
    finally:
        _log.info("Request and Response Duration %.6fs", time.perf_counter() - start)


def create_app(store=None):
    """Build the web app serving ``store`` (the sample books when not given)."""
    store = seed_books() if store is None else store

    async def get_books(request):
        return _reply([book.to_json() for book in store])

    async def get_book(request):
        book = store.find(request.match_info["id"])
        if book is None:
            return _reply(NOT_FOUND.to_json(), 404)
        return _reply(book.to_json())

    async def create_book(request):
        try:
            book = Book.from_json(await request.json())
        except ValueError:
            return _reply(CREATE_FAILED.to_json(), 500)
        book = store.add(dataclasses.replace(book, id=str(random.randrange(100000))))
        _log.info("Book Created %s", book)
        return _reply(CREATED.to_json(), 201)

    async def delete_book(request):
        try:
            store.delete(request.match_info["id"])
        except KeyError:
            return _reply(NOT_FOUND.to_json(), 404)
        return _reply(DELETED.to_json())

    async def update_book(request):
        book_id = request.match_info["id"]
        if store.find(book_id) is None:
            return _reply(NOT_FOUND.to_json(), 404)
        try:
            book = Book.from_json(await request.json())
        except ValueError:
            return _reply(MARSHAL_FAILED.to_json(), 500)
        return _reply(store.replace(book_id, book).to_json())

    app = web.Application(middlewares=[_logging_middleware])
    app.router.add_get("/getBooks", get_books)
    app.router.add_get("/getBook/{id}", get_book)
    app.router.add_post("/createBook", create_book)
    app.router.add_delete("/deleteBook/{id}", delete_book)
    app.router.add_put("/udpateBook/{id}", update_book)
    return app


async def _serve(port, shutdown_timeout):
    runner = web.AppRunner(create_app())
    await runner.setup()
    site = web.TCPSite(runner, port=port)
    await site.start()
    print(f"Starting server on :{port}")

    quit_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, quit_event.set)
    try:
        await quit_event.wait()
    finally:
        for signum in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(signum)

    print("Shutting down server...")
    try:
        await asyncio.wait_for(runner.cleanup(), shutdown_timeout)
    except asyncio.TimeoutError:
        print("Server forced to shutdown: shutdown timeout reached")


def serve(port=8080, shutdown_timeout=10.0):
    """Serve the sample books until SIGINT/SIGTERM, then shut down gracefully."""
    asyncio.run(_serve(port, shutdown_timeout))
    print("Server exited gracefully")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Serve an in-memory book catalogue.")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--shutdown-timeout", type=float, default=10.0)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    serve(args.port, args.shutdown_timeout)
    return 0