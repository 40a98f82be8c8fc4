"""RAML — a small REST API that documents itself.

Articles CRUD plus a mounted admin sub-router. The routes double as
fixture data for the docs generator: every handler's docstring becomes
its resource description, and the middleware chain is drawn around it.

Run:
    trill routes examples.raml.app:create_app
    trill docs examples.raml.app:create_app --title "Articles API" -o api.raml
"""

import itertools
from dataclasses import asdict, dataclass, replace

from trill import Mux, Request
from trill.introspect import describe
from trill.middleware import Next, logger, recoverer, request_id

# ---------------------------------------------------------------------------
# Storage (owned by the app instance, never shared between apps)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Article:
    id: str
    title: str


class ArticleStore:
    """In-memory article storage."""

    def __init__(self, articles: list[Article] | None = None) -> None:
        self._articles: list[Article] = list(articles or ())
        start = max((int(a.id) for a in self._articles), default=0) + 1
        self._ids = itertools.count(start)

    def all(self) -> list[Article]:
        return list(self._articles)

    def get(self, article_id: str) -> Article | None:
        for article in self._articles:
            if article.id == article_id:
                return article
        return None

    def add(self, title: str) -> Article:
        article = Article(id=str(next(self._ids)), title=title)
        self._articles.append(article)
        return article

    def update(self, article: Article) -> Article:
        self._articles = [article if a.id == article.id else a for a in self._articles]
        return article

    def remove(self, article_id: str) -> Article | None:
        article = self.get(article_id)
        if article is not None:
            self._articles.remove(article)
        return article


def fixture_articles() -> list[Article]:
    return [Article(id="1", title="Hi"), Article(id="2", title="sup")]


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


class StoreContext:
    """StoreContext makes the article store available to handlers.

    Handlers read it from ``request.context["store"]``.
    """

    __slots__ = ("store",)

    def __init__(self, store: ArticleStore) -> None:
        self.store = store

    async def __call__(self, request: Request, next: Next):
        return await next(request.with_context(store=self.store))


async def article_ctx(request: Request, next: Next):
    """ArticleCtx loads an Article from the URL parameters.

    In case the Article could not be found, we stop here and return a 404.
    """
    article = request.context["store"].get(request.param("article_id"))
    if article is None:
        return {"error": "Not Found"}, 404
    return await next(request.with_context(article=article))


async def paginate(request: Request, next: Next):
    """Paginate reads page and limit query parameters.

    It's just a stub: the values are passed down the chain untouched.
    """
    page = request.query.get_int("page", default=1) or 1
    limit = request.query.get_int("limit", default=50) or 50
    return await next(request.with_context(page=page, limit=limit))


async def admin_only(request: Request, next: Next):
    """AdminOnly restricts access to just administrators."""
    if request.headers.get("x-acl-admin") != "true":
        return "Forbidden", 403
    return await next(request)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def index(request: Request):
    """Root. Says hello."""
    return "root."


def ping(request: Request):
    """Ping answers pong. Useful as a liveness probe."""
    return "pong"


def panic(request: Request):
    """Panic always fails. The recoverer turns it into a 500."""
    raise RuntimeError("test")


def list_articles(request: Request):
    """ListArticles returns an array of Articles."""
    articles = request.context["store"].all()
    start = (request.context["page"] - 1) * request.context["limit"]
    return [asdict(a) for a in articles[start : start + request.context["limit"]]]


def search_articles(request: Request):
    """SearchArticles searches the Articles data for a matching article.

    Filters by the ``q`` query parameter, case-insensitively.
    """
    q = (request.query.get("q") or "").lower()
    return [asdict(a) for a in request.context["store"].all() if q in a.title.lower()]


async def create_article(request: Request):
    """CreateArticle persists the posted Article. The stored Article is returned
    back to the client as an acknowledgement.
    """
    data = request.json()
    title = data.get("title") if isinstance(data, dict) else None
    if not title:
        return {"error": "title is required"}, 422
    article = request.context["store"].add(title)
    return asdict(article), 201


def get_article(request: Request):
    """GetArticle returns the specific Article. The Article was already loaded
    by ArticleCtx, so it's read right off the request context.
    """
    return asdict(request.context["article"])


async def update_article(request: Request):
    """UpdateArticle updates an existing Article in our store.

    The ``id`` field in the body is ignored.
    """
    data = request.json()
    article = request.context["article"]
    if isinstance(data, dict) and "title" in data:
        article = request.context["store"].update(replace(article, title=str(data["title"])))
    return asdict(article)


def delete_article(request: Request):
    """DeleteArticle removes an existing Article from our store."""
    request.context["store"].remove(request.context["article"].id)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------


def admin_router() -> Mux:
    """A completely separate router for administrator routes."""
    r = Mux()
    r.use(admin_only)
    r.get("/", describe("Admin index.")(lambda request: "admin: index"))
    r.get("/accounts", lambda request: "admin: list accounts..")
    r.get("/users/:user_id", lambda request: f"admin: view user id {request.param('user_id')}")
    return r


def create_app(store: ArticleStore | None = None) -> Mux:
    """Build the API with its own article store."""
    store = store if store is not None else ArticleStore(fixture_articles())

    r = Mux()
    r.use(request_id, logger, recoverer, StoreContext(store))

    r.get("/", index)
    r.get("/ping", ping)
    r.get("/panic", panic)

    def articles(r: Mux) -> None:
        r.with_(paginate).get("/", list_articles)
        r.post("/", create_article)
        r.get("/search", search_articles)

        def article(r: Mux) -> None:
            r.use(article_ctx)
            r.get("/", get_article)
            r.put("/", update_article)
            r.delete("/", delete_article)

        r.route("/:article_id", article)

    r.route("/articles", articles)

    # Same as r.route("/admin", ...) with the routes inline
    r.mount("/admin", admin_router())

    return r
